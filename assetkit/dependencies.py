"""Graph of dependencies between compound assets, used to reload them in order."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from .key import AssetKey

ReloadFn = Callable[[Any, str], "set[AssetKey] | None"]
"""Reloads a compound from a cache and id; returns its new dependencies or None on failure."""


@dataclass
class _AssetDeps:
    reload: ReloadFn | None = None
    deps: set[AssetKey] = field(default_factory=set)
    rdeps: set[AssetKey] = field(default_factory=set)


class Dependencies:
    """Which assets each asset depends on, and which depend on it."""

    def __init__(self) -> None:
        self._entries: dict[AssetKey, _AssetDeps] = {}

    def insert(
        self,
        asset_key: AssetKey,
        deps: Iterable[AssetKey],
        reload: ReloadFn | None,
    ) -> None:
        """Record the dependencies of ``asset_key`` and how to reload it."""
        deps = set(deps)
        for key in deps:
            self._entries.setdefault(key, _AssetDeps()).rdeps.add(asset_key)

        entry = self._entries.get(asset_key)
        if entry is None:
            self._entries[asset_key] = _AssetDeps(reload=reload, deps=deps)
            return

        removed = entry.deps - deps
        entry.deps = deps
        entry.reload = reload
        for key in removed:
            other = self._entries.get(key)
            if other is not None:
                other.rdeps.discard(asset_key)

    def deps_of(self, key: AssetKey) -> frozenset[AssetKey]:
        """Return the assets ``key`` depends on."""
        entry = self._entries.get(key)
        return frozenset(entry.deps) if entry else frozenset()

    def rdeps_of(self, key: AssetKey) -> frozenset[AssetKey]:
        """Return the assets that depend on ``key``."""
        entry = self._entries.get(key)
        return frozenset(entry.rdeps) if entry else frozenset()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class AssetDepGraph:
    """The assets to reload after some assets changed, in reverse reload order.

    The changed assets themselves are not included; each dependent comes
    before the assets it depends on.
    """

    def __init__(self, dep_graph: Dependencies, changed: Iterable[AssetKey]) -> None:
        visited: set[AssetKey] = set()
        order: list[AssetKey] = []

        def visit(key: AssetKey, add_self: bool) -> None:
            if key in visited:
                return
            entry = dep_graph._entries.get(key)
            if entry is None:
                return
            for rdep in entry.rdeps:
                visit(rdep, True)
            visited.add(key)
            if add_self:
                order.append(key)

        for key in changed:
            visit(key, False)

        self.keys: tuple[AssetKey, ...] = tuple(order)

    def __iter__(self):
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def update(self, deps: Dependencies, cache: Any) -> None:
        """Reload every asset of the graph, dependencies first."""
        for key in reversed(self.keys):
            entry = deps._entries.get(key)
            if entry is None or entry.reload is None:
                continue
            reload = entry.reload
            new_deps = reload(cache, key.id)
            if new_deps is not None:
                deps.insert(key, new_deps, reload)