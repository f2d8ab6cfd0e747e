"""Untyped identification of asset types and stored assets."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any


@total_ordering
@dataclass(frozen=True, eq=False)
class AssetType:
    """The type of an asset, compared and hashed by the asset class itself.

    An asset class names the extensions of its files with an ``EXTENSIONS``
    sequence or a single ``EXTENSION`` string.
    """

    asset: type

    @classmethod
    def of(cls, asset: type) -> AssetType:
        """Create the ``AssetType`` of the class ``asset``."""
        if not isinstance(asset, type):
            raise TypeError(f"expected an asset class, got {asset!r}")
        return cls(asset)

    @property
    def extensions(self) -> tuple[str, ...]:
        """The extensions associated with the asset type."""
        extensions = getattr(self.asset, "EXTENSIONS", None)
        if extensions is not None:
            return tuple(extensions)
        extension = getattr(self.asset, "EXTENSION", None)
        if extension is not None:
            return (extension,)
        return ()

    def _sort_key(self) -> tuple[str, str, int]:
        return (self.asset.__module__, self.asset.__qualname__, id(self.asset))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AssetType):
            return NotImplemented
        return self.asset is other.asset

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, AssetType):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self.asset)

    def __repr__(self) -> str:
        return f"AssetType({self.asset.__qualname__})"


@dataclass(frozen=True, order=True)
class AssetKey:
    """An untyped representation of a stored asset: its type and its id."""

    typ: AssetType
    id: str

    @classmethod
    def new(cls, asset: type, id: str) -> AssetKey:
        """Create the key of the asset of class ``asset`` with the given id."""
        return cls(AssetType.of(asset), id)