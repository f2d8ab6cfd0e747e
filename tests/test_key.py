import pytest

from assetkit.key import AssetKey, AssetType


class X:
    EXTENSION = "x"


class Multi:
    EXTENSIONS = ["png", "jpg"]


class Bare:
    pass


def test_extension_single():
    assert AssetType.of(X).extensions == ("x",)


def test_extensions_many():
    assert AssetType.of(Multi).extensions == ("png", "jpg")


def test_extensions_none():
    assert AssetType.of(Bare).extensions == ()


def test_of_rejects_non_class():
    with pytest.raises(TypeError):
        AssetType.of(X())


def test_type_equality_and_hash():
    assert AssetType.of(X) == AssetType.of(X)
    assert AssetType.of(X) != AssetType.of(Multi)
    assert len({AssetType.of(X), AssetType.of(X), AssetType.of(Multi)}) == 2


def test_type_ordering_is_total():
    types = [AssetType.of(Multi), AssetType.of(X), AssetType.of(Bare)]
    ordered = sorted(types)
    assert sorted(reversed(ordered)) == ordered
    assert all(a < b for a, b in zip(ordered, ordered[1:]))


def test_key_new():
    key = AssetKey.new(X, "test.cache")
    assert key.id == "test.cache"
    assert key.typ == AssetType.of(X)


def test_key_equality_and_hash():
    assert AssetKey.new(X, "a") == AssetKey.new(X, "a")
    assert AssetKey.new(X, "a") != AssetKey.new(X, "b")
    assert AssetKey.new(X, "a") != AssetKey.new(Multi, "a")
    assert {AssetKey.new(X, "a"): 1}[AssetKey.new(X, "a")] == 1


def test_key_ordering_by_id_within_type():
    keys = [AssetKey.new(X, "c"), AssetKey.new(X, "a"), AssetKey.new(X, "b")]
    assert [k.id for k in sorted(keys)] == ["a", "b", "c"]


def test_key_is_frozen():
    key = AssetKey.new(X, "a")
    with pytest.raises(AttributeError):
        key.id = "b"
    assert key.id == "a"
    assert key == AssetKey.new(X, "a")