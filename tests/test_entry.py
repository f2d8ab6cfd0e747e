import pytest

from assetkit.entry import DirEntry, Empty, Source


class _MemorySource(Source):
    def __init__(self, files):
        self._files = dict(files)

    def read(self, id, ext):
        try:
            return self._files[(id, ext)]
        except KeyError:
            raise FileNotFoundError(id) from None

    def read_dir(self, id):
        return [DirEntry.file(i, e) for (i, e) in self._files]

    def exists(self, entry):
        return entry.is_file() and (entry.id, entry.ext) in self._files


def test_parent_id_of_nested_file():
    entry = DirEntry.file("example.hello.world", "txt")
    assert entry.parent_id() == "example.hello"


def test_parent_id_of_root_is_none():
    assert DirEntry.directory("").parent_id() is None


def test_parent_id_of_top_level_is_root():
    assert DirEntry.directory("test").parent_id() == ""


def test_file_entry_kind_and_fields():
    entry = DirEntry.file("test.b", "x")
    assert entry.is_file()
    assert not entry.is_dir()
    assert entry.id == "test.b"
    assert entry.ext == "x"


def test_directory_entry_kind():
    entry = DirEntry.directory("test.read_dir")
    assert entry.is_dir()
    assert not entry.is_file()
    assert entry.ext is None


def test_file_with_empty_extension_is_still_a_file():
    entry = DirEntry.file("test.read_dir.d", "")
    assert entry.is_file()
    assert entry != DirEntry.directory("test.read_dir.d")


def test_entries_are_hashable_and_compare_by_value():
    a = DirEntry.file("test.a", "x")
    b = DirEntry.file("test.a", "x")
    assert a == b
    assert len({a, b}) == 1


def test_empty_read_raises():
    with pytest.raises(FileNotFoundError):
        Empty().read("test.b", "x")


def test_empty_read_dir_raises():
    with pytest.raises(FileNotFoundError):
        Empty().read_dir("")


def test_empty_exists_is_false():
    source = Empty()
    assert source.exists(DirEntry.file("test.b", "x")) is False
    assert source.exists(DirEntry.directory("")) is False


def test_default_make_source_is_none():
    assert Empty().make_source() is None


def test_default_hot_reloading_is_unsupported():
    with pytest.raises(RuntimeError, match="does not support hot-reloading"):
        Empty().configure_hot_reloading(None)


def test_custom_source_round_trip():
    source = _MemorySource({("test.b", "x"): b"-7"})
    assert source.read("test.b", "x") == b"-7"
    assert source.exists(DirEntry.file("test.b", "x"))
    assert list(source.read_dir("")) == [DirEntry.file("test.b", "x")]


def test_source_is_abstract():
    with pytest.raises(TypeError):
        Source()