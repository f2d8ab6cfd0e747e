from pathlib import Path

from assetkit.entry import DirEntry
from assetkit.paths import extension_of, path_of_entry


def test_path_of_file_entry(tmp_path):
    expected = tmp_path / "test" / "a.x"
    assert path_of_entry(tmp_path, DirEntry.file("test.a", "x")) == expected


def test_path_of_directory_entry(tmp_path):
    expected = tmp_path / "test" / "read_dir"
    assert path_of_entry(tmp_path, DirEntry.directory("test.read_dir")) == expected


def test_path_of_root_directory(tmp_path):
    assert path_of_entry(tmp_path, DirEntry.directory("")) == tmp_path


def test_path_of_file_with_empty_extension(tmp_path):
    expected = tmp_path / "test" / "read_dir" / "d"
    assert path_of_entry(tmp_path, DirEntry.file("test.read_dir.d", "")) == expected


def test_path_accepts_string_root(tmp_path):
    entry = DirEntry.file("test.b", "x")
    assert path_of_entry(str(tmp_path), entry) == path_of_entry(tmp_path, entry)


def test_extension_of_file_with_extension():
    assert extension_of(Path("test") / "read_dir" / "c.txt") == "txt"


def test_extension_of_file_without_extension():
    assert extension_of(Path("test") / "read_dir" / "d") == ""


def test_extension_of_hidden_file_is_empty():
    assert extension_of(".hidden") == ""


def test_extension_round_trips_through_path_of_entry(tmp_path):
    path = path_of_entry(tmp_path, DirEntry.file("test.b", "x"))
    assert extension_of(path) == "x"
    assert path.stem == "b"