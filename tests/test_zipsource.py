import io
import zipfile

import pytest

from assetkit.entry import DirEntry
from assetkit.zipsource import Zip


def make_archive(extra=()):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name in ("common/", "example/", "test/", "test/read_dir/", "test/read_dir/a/", "test/read_dir/b/"):
            archive.writestr(name, b"")
        archive.writestr("test/a.x", b"a")
        archive.writestr("test/b.x", b"-7")
        archive.writestr("test/read_dir/c.txt", b"c")
        archive.writestr("test/read_dir/d", b"d")
        for name, content in extra:
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def source():
    return Zip.from_bytes(make_archive())


def test_read_ok(source):
    assert source.read("test.b", "x") == b"-7"


def test_read_err(source):
    with pytest.raises(FileNotFoundError):
        source.read("test.not_found", "x")


def test_read_dir(source):
    entries = source.read_dir("test.read_dir")
    files = sorted((e.id, e.ext) for e in entries if e.is_file())
    dirs = sorted(e.id for e in entries if e.is_dir())
    assert files == [("test.read_dir.c", "txt"), ("test.read_dir.d", "")]
    assert dirs == ["test.read_dir.a", "test.read_dir.b"]


def test_read_root(source):
    dirs = sorted(e.id for e in source.read_dir("") if e.is_dir())
    assert dirs == ["common", "example", "test"]


def test_read_dir_missing(source):
    with pytest.raises(FileNotFoundError):
        source.read_dir("nowhere")


def test_exists(source):
    assert source.exists(DirEntry.file("test.b", "x"))
    assert not source.exists(DirEntry.file("test.b", "y"))
    assert source.exists(DirEntry.directory("test.read_dir.a"))
    assert not source.exists(DirEntry.directory("test.read_dir.c"))


def test_unsupported_paths_are_skipped():
    source = Zip.from_bytes(make_archive([("../evil.x", b"1"), ("a.b/c.x", b"2")]))
    assert not source.exists(DirEntry.file("evil", "x"))
    assert not source.exists(DirEntry.file("a.b.c", "x"))
    assert not source.exists(DirEntry.directory("a.b"))
    assert source.read("test.b", "x") == b"-7"


def test_parent_dir_in_path():
    source = Zip.from_bytes(make_archive([("test/../other.x", b"9")]))
    assert source.read("other", "x") == b"9"


def test_invalid_archive():
    with pytest.raises(OSError):
        Zip.from_bytes(b"not a zip archive")


def test_open_file(tmp_path):
    path = tmp_path / "test.zip"
    path.write_bytes(make_archive())
    with Zip.open(path) as source:
        assert source.read("test.a", "x") == b"a"


def test_open_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Zip.open(tmp_path / "missing.zip")


def test_from_reader():
    source = Zip.from_reader(io.BytesIO(make_archive()))
    assert source.read("test.read_dir.d", "") == b"d"