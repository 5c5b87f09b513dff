"""Tests for the DiskStore and MemoryStore physical stores."""

import pytest

from docfal import DiskStore, FileStore, MemoryStore


@pytest.fixture(params=["disk", "memory"])
def store(request, tmp_path):
    if request.param == "disk":
        return DiskStore(tmp_path / "root", create=True)
    return MemoryStore()


class TestStoreProtocol:
    """Behaviour shared by every store."""

    def test_implements_protocol(self, store):
        """Test that both stores satisfy the FileStore protocol."""
        assert isinstance(store, FileStore)

    def test_write_and_read(self, store):
        """Test writing bytes and reading them back."""
        store.write("a/b/c.txt", b"deep")
        assert store.read("a/b/c.txt") == b"deep"
        assert store.exists("a/b/c.txt") is True

    def test_overwrite(self, store):
        """Test that a second write replaces the content."""
        store.write("f.txt", b"one")
        store.write("f.txt", b"two")
        assert store.read("f.txt") == b"two"

    def test_read_missing_raises(self, store):
        """Test that reading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            store.read("missing.txt")

    def test_write_rejects_text(self, store):
        """Test that only bytes are accepted."""
        with pytest.raises(TypeError, match="Expected bytes"):
            store.write("f.txt", "text")

    def test_copy(self, store):
        """Test copying leaves the source alone."""
        store.write("src.txt", b"data")
        store.copy("src.txt", "sub/dst.txt")
        assert store.read("sub/dst.txt") == b"data"
        assert store.read("src.txt") == b"data"

    def test_list_files(self, store):
        """Test recursive listing with relative POSIX paths."""
        store.write("b.txt", b"b")
        store.write("a/x.txt", b"x")
        store.write("a/y/z.txt", b"z")
        assert store.list_files() == ["a/x.txt", "a/y/z.txt", "b.txt"]
        assert store.list_files("a") == ["x.txt", "y/z.txt"]

    def test_remove(self, store):
        """Test removing a file."""
        store.write("gone.txt", b"soon")
        store.remove("gone.txt")
        assert store.exists("gone.txt") is False
        with pytest.raises(FileNotFoundError):
            store.remove("gone.txt")


class TestDiskStore:
    """DiskStore specifics."""

    def test_lands_on_disk(self, tmp_path):
        """Test that files are written under the root."""
        store = DiskStore(tmp_path)
        store.write("a/file.txt", b"hello")
        assert (tmp_path / "a" / "file.txt").read_bytes() == b"hello"
        assert store.physical_path("a/file.txt") == str((tmp_path / "a" / "file.txt").resolve())

    def test_no_temporary_leftovers(self, tmp_path):
        """Test that atomic writes leave only the target behind."""
        store = DiskStore(tmp_path)
        store.write("file.txt", b"1")
        store.write("file.txt", b"2")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["file.txt"]

    def test_escape_rejected(self, tmp_path):
        """Test that paths outside the root raise PermissionError."""
        store = DiskStore(tmp_path / "root", create=True)
        with pytest.raises(PermissionError):
            store.write("../outside.txt", b"nope")
        assert not (tmp_path / "outside.txt").exists()

    def test_root_must_be_directory(self, tmp_path):
        """Test that a file root is rejected."""
        f = tmp_path / "file"
        f.write_bytes(b"")
        with pytest.raises(ValueError, match="must be a directory"):
            DiskStore(f)

    def test_missing_root_lists_nothing(self, tmp_path):
        """Test that a root that does not exist yet behaves as empty."""
        store = DiskStore(tmp_path / "later")
        assert store.list_files() == []
        assert store.exists("x.txt") is False

    def test_destroy(self, tmp_path):
        """Test removing the whole root."""
        store = DiskStore(tmp_path / "root", create=True)
        store.write("f.txt", b"x")
        store.destroy()
        assert not (tmp_path / "root").exists()


class TestMemoryStore:
    """MemoryStore specifics."""

    def test_normalizes_paths(self):
        """Test that equivalent spellings address one file."""
        store = MemoryStore()
        store.write("/a/./b.txt", b"x")
        assert store.read("a/b.txt") == b"x"
        assert store.physical_path("a/b.txt") == "memory:///a/b.txt"

    def test_destroy(self):
        """Test clearing every file."""
        store = MemoryStore()
        store.write("f.txt", b"x")
        store.destroy()
        assert store.list_files() == []
