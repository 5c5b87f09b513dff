"""Tests for the ReadLayer overlay."""

import os

import pytest

from docfal import PathMapping, PathNotFoundError, Provenance, ReadLayer, WriteLayer


@pytest.fixture
def overlay(tmp_path):
    """Two roots on ~/ plus a nested mount on ~/a/."""
    r1 = tmp_path / "r1"
    r2 = tmp_path / "r2"
    nested = tmp_path / "nested"
    for d in (r1, r2, nested / "sub"):
        d.mkdir(parents=True)
    (r1 / "temp1.txt").write_text("r1-temp1", encoding="utf-8")
    (r2 / "temp1.txt").write_text("r2-temp1", encoding="utf-8")
    (r2 / "temp2.txt").write_text("r2-temp2", encoding="utf-8")
    (r2 / "a").mkdir()
    (r2 / "a" / "temp.txt").write_text("r2-a-temp", encoding="utf-8")
    (r2 / "a" / "only-r2.txt").write_text("r2-a-only", encoding="utf-8")
    (nested / "temp.txt").write_text("nested-temp", encoding="utf-8")
    (nested / "sub" / "deep.txt").write_text("nested-deep", encoding="utf-8")
    layer = ReadLayer([
        PathMapping("~/", str(r1), {"origin": "r1"}),
        PathMapping("~/a/", str(nested), {"origin": "nested"}),
        PathMapping("~/", str(r2), {"origin": "r2"}),
    ])
    return layer


class TestReadOverlay:
    """Test shadowing between mount mappings."""

    def test_same_prefix_first_registered_wins(self, overlay):
        """Test that the first ~/ root shadows the second."""
        assert overlay.read_bytes("temp1.txt") == b"r1-temp1"

    def test_same_prefix_fallback(self, overlay):
        """Test that a file only in the second root is still readable."""
        assert overlay.exists("~/temp2.txt") is True
        assert overlay.read_bytes("temp2.txt") == b"r2-temp2"

    def test_longest_prefix_wins(self, overlay):
        """Test that the nested mount beats a ~/ root that also has a/temp.txt."""
        assert overlay.read_bytes("~/a/temp.txt") == b"nested-temp"
        assert overlay.read_bytes("a/sub/deep.txt") == b"nested-deep"

    def test_broader_mount_fills_gaps_below_nested_mount(self, overlay):
        """Test that a file missing from the nested mount falls back to ~/."""
        assert overlay.read_bytes("a/only-r2.txt") == b"r2-a-only"

    def test_missing(self, overlay):
        """Test that unknown paths are reported, not guessed."""
        assert overlay.exists("nope.txt") is False
        with pytest.raises(PathNotFoundError):
            overlay.read_bytes("nope.txt")
        with pytest.raises(FileNotFoundError):
            overlay.read_bytes("nope.txt")

    def test_directory_is_not_a_file(self, overlay):
        """Test that a mounted directory itself does not count as a file."""
        assert overlay.exists("~/a") is False
        assert overlay.exists("~/") is False


class TestReadProperties:
    """Test properties inherited from mappings."""

    def test_properties_from_winning_mapping(self, overlay):
        """Test that each file reports its owning mapping's properties."""
        assert overlay.get_properties("temp1.txt")["origin"] == "r1"
        assert overlay.get_properties("temp2.txt")["origin"] == "r2"
        assert overlay.get_properties("a/temp.txt")["origin"] == "nested"

    def test_properties_are_read_only(self, overlay):
        """Test that callers cannot mutate a mapping's properties."""
        with pytest.raises(TypeError):
            overlay.get_properties("temp1.txt")["origin"] = "x"

    def test_properties_missing_path(self, overlay):
        """Test that unresolved paths raise instead of returning nothing."""
        with pytest.raises(PathNotFoundError):
            overlay.get_properties("nope.txt")

    def test_empty_properties(self, tmp_path):
        """Test that a mapping without properties reports an empty map."""
        (tmp_path / "f.txt").write_bytes(b"x")
        layer = ReadLayer.from_directory(tmp_path)
        assert dict(layer.get_properties("f.txt")) == {}


class TestEnumerate:
    """Test deduplicated enumeration."""

    def test_each_path_once(self, overlay):
        """Test that shadowed duplicates collapse to one entry."""
        files = sorted(str(p) for p in overlay.enumerate())
        assert files == [
            "~/a/only-r2.txt",
            "~/a/sub/deep.txt",
            "~/a/temp.txt",
            "~/temp1.txt",
            "~/temp2.txt",
        ]

    def test_restartable(self, overlay):
        """Test that enumeration can be repeated."""
        assert sorted(overlay.enumerate()) == sorted(overlay.enumerate())

    def test_lazy(self, overlay):
        """Test that enumerate returns an iterator, not a list."""
        it = overlay.enumerate()
        assert iter(it) is it


class TestPhysicalPaths:
    """Test physical location queries."""

    def test_get_physical_path(self, overlay, tmp_path):
        """Test that the winning mapping's file is reported."""
        assert overlay.get_physical_path("temp1.txt") == str((tmp_path / "r1" / "temp1.txt").resolve())
        assert overlay.get_physical_path("a/temp.txt") == str((tmp_path / "nested" / "temp.txt").resolve())
        assert overlay.get_physical_path("nope.txt") is None

    def test_expected_physical_paths(self, overlay, tmp_path):
        """Test every candidate location, best first, existing or not."""
        expected = overlay.get_expected_physical_paths("a/x.txt")
        assert expected == [
            str((tmp_path / "nested" / "x.txt").resolve()),
            str((tmp_path / "r1" / "a" / "x.txt").resolve()),
            str((tmp_path / "r2" / "a" / "x.txt").resolve()),
        ]

    def test_get_entry(self, overlay, tmp_path):
        """Test describing an input file."""
        entry = overlay.get_entry("temp2.txt")
        assert entry.provenance is Provenance.INPUT
        assert entry.location == str((tmp_path / "r2" / "temp2.txt").resolve())
        assert entry.metadata.size == len(b"r2-temp2")
        assert entry.properties["origin"] == "r2"


class TestConstruction:
    """Test the construction modes."""

    def test_requires_mapping(self):
        """Test that an empty mount table is rejected."""
        with pytest.raises(ValueError):
            ReadLayer([])

    def test_from_directory(self, tmp_path):
        """Test mounting one directory at ~/ with shared properties."""
        (tmp_path / "temp.txt").write_text("👍", encoding="utf-8")
        layer = ReadLayer.from_directory(tmp_path, {"test": "true"})
        assert layer.read_bytes("~/temp.txt").decode("utf-8") == "👍"
        assert layer.get_properties("temp.txt") == {"test": "true"}
        assert [str(m.prefix) for m in layer.mappings] == ["~/"]
        assert layer.mappings[0].target == os.fspath(tmp_path)

    def test_from_output_sees_staged_content(self, tmp_path):
        """Test that a write layer's staged index is readable as input."""
        writer = WriteLayer(tmp_path / "publish", staging="memory")
        writer.write_bytes("page.html", b"<p/>", {"kind": "page"})
        layer = ReadLayer.from_output(writer)
        assert layer.read_bytes("page.html") == b"<p/>"
        assert layer.get_properties("page.html") == {"kind": "page"}
        assert [str(p) for p in layer.enumerate()] == ["~/page.html"]
        assert not (tmp_path / "publish").exists()

    def test_from_output_is_live(self, tmp_path):
        """Test that later writes to the prior layer show up."""
        writer = WriteLayer(tmp_path / "publish", staging="memory")
        layer = ReadLayer.from_output(writer)
        assert layer.exists("late.txt") is False
        writer.write_bytes("late.txt", b"late")
        assert layer.exists("late.txt") is True

    def test_output_mapping_properties_layered(self, tmp_path):
        """Test that entry properties override mapping properties."""
        writer = WriteLayer(tmp_path / "publish", staging="memory")
        writer.write_bytes("a.txt", b"a", {"k": "entry"})
        writer.write_bytes("b.txt", b"b")
        layer = ReadLayer([PathMapping("~/", writer, {"k": "mount", "m": "1"})])
        assert layer.get_properties("a.txt") == {"k": "entry", "m": "1"}
        assert layer.get_properties("b.txt") == {"k": "mount", "m": "1"}
