"""Tests for logical path normalization."""

import pytest

from docfal import LogicalPath, normalize_path


class TestCanonicalForm:
    """Test that equivalent spellings collapse to one canonical path."""

    @pytest.mark.parametrize(
        "spelling",
        ["~/docs/a.md", "docs/a.md", "./docs/a.md", "~/docs/./a.md", "~/x/../docs/a.md", "~\\docs\\a.md", "/docs/a.md"],
    )
    def test_equivalent_spellings(self, spelling):
        """Test that every spelling equals the canonical one."""
        assert LogicalPath.parse(spelling) == LogicalPath.parse("~/docs/a.md")
        assert hash(LogicalPath.parse(spelling)) == hash(LogicalPath.parse("~/docs/a.md"))

    def test_str_is_anchored(self):
        """Test that the text form always starts with the root marker."""
        assert str(LogicalPath.parse("a/b.txt")) == "~/a/b.txt"
        assert normalize_path("temp.txt") == "~/temp.txt"

    def test_root(self):
        """Test the different spellings of the root."""
        for spelling in ("~/", "~", "", ".", "/"):
            root = LogicalPath.parse(spelling)
            assert root.parts == ()
            assert str(root) == "~/"

    def test_escape_above_root_rejected(self):
        """Test that climbing above ~/ raises ValueError."""
        with pytest.raises(ValueError, match="escapes"):
            LogicalPath.parse("~/../etc/passwd")

    def test_non_string_rejected(self):
        """Test that arbitrary objects are not accepted."""
        with pytest.raises(TypeError):
            LogicalPath.parse(42)

    def test_parse_is_idempotent(self):
        """Test that parsing a LogicalPath returns it unchanged."""
        path = LogicalPath.parse("a/b")
        assert LogicalPath.parse(path) is path


class TestFolders:
    """Test folder-like paths used for mount prefixes."""

    def test_trailing_separator_marks_folder(self):
        """Test that a trailing separator makes a folder path."""
        assert LogicalPath.parse("~/a/").is_folder is True
        assert LogicalPath.parse("~/a").is_folder is False
        assert str(LogicalPath.folder("a")) == "~/a/"

    def test_folder_flag_not_part_of_equality(self):
        """Test that the folder flag does not change equality."""
        assert LogicalPath.parse("~/a/") == LogicalPath.parse("~/a")


class TestSegmentMatching:
    """Test segment-wise ancestry."""

    def test_is_under(self):
        """Test matching by whole segments."""
        prefix = LogicalPath.folder("~/a/")
        assert LogicalPath.parse("~/a/temp.txt").is_under(prefix)
        assert LogicalPath.parse("~/a").is_under(prefix)
        assert LogicalPath.parse("~/anything.txt").is_under(LogicalPath.folder("~/"))

    def test_no_substring_match(self):
        """Test that ~/ab/ is not under ~/a/."""
        assert not LogicalPath.parse("~/ab/temp.txt").is_under(LogicalPath.folder("~/a/"))

    def test_relative_to(self):
        """Test computing the suffix below a prefix."""
        path = LogicalPath.parse("~/a/b/c.txt")
        assert path.relative_to(LogicalPath.folder("~/a/")).as_posix() == "b/c.txt"
        with pytest.raises(ValueError):
            path.relative_to(LogicalPath.folder("~/b/"))

    def test_join(self):
        """Test joining a prefix with a relative path."""
        joined = LogicalPath.folder("~/a/") / "b/c.txt"
        assert joined == LogicalPath.parse("~/a/b/c.txt")
        assert joined.name == "c.txt"
        assert joined.parent == LogicalPath.parse("~/a/b")

    def test_sorting(self):
        """Test that paths sort by segments."""
        paths = [LogicalPath.parse(p) for p in ("b.txt", "a/z.txt", "a.txt")]
        assert [str(p) for p in sorted(paths)] == ["~/a/z.txt", "~/a.txt", "~/b.txt"]
