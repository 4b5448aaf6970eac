"""Tests for include path resolution and normalization."""

import os

from ssinclude.resolution.paths import normalize_path, resolve_include_path, same_path


class TestResolveIncludePath:
    """Test resolution of virtual targets."""

    def test_root_relative_target(self) -> None:
        """Test that a leading slash resolves from the project root."""
        resolved = resolve_include_path("/partials/h.html", "/site/pages/index.html", "/site")
        assert resolved == "/site/partials/h.html"

    def test_root_relative_keeps_root(self) -> None:
        """Test that extra leading slashes do not escape the root."""
        resolved = resolve_include_path("//h.html", "/site/index.html", "/site")
        assert resolved == "/site/h.html"

    def test_file_relative_target(self) -> None:
        """Test resolution from the including file's directory."""
        resolved = resolve_include_path("footer.html", "/site/pages/index.html", "/site")
        assert resolved == "/site/pages/footer.html"

    def test_parent_directory_target(self) -> None:
        """Test that '..' segments are collapsed."""
        resolved = resolve_include_path("../common/nav.html", "/site/pages/index.html", "/site")
        assert resolved == "/site/common/nav.html"

    def test_existence_not_checked(self) -> None:
        """Test that missing files still resolve."""
        resolved = resolve_include_path("nope/missing.html", "/nowhere/doc.html", "/nowhere")
        assert resolved == "/nowhere/nope/missing.html"


class TestNormalizePath:
    """Test path normalization."""

    def test_absolute_path_unchanged(self) -> None:
        """Test an already canonical path."""
        assert normalize_path("/site/index.html") == "/site/index.html"

    def test_backslashes_folded(self) -> None:
        """Test separator folding."""
        assert normalize_path("/site\\partials\\h.html") == "/site/partials/h.html"

    def test_dot_segments_collapsed(self) -> None:
        """Test lexical normalization."""
        assert normalize_path("/site/a/../b/./c.html") == "/site/b/c.html"

    def test_relative_path_made_absolute(self) -> None:
        """Test relative inputs are anchored at the working directory."""
        expected = os.path.abspath("doc.html").replace("\\", "/")
        assert normalize_path("doc.html") == expected

    def test_case_preserved(self) -> None:
        """Test that no case folding happens."""
        assert normalize_path("/Site/Index.HTML") == "/Site/Index.HTML"

    def test_different_routes_compare_equal(self) -> None:
        """Test that root-relative and file-relative routes meet."""
        via_root = resolve_include_path("/common/h.html", "/site/pages/index.html", "/site")
        via_file = resolve_include_path("../common/h.html", "/site/pages/index.html", "/site")

        assert normalize_path(via_root) == normalize_path(via_file)
        assert same_path(via_root, via_file)
