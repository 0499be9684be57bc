"""Tests for FileScanner recursive discovery."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from edgepurge.filesystem.blacklist import PathFilter
from edgepurge.filesystem.scanner import FileScanner

CSS_JS_JSON = {"css", "js", "json"}


def _relative(paths: list[str], base: Path) -> list[str]:
    """Sorted paths relative to base, with forward slashes."""
    return sorted(Path(p).relative_to(base).as_posix() for p in paths)


class TestScanBasics:
    """Tests for basic scanning behaviour."""

    def test_scan_empty_directory(self, tmp_path: Path) -> None:
        """Scanning an empty directory yields nothing."""
        assert list(FileScanner().scan([tmp_path], CSS_JS_JSON)) == []

    def test_scan_missing_root(self, tmp_path: Path) -> None:
        """Non-existent roots are skipped silently."""
        missing = tmp_path / "does-not-exist"
        assert list(FileScanner().scan([missing], CSS_JS_JSON)) == []

    def test_scan_returns_absolute_paths(self, project_dir: Path) -> None:
        """Every result is an absolute path string."""
        results = list(FileScanner().scan([project_dir], CSS_JS_JSON))
        assert results
        assert all(isinstance(p, str) and os.path.isabs(p) for p in results)

    def test_relative_root_made_absolute(
        self, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative roots are resolved against the working directory."""
        monkeypatch.chdir(project_dir.parent)
        results = list(FileScanner().scan(["site/themes"], {"css"}))
        assert len(results) == 1
        assert os.path.isabs(results[0])
        expected = project_dir / "themes" / "simple" / "css" / "layout.css"
        assert Path(results[0]).resolve() == expected.resolve()

    def test_scan_is_lazy(self, project_dir: Path) -> None:
        """scan returns an iterator that can only be consumed once."""
        iterator = FileScanner().scan([project_dir], CSS_JS_JSON)
        first = list(iterator)
        assert first
        assert list(iterator) == []


class TestScanFiltering:
    """Tests for extension and blacklist filtering."""

    def test_finds_matching_files(self, project_dir: Path) -> None:
        """Theme and bundle files are found, vendor files are not."""
        results = list(FileScanner().scan([project_dir], CSS_JS_JSON))

        assert _relative(results, project_dir) == [
            "assets/_combinedfiles/combined.min-1a933ce.css",
            "assets/_combinedfiles/combined.min-1a933ce.js",
            "themes/simple/css/layout.css",
            "themes/simple/data/menu.json",
            "themes/simple/javascript/script.js",
        ]

    def test_every_result_satisfies_filter(self, project_dir: Path) -> None:
        """Each result has a requested extension and passes the blacklist."""
        path_filter = PathFilter()
        for path in FileScanner(path_filter).scan([project_dir], {"png", "css"}):
            assert path.rsplit(".", 1)[1] in {"png", "css"}
            assert path_filter.accepts(path)

    def test_extension_case_sensitive(self, project_dir: Path) -> None:
        """Upper-case extensions only match upper-case requests."""
        lower = _relative(list(FileScanner().scan([project_dir], {"css"})), project_dir)
        upper = _relative(list(FileScanner().scan([project_dir], {"CSS"})), project_dir)

        assert "themes/simple/css/LEGACY.CSS" not in lower
        assert upper == ["themes/simple/css/LEGACY.CSS"]

    def test_disabling_blacklist_includes_vendor(self, project_dir: Path) -> None:
        """With the blacklist off, framework and node_modules files appear."""
        scanner = FileScanner()
        results = _relative(
            list(scanner.scan([project_dir], CSS_JS_JSON, blacklist_enabled=False)),
            project_dir,
        )

        assert "vendor/silverstripe/framework/src/Dev/Install/client/styles/install.css" in results
        assert "vendor/acme/widgets/client/widget.js" in results
        assert "node_modules/lib/index.js" in results

    def test_blacklist_state_is_reversible(self, project_dir: Path) -> None:
        """Re-enabling the blacklist restores exclusion."""
        scanner = FileScanner()
        before = sorted(scanner.scan([project_dir], CSS_JS_JSON))
        unfiltered = sorted(scanner.scan([project_dir], CSS_JS_JSON, blacklist_enabled=False))
        after = sorted(scanner.scan([project_dir], CSS_JS_JSON))

        assert len(unfiltered) > len(before)
        assert before == after

    def test_custom_blacklist(self, project_dir: Path) -> None:
        """A scanner built with custom rules applies them."""
        scanner = FileScanner(PathFilter(["/themes/"]))
        results = _relative(list(scanner.scan([project_dir], {"css"})), project_dir)

        assert "themes/simple/css/layout.css" not in results
        assert "vendor/silverstripe/framework/src/Dev/Install/client/styles/install.css" in results


class TestScanMultipleRoots:
    """Tests for scanning several roots."""

    def test_overlapping_roots_yield_duplicates(self, project_dir: Path) -> None:
        """A file under two roots is reported once per root."""
        roots = [project_dir / "assets" / "_combinedfiles", project_dir]
        results = list(FileScanner().scan(roots, {"css"}))
        combined = str(project_dir / "assets" / "_combinedfiles" / "combined.min-1a933ce.css")

        assert results.count(combined) == 2

    def test_roots_scanned_in_order(self, project_dir: Path) -> None:
        """Results of the first root come before the second."""
        first = project_dir / "assets"
        second = project_dir / "themes"
        results = list(FileScanner().scan([first, second], {"css"}))

        assert results[0].startswith(str(first))
        assert results[-1].startswith(str(second))


class TestScanErrors:
    """Tests for unreadable directories and symlinks."""

    def test_permission_denied_is_skipped(self, project_dir: Path) -> None:
        """Unreadable directories are skipped with a warning."""
        original_iterdir = Path.iterdir

        def _iterdir(self: Path):  # type: ignore[no-untyped-def]
            if self.name == "themes":
                raise PermissionError("denied")
            return original_iterdir(self)

        with patch.object(Path, "iterdir", _iterdir):
            results = _relative(list(FileScanner().scan([project_dir], {"css"})), project_dir)

        assert results == ["assets/_combinedfiles/combined.min-1a933ce.css"]

    def test_symlinked_directory_not_followed(self, project_dir: Path, tmp_path: Path) -> None:
        """Symlinked directories are not descended into."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "external.css").write_text("a{}")
        try:
            (project_dir / "linked").symlink_to(outside, target_is_directory=True)
        except OSError:
            pytest.skip("symlinks not supported")

        results = list(FileScanner().scan([project_dir], {"css"}))
        assert not any(p.endswith("external.css") for p in results)
