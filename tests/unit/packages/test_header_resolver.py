"""Unit tests for HeaderResolver."""

import os
from pathlib import Path

import pytest

from fwbuild.packages.header_resolver import HeaderMapping, HeaderResolutionError, HeaderResolver


def symlink(link: Path, target: Path, is_dir: bool = False) -> None:
    """Create a symlink or skip the test where symlinks are unavailable."""
    link.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.symlink(target, link, target_is_directory=is_dir)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported on this system")


@pytest.fixture
def pods_headers(tmp_path):
    """Create a CocoaPods-style aliased header tree.

    Layout:
        Sources/Core/FIRApp.h
        Sources/Core/Private/FIRLogger.h
        Sources/Core/README.md
        project/Pods/Headers/Public/FirebaseCore/FIRApp.h     -> Sources/Core/FIRApp.h
        project/Pods/Headers/Public/FirebaseCore/Private      -> Sources/Core/Private
    """
    sources = tmp_path / "Sources" / "Core"
    (sources / "Private").mkdir(parents=True)
    (sources / "FIRApp.h").write_text("@interface FIRApp\n@end\n")
    (sources / "Private" / "FIRLogger.h").write_text("void FIRLog(void);\n")
    (sources / "README.md").write_text("not a header")

    public = tmp_path / "project" / "Pods" / "Headers" / "Public" / "FirebaseCore"
    symlink(public / "FIRApp.h", sources / "FIRApp.h")
    symlink(public / "Private", sources / "Private", is_dir=True)
    (public / "README.md").write_text("not a header")
    return public


class TestHeaderResolver:
    """Test suite for HeaderResolver."""

    def test_aliased_directory_round_trip(self, tmp_path):
        """Headers/A/b.h with A aliased elsewhere lands at dest/A/b.h."""
        real = tmp_path / "elsewhere" / "real"
        real.mkdir(parents=True)
        (real / "b.h").write_text("int b(void);\n")
        headers = tmp_path / "project" / "Pods" / "Headers"
        symlink(headers / "A", real, is_dir=True)
        destination = tmp_path / "dest"

        HeaderResolver().flatten_headers(headers, destination)

        copied = destination / "A" / "b.h"
        assert copied.read_text() == "int b(void);\n"
        assert not copied.is_symlink()

    def test_flatten_pod_headers(self, pods_headers, tmp_path):
        """Paths are relative to the pod's own headers directory."""
        destination = tmp_path / "Framework" / "Headers"

        copied = HeaderResolver().flatten_headers(pods_headers, destination)

        assert sorted(path.relative_to(destination).as_posix() for path in copied) == [
            "FIRApp.h",
            "Private/FIRLogger.h",
        ]
        assert (destination / "FIRApp.h").read_text() == "@interface FIRApp\n@end\n"
        assert (destination / "Private" / "FIRLogger.h").read_text() == "void FIRLog(void);\n"
        assert not (destination / "FIRApp.h").is_symlink()
        assert not (destination / "README.md").exists()

    def test_map_headers(self, pods_headers, tmp_path):
        """Mappings point at the real header files."""
        mappings = HeaderResolver().map_headers(pods_headers)

        real_sources = Path(os.path.realpath(tmp_path / "Sources" / "Core"))
        assert mappings == [
            HeaderMapping("FIRApp.h", real_sources / "FIRApp.h"),
            HeaderMapping("Private/FIRLogger.h", real_sources / "Private" / "FIRLogger.h"),
        ]

    def test_find_headers_keeps_alias_paths(self, pods_headers):
        """Discovered headers keep their aliased location."""
        headers = HeaderResolver().find_headers(pods_headers)

        assert headers == [pods_headers / "FIRApp.h", pods_headers / "Private" / "FIRLogger.h"]

    def test_plain_files(self, tmp_path):
        """Regular (non-aliased) headers are copied as well."""
        headers = tmp_path / "Pods" / "Headers" / "Private" / "Pod"
        (headers / "nested").mkdir(parents=True)
        (headers / "nested" / "x.h").write_text("x")
        destination = tmp_path / "out"

        HeaderResolver().flatten_headers(headers, destination)

        assert (destination / "nested" / "x.h").read_text() == "x"

    def test_missing_anchor(self, tmp_path):
        """Paths outside Pods/Headers are rejected."""
        headers = tmp_path / "include"
        headers.mkdir()
        (headers / "a.h").write_text("a")

        with pytest.raises(HeaderResolutionError, match="Pods/Headers"):
            HeaderResolver().flatten_headers(headers, tmp_path / "out")

    def test_strip_anchor(self, tmp_path):
        """Test anchor stripping for files and directories."""
        resolver = HeaderResolver()
        headers = tmp_path / "Pods" / "Headers"

        assert resolver.strip_anchor(headers, is_dir=True) == ""
        assert resolver.strip_anchor(headers / "Public" / "Pod", is_dir=True) == "Public/Pod/"
        assert resolver.strip_anchor(headers / "Public" / "Pod" / "a.h") == "Public/Pod/a.h"

    def test_strip_anchor_normalizes(self, tmp_path):
        """Redundant path components are normalized away."""
        resolver = HeaderResolver()
        path = tmp_path / "Pods" / "Headers" / "Public" / ".." / "Public" / "a.h"

        assert resolver.strip_anchor(path) == "Public/a.h"

    def test_custom_anchor(self, tmp_path):
        """The anchor can be configured."""
        headers = tmp_path / "build" / "include"
        headers.mkdir(parents=True)
        (headers / "a.h").write_text("a")

        copied = HeaderResolver(anchor="build/include").flatten_headers(headers, tmp_path / "out")

        assert copied == [tmp_path / "out" / "a.h"]

    def test_symlink_cycle(self, tmp_path):
        """A directory linking back to its parent is walked once."""
        headers = tmp_path / "Pods" / "Headers"
        headers.mkdir(parents=True)
        (headers / "a.h").write_text("a")
        symlink(headers / "loop", headers, is_dir=True)

        mappings = HeaderResolver().map_headers(headers)

        assert [mapping.relative_path for mapping in mappings] == ["a.h"]

    def test_two_aliases_to_one_directory(self, tmp_path):
        """Every alias of a shared directory gets its own copy of the headers."""
        real = tmp_path / "elsewhere" / "real"
        real.mkdir(parents=True)
        (real / "b.h").write_text("int b(void);\n")
        headers = tmp_path / "project" / "Pods" / "Headers"
        symlink(headers / "A", real, is_dir=True)
        symlink(headers / "B", real, is_dir=True)
        destination = tmp_path / "dest"

        copied = HeaderResolver().flatten_headers(headers, destination)

        assert copied == [destination / "A" / "b.h", destination / "B" / "b.h"]
        assert (destination / "A" / "b.h").read_text() == "int b(void);\n"
        assert (destination / "B" / "b.h").read_text() == "int b(void);\n"

    def test_real_directory_and_alias(self, tmp_path):
        """A directory and an alias to it inside the same tree are both copied."""
        headers = tmp_path / "Pods" / "Headers"
        (headers / "Real").mkdir(parents=True)
        (headers / "Real" / "c.h").write_text("c")
        symlink(headers / "Alias", headers / "Real", is_dir=True)

        mappings = HeaderResolver().map_headers(headers)

        assert [mapping.relative_path for mapping in mappings] == ["Alias/c.h", "Real/c.h"]
        assert mappings[0].resolved_location == mappings[1].resolved_location

    def test_copy_failure(self, pods_headers, tmp_path):
        """Copy errors are reported as HeaderResolutionError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(HeaderResolutionError, match="Failed to copy headers"):
            HeaderResolver().flatten_headers(pods_headers, blocker / "Headers")

    def test_empty_tree(self, tmp_path):
        """A headers directory without headers copies nothing."""
        headers = tmp_path / "Pods" / "Headers"
        headers.mkdir(parents=True)

        assert HeaderResolver().flatten_headers(headers, tmp_path / "out") == []
        assert (tmp_path / "out").is_dir()
