"""Tests for the disk-backed and in-memory mounts."""
import os

import pytest

from mountfs.core.constants import ErrorCode
from mountfs.core.path import InvalidPathError, VirtualPath, VirtualPathBuf
from mountfs.namespace import (
    InvalidInputError,
    MemoryMount,
    Namespace,
    NotFoundError,
    PhysicalMount,
)


class TestPhysicalMount:
    """Test PhysicalMount."""

    def test_requires_existing_directory(self, temp_dir):
        with pytest.raises(InvalidInputError) as exc_info:
            PhysicalMount(temp_dir / "missing")
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_rejects_regular_file(self, source_dir):
        with pytest.raises(InvalidInputError):
            PhysicalMount(source_dir / "file.txt")

    def test_accepts_str_and_path(self, source_dir):
        assert PhysicalMount(str(source_dir)).folder == source_dir.resolve()
        assert PhysicalMount(source_dir).folder == source_dir.resolve()

    def test_opens_file(self, source_dir):
        mount = PhysicalMount(source_dir)
        with mount.open(VirtualPath("/subdir/nested.txt")) as f:
            assert f.read() == b"Nested content"

    def test_opens_binary(self, source_dir):
        mount = PhysicalMount(source_dir)
        with mount.open(VirtualPath("/file.txt")) as f:
            assert "b" in f.mode

    def test_accepts_plain_string(self, source_dir):
        with PhysicalMount(source_dir).open("//subdir/./nested.txt") as f:
            assert f.read() == b"Nested content"

    def test_missing_file_not_found(self, source_dir):
        with pytest.raises(NotFoundError):
            PhysicalMount(source_dir).open(VirtualPath("/nope.txt"))

    def test_directory_not_found(self, source_dir):
        with pytest.raises(NotFoundError):
            PhysicalMount(source_dir).open(VirtualPath("/subdir"))

    def test_file_as_directory_not_found(self, source_dir):
        with pytest.raises(NotFoundError):
            PhysicalMount(source_dir).open(VirtualPath("/file.txt/inner"))

    def test_nul_byte_not_found(self, source_dir):
        with pytest.raises(NotFoundError):
            PhysicalMount(source_dir).open(VirtualPath("/a\0b"))

    def test_rejects_parent_segments(self, source_dir):
        with pytest.raises(InvalidPathError):
            PhysicalMount(source_dir / "subdir").open(VirtualPath("/../file.txt"))

    def test_real_path(self, source_dir):
        mount = PhysicalMount(source_dir)
        assert mount.real_path(VirtualPath("/docs/api.md")) == source_dir.resolve() / "docs" / "api.md"

    def test_repr(self, source_dir):
        assert repr(PhysicalMount(source_dir)) == f"PhysicalMount({os.fspath(source_dir.resolve())!r})"

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores file permissions")
    def test_permission_error_propagates(self, source_dir):
        secret = source_dir / "secret.txt"
        secret.write_text("x")
        secret.chmod(0)
        try:
            with pytest.raises(PermissionError):
                PhysicalMount(source_dir).open(VirtualPath("/secret.txt"))
        finally:
            secret.chmod(0o644)


class TestPhysicalInNamespace:
    """Test PhysicalMount behind a Namespace."""

    def test_mount_physical_reads_real_file(self, source_dir):
        ns = Namespace()
        ns.mount_physical("/random/path", source_dir)

        with ns.open("/random/path/file.txt") as f:
            assert f.read() == (source_dir / "file.txt").read_bytes()

    def test_mount_physical_rejects_missing_directory(self, temp_dir):
        ns = Namespace()
        with pytest.raises(InvalidInputError):
            ns.mount_physical("/x", temp_dir / "missing")
        assert len(ns) == 0

    def test_overlay_directory_shadows_source(self, source_dir, overlay_dir):
        ns = Namespace()
        ns.mount_physical("/", source_dir)
        ns.mount_physical("/docs", overlay_dir)

        with ns.open("/docs/api.md") as f:
            assert f.read() == b"# Draft API Documentation"

    def test_nul_byte_falls_back_to_earlier_mount(self, source_dir):
        ns = Namespace()
        ns.mount("/", MemoryMount({"/d/a\0b": "fallback"}))
        ns.mount_physical("/d", source_dir)

        with ns.open("/d/a\0b") as f:
            assert f.read() == b"fallback"

    def test_overlay_falls_back_to_root_directory(self, source_dir, overlay_dir):
        """Files missing from the overlay come from the root mount, full path intact."""
        (source_dir / "docs" / "guide.md").write_text("# Guide")
        ns = Namespace()
        ns.mount_physical("/", source_dir)
        ns.mount_physical("/docs", overlay_dir)

        with ns.open("/docs/guide.md") as f:
            assert f.read() == b"# Guide"


class TestMemoryMount:
    """Test MemoryMount."""

    def test_serves_bytes_and_text(self):
        mount = MemoryMount({"/a.txt": "text", "/b.bin": b"\x00\x01"})

        assert mount.open(VirtualPath("/a.txt")).read() == b"text"
        assert mount.open(VirtualPath("/b.bin")).read() == b"\x00\x01"

    def test_keys_are_canonical(self):
        mount = MemoryMount({"dir//file.txt/": "x"})

        assert VirtualPathBuf("/dir/file.txt") in mount.files
        assert mount.open(VirtualPath("/./dir/file.txt")).read() == b"x"

    def test_missing_is_not_found(self):
        with pytest.raises(NotFoundError):
            MemoryMount().open(VirtualPath("/missing"))

    def test_add_replaces(self):
        mount = MemoryMount({"/a": "old"})
        mount.add("/a", "new")

        assert mount.open(VirtualPath("/a")).read() == b"new"
        assert len(mount) == 1

    def test_add_rejects_parent_segments(self):
        with pytest.raises(InvalidPathError):
            MemoryMount().add("/a/../b", "x")

    def test_contains(self):
        mount = MemoryMount({"/a/b": "x"})

        assert "/a/b" in mount
        assert VirtualPath("a//b") in mount
        assert "/a" not in mount
        assert 3 not in mount

    def test_each_open_is_independent(self):
        mount = MemoryMount({"/a": "abc"})
        first = mount.open(VirtualPath("/a"))
        first.read()

        assert mount.open(VirtualPath("/a")).read() == b"abc"
