"""Tests for building namespaces from mount tables."""
import pytest

from mountfs.core.validators import ValidationError
from mountfs.infrastructure.config_manager import ConfigManager
from mountfs.namespace import (
    InvalidInputError,
    MemoryMount,
    MountConflictError,
    Namespace,
    PhysicalMount,
    build_namespace,
    load_namespace,
)


def read(namespace, path):
    with namespace.open(path) as f:
        return f.read()


class TestBuildNamespace:
    """Test build_namespace()."""

    def test_builds_all_mount_types(self, sample_config):
        ns = build_namespace(sample_config["mountfs"]["mounts"])

        kinds = [type(mount) for _, mount in ns.mounts()]
        assert kinds == [PhysicalMount, PhysicalMount, MemoryMount, Namespace]

    def test_reads_through_every_mount(self, sample_config):
        ns = build_namespace(sample_config["mountfs"]["mounts"])

        assert read(ns, "/subdir/nested.txt") == b"Nested content"
        assert read(ns, "/docs/api.md") == b"# Draft API Documentation"
        assert read(ns, "/motd/today.txt") == b"hello"
        assert read(ns, "/vendor/lib/nested.txt") == b"Nested content"

    def test_relative_source_uses_base_dir(self, source_dir):
        ns = build_namespace([{"path": "/s", "source": "subdir"}], base_dir=source_dir)

        assert read(ns, "/s/nested.txt") == b"Nested content"

    def test_relative_source_defaults_to_cwd(self, source_dir, monkeypatch):
        monkeypatch.chdir(source_dir)
        ns = build_namespace([{"path": "/s", "source": "docs"}])

        assert read(ns, "/s/api.md") == b"# API Documentation"

    def test_missing_source_directory(self, temp_dir):
        with pytest.raises(InvalidInputError):
            build_namespace([{"path": "/s", "source": str(temp_dir / "missing")}])

    def test_invalid_entry(self):
        with pytest.raises(ValidationError):
            build_namespace([{"path": "/s", "type": "bogus"}])

    def test_conflicting_entries(self):
        mounts = [
            {"path": "/a", "type": "memory"},
            {"path": "/a/b", "type": "memory"},
        ]
        with pytest.raises(MountConflictError):
            build_namespace(mounts)

    def test_later_entries_overlay_earlier(self):
        mounts = [
            {"path": "/m", "type": "memory", "files": {"/f": "first", "/only-first": "1"}},
            {"path": "/m", "type": "memory", "files": {"/f": "second"}},
        ]
        ns = build_namespace(mounts)

        assert read(ns, "/m/f") == b"second"
        assert read(ns, "/m/only-first") == b"1"

    def test_empty_table(self):
        assert len(build_namespace([])) == 0


class TestLoadNamespace:
    """Test load_namespace() from a ConfigManager."""

    def test_from_config_file(self, config_file):
        config = ConfigManager(str(config_file), load_environment=False)
        ns = load_namespace(config)

        assert read(ns, "/motd/today.txt") == b"hello"
        assert len(ns) == 4

    def test_relative_sources_resolve_against_config_file(self, temp_dir, source_dir):
        config_path = temp_dir / "relative.yaml"
        config_path.write_text(
            "mountfs:\n"
            "  version: '1.0'\n"
            "  mounts:\n"
            "    - path: /src\n"
            "      source: source/subdir\n"
        )
        ns = load_namespace(ConfigManager(str(config_path), load_environment=False))

        assert read(ns, "/src/nested.txt") == b"Nested content"

    def test_defaults_give_empty_namespace(self):
        ns = load_namespace(ConfigManager(load_environment=False))
        assert len(ns) == 0

    def test_invalid_section(self):
        config = ConfigManager(load_environment=False)
        config.set("mountfs.mounts", [{"path": "/../x", "source": "/tmp"}])

        with pytest.raises(ValidationError):
            load_namespace(config)
