"""Shared pytest fixtures for MountFS tests."""
import io
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
import yaml

from mountfs.core.path import VirtualPath
from mountfs.namespace.base import Mount, NotFoundError


class EchoMount(Mount):
    """Mount that answers every lookup with the path it was given."""

    def __init__(self, prefix: bytes = b""):
        self.prefix = prefix
        self.calls: List[str] = []

    def open(self, path: VirtualPath):
        self.calls.append(str(path))
        return io.BytesIO(self.prefix + str(path).encode("utf-8"))


class FailingMount(Mount):
    """Mount that fails every lookup."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error if error is not None else NotFoundError("always fails")
        self.calls: List[str] = []

    def open(self, path: VirtualPath):
        self.calls.append(str(path))
        raise self.error


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a source directory with test files."""
    source = temp_dir / "source"
    source.mkdir()

    (source / "file.txt").write_text("Hello World")
    (source / "README.md").write_text("# Test README\n\nTest content")

    (source / "subdir").mkdir()
    (source / "subdir" / "nested.txt").write_text("Nested content")

    (source / "docs").mkdir()
    (source / "docs" / "api.md").write_text("# API Documentation")

    return source


@pytest.fixture
def overlay_dir(temp_dir: Path) -> Path:
    """Create a directory that shadows source_dir/docs when mounted at /docs."""
    overlay = temp_dir / "overlay"
    overlay.mkdir()

    (overlay / "api.md").write_text("# Draft API Documentation")

    return overlay


@pytest.fixture
def echo_mount() -> EchoMount:
    """Mount that returns the requested path as content."""
    return EchoMount()


@pytest.fixture
def make_echo_mount():
    """Factory for echo mounts with a distinguishing prefix."""
    return EchoMount


@pytest.fixture
def make_failing_mount():
    """Factory for mounts that always raise the given error."""
    return FailingMount


@pytest.fixture
def sample_config(source_dir: Path, overlay_dir: Path) -> Dict[str, Any]:
    """Provide a sample MountFS configuration."""
    return {
        "mountfs": {
            "version": "1.0",
            "mounts": [
                {"path": "/", "source": str(source_dir)},
                {"path": "/docs", "type": "physical", "source": str(overlay_dir)},
                {"path": "/motd", "type": "memory", "files": {"/today.txt": "hello"}},
                {
                    "path": "/vendor",
                    "type": "namespace",
                    "mounts": [{"path": "/lib", "source": str(source_dir / "subdir")}],
                },
            ],
            "logging": {"level": "DEBUG", "file": None},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "mounts.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
