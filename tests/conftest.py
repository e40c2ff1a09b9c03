"""
Pytest configuration and shared fixtures.
"""

import textwrap
from pathlib import Path

import pytest

from config_builder.recorder import RecordingConfig


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def multi_vm_descriptor(fixtures_dir):
    """Return path to the two-machine descriptor fixture."""
    return fixtures_dir / "descriptors" / "multi_vm.yaml"


@pytest.fixture
def override_descriptor(fixtures_dir):
    """Return path to the override descriptor layered on multi_vm.yaml."""
    return fixtures_dir / "descriptors" / "override.yaml"


@pytest.fixture
def unknown_attribute_descriptor(fixtures_dir):
    """Return path to a descriptor with a misspelled synced folder key."""
    return fixtures_dir / "descriptors" / "unknown_attribute.yaml"


@pytest.fixture
def recording_config():
    """Return a fresh recording host configuration object."""
    return RecordingConfig()


@pytest.fixture
def write_descriptor(tmp_path):
    """Write a dedented YAML descriptor to a temp file and return its path."""

    def _write(text: str, name: str = "descriptor.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text))
        return path

    return _write
