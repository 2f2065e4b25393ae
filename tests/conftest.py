"""Shared fixtures for buildroot-cdt tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from buildroot_cdt.discovery.models import ToolchainInstallation

from tests.helpers import make_toolchain


@pytest.fixture
def arm_installation() -> ToolchainInstallation:
    """An ARM installation at a fixed, filesystem-independent path."""
    return ToolchainInstallation("/opt/br/output", "arm-linux-", "ARM")


@pytest.fixture
def full_toolchain(tmp_path: Path) -> Path:
    """A Buildroot output tree with both C and C++ compilers."""
    return make_toolchain(tmp_path / "br-arm", prefix="arm-linux-")


@pytest.fixture
def c_only_toolchain(tmp_path: Path) -> Path:
    """A Buildroot output tree without a C++ compiler."""
    return make_toolchain(tmp_path / "br-mips", prefix="mipsel-linux-", tools=("gcc", "as"))
