"""Shared test helpers for building fake Buildroot output trees.

Each helper creates a minimal but realistic ``host/usr/bin`` layout with
executable stub binaries, and registry files in the format Buildroot writes
to ``~/.buildroot-eclipse.toolchains``.
"""

from __future__ import annotations

import stat
from collections.abc import Iterable
from pathlib import Path


def make_toolchain(
    root: Path,
    prefix: str = "arm-buildroot-linux-gnueabi-",
    tools: Iterable[str] = ("gcc", "g++", "as", "gdb"),
    unprefixed: Iterable[str] = ("pkg-config",),
) -> Path:
    """Create a fake Buildroot output directory with executable tools."""
    bin_dir = root / "host" / "usr" / "bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    names = [f"{prefix}{tool}" for tool in tools] + list(unprefixed)
    for name in names:
        binary = bin_dir / name
        binary.write_text("#!/bin/sh\nexit 0\n")
        binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return root


def write_registry(path: Path, lines: Iterable[str]) -> Path:
    """Write a toolchain registry file, one entry per line."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path


class FakeProbe:
    """CapabilityProbe answering from an in-memory set of binaries.

    ``present`` holds ``(path, prefix + tool)`` pairs.
    """

    def __init__(self, present: Iterable[tuple[str, str]] = ()) -> None:
        self.present = set(present)
        self.calls: list[tuple[str, str, str]] = []

    def exists(self, path: str, prefix: str, tool: str) -> bool:
        self.calls.append((path, prefix, tool))
        return (path, f"{prefix}{tool}") in self.present

    @classmethod
    def with_tools(cls, path: str, prefix: str, *tools: str) -> FakeProbe:
        return cls((path, f"{prefix}{tool}") for tool in tools)


class AnyToolProbe:
    """CapabilityProbe that finds every tool in every installation."""

    def exists(self, path: str, prefix: str, tool: str) -> bool:
        return True
