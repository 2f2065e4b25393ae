"""Tests for DebuggerConfigRegistry."""

from __future__ import annotations

import pytest

from buildroot_cdt.descriptors.identifiers import tool_name
from buildroot_cdt.registry.debugger import DebuggerConfig, DebuggerConfigRegistry

NAME = tool_name("ARM", "/opt/br")


@pytest.fixture
def registry() -> DebuggerConfigRegistry:
    registry = DebuggerConfigRegistry()
    registry.register("ARM", "arm-linux-", "/opt/br")
    return registry


class TestRegister:

    def test_returns_tool_name_key(self) -> None:
        assert DebuggerConfigRegistry().register("ARM", "arm-linux-", "/opt/br") == NAME

    def test_lookup(self, registry: DebuggerConfigRegistry) -> None:
        assert registry.lookup(NAME) == DebuggerConfig(
            prefix="arm-linux-",
            solib_path="/opt/br",
            debug_name="/opt/br/host/usr/bin/arm-linux-gdb",
        )

    def test_accessors(self, registry: DebuggerConfigRegistry) -> None:
        assert registry.get_solib_path(NAME) == "/opt/br"
        assert registry.get_debug_name(NAME) == "/opt/br/host/usr/bin/arm-linux-gdb"

    def test_reregister_overwrites(self, registry: DebuggerConfigRegistry) -> None:
        registry.register("ARM", "armeb-linux-", "/opt/br")
        assert len(registry) == 1
        assert registry.get_debug_name(NAME).endswith("armeb-linux-gdb")


class TestAbsentNames:
    """Names of toolchains not managed here are answered with None."""

    def test_unknown_name(self, registry: DebuggerConfigRegistry) -> None:
        assert registry.lookup("GNU Linux GCC") is None
        assert registry.get_solib_path("GNU Linux GCC") is None
        assert registry.get_debug_name("GNU Linux GCC") is None
        assert "GNU Linux GCC" not in registry

    def test_clear(self, registry: DebuggerConfigRegistry) -> None:
        registry.clear()
        assert len(registry) == 0
        assert registry.get_solib_path(NAME) is None


def test_names_sorted() -> None:
    registry = DebuggerConfigRegistry()
    registry.register("MIPS", "mipsel-linux-", "/opt/b")
    registry.register("ARM", "arm-linux-", "/opt/a")
    assert registry.names() == [tool_name("ARM", "/opt/a"), tool_name("MIPS", "/opt/b")]
    assert list(registry) == [tool_name("MIPS", "/opt/b"), tool_name("ARM", "/opt/a")]
