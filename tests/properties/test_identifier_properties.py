"""Property-based tests for generated ids.

Verifies that path normalization is a pure separator-to-dot mapping for
well-formed absolute paths, and that a session never registers two
installations sharing an id, including paths whose segments spell the
words ids are suffixed with (``/a`` next to ``/a/autotools``).
"""
from __future__ import annotations

from pathlib import Path

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from buildroot_cdt.descriptors.builder import DescriptorBuilder
from buildroot_cdt.descriptors.identifiers import ID_NAMESPACE, identifier, normalize_path
from buildroot_cdt.discovery.models import ToolchainInstallation
from buildroot_cdt.registry.sink import InMemorySink
from buildroot_cdt.session import ScanReport, ToolchainSession
from buildroot_cdt.settings import Settings

from tests.helpers import AnyToolProbe, FakeProbe


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Words that appear in id suffixes, mixed with arbitrary names.
suffix_words = st.sampled_from([
    "autotools", "toolchain", "base", "c", "cc", "compiler", "exe", "debug",
    "option", "path", "builder", "platform",
])
names = st.from_regex(r"[A-Za-z0-9_-]{1,8}", fullmatch=True)
segments = st.one_of(suffix_words, names)
segment_lists = st.lists(segments, min_size=1, max_size=4)
suffixes = st.sampled_from(["toolchain.base", "c.compiler", "exe.debug.toolchain"])
architectures = st.sampled_from(["ARM", "MIPS", "X86_64", "AARCH64"])
prefixes = st.sampled_from(["arm-linux-", "mipsel-buildroot-linux-gnu-", "x86_64-linux-"])


def _absolute(parts: list[str]) -> str:
    return "/" + "/".join(parts)


def _definition_ids(path: str, arch: str, prefix: str, has_cpp: bool) -> list[str]:
    installation = ToolchainInstallation(path, prefix, arch)
    definition = DescriptorBuilder(FakeProbe()).build(installation, has_cpp=has_cpp)
    return list(definition.iter_ids())


def _register_all(installations: list[ToolchainInstallation]) -> ScanReport:
    session = ToolchainSession(
        Settings(toolchains_file=Path("unused")), InMemorySink(), probe=AnyToolProbe(),
    )
    report = ScanReport()
    for installation in installations:
        session.register_installation(installation, report)
    return report


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class TestNormalization:
    """normalize_path maps separators to dots and trims one dot per side."""

    @given(parts=segment_lists)
    def test_absolute_path_joins_with_dots(self, parts: list[str]) -> None:
        assert normalize_path(_absolute(parts)) == ".".join(parts)

    @given(parts=segment_lists)
    def test_trailing_separator_is_ignored(self, parts: list[str]) -> None:
        assert normalize_path(_absolute(parts) + "/") == normalize_path(_absolute(parts))

    @given(parts=segment_lists, suffix=suffixes)
    def test_identifier_layout(self, parts: list[str], suffix: str) -> None:
        assert identifier(_absolute(parts), suffix) == ".".join(
            [ID_NAMESPACE, *parts, suffix]
        )

    @given(path=st.text(alphabet="/ab.", max_size=12))
    def test_no_separators_survive(self, path: str) -> None:
        assert "/" not in normalize_path(path)


# ---------------------------------------------------------------------------
# Uniqueness
# ---------------------------------------------------------------------------


class TestUniqueness:
    """Ids are unique within an installation and across a session."""

    @settings(max_examples=50)
    @given(parts=segment_lists, arch=architectures, prefix=prefixes, has_cpp=st.booleans())
    def test_unique_within_installation(
        self, parts: list[str], arch: str, prefix: str, has_cpp: bool,
    ) -> None:
        ids = _definition_ids(_absolute(parts), arch, prefix, has_cpp)
        assert len(ids) == len(set(ids))

    @settings(max_examples=50)
    @given(
        paths=st.lists(segment_lists, min_size=2, max_size=4, unique_by=tuple),
        arch=architectures,
        prefix=prefixes,
    )
    def test_session_never_registers_shared_ids(
        self, paths: list[list[str]], arch: str, prefix: str,
    ) -> None:
        installations = [ToolchainInstallation(_absolute(p), prefix, arch) for p in paths]
        report = _register_all(installations)
        registered_ids = [i for d in report.registered for i in d.iter_ids()]
        assert len(registered_ids) == len(set(registered_ids))
        assert len(report.registered) + len(report.skipped) == len(installations)
        assert report.registered

    @settings(max_examples=50)
    @given(first=segment_lists, second=segment_lists, arch=architectures, prefix=prefixes)
    def test_disjoint_installations_both_register(
        self, first: list[str], second: list[str], arch: str, prefix: str,
    ) -> None:
        ids_a = set(_definition_ids(_absolute(first), arch, prefix, True))
        ids_b = set(_definition_ids(_absolute(second), arch, prefix, True))
        assume(ids_a.isdisjoint(ids_b))
        report = _register_all([
            ToolchainInstallation(_absolute(first), prefix, arch),
            ToolchainInstallation(_absolute(second), prefix, arch),
        ])
        assert len(report.registered) == 2


def test_suffix_word_segment_collides_at_id_level() -> None:
    """``/a/autotools`` spells ids that ``/a`` already generates."""
    ids_a = set(_definition_ids("/a", "ARM", "arm-linux-", True))
    ids_b = set(_definition_ids("/a/autotools", "ARM", "arm-linux-", True))
    assert identifier("/a/autotools", "toolchain.base") in ids_a & ids_b

    report = _register_all([
        ToolchainInstallation("/a", "arm-linux-", "ARM"),
        ToolchainInstallation("/a/autotools", "arm-linux-", "ARM"),
    ])
    assert [d.installation.install_path for d in report.registered] == ["/a"]
    assert [s.reason for s in report.skipped] == ["id collision"]
