"""Tests for link target parsing and reference resolution."""

import pytest

from tests.fakes import FakeProbe, make_document
from vaultmind.analysis.index import VaultIndex
from vaultmind.analysis.link_target import parse_link_target
from vaultmind.analysis.resolver import ReferenceResolver


@pytest.fixture
def index() -> VaultIndex:
    return VaultIndex.build(
        [
            make_document("Bob.md"),
            make_document("Tools.md"),
            make_document("bank/opinions.md"),
            make_document("bank/entities/Alice.md"),
        ]
    )


@pytest.fixture
def resolver(index: VaultIndex) -> ReferenceResolver:
    return ReferenceResolver(index)


def test_parse_plain_target() -> None:
    target = parse_link_target("Bob")

    assert target.kind == "plain"
    assert target.file_part == "Bob"
    assert target.section is None


def test_parse_section_splits_on_first_hash() -> None:
    target = parse_link_target("Tools#Model Configuration#Nested")

    assert target.kind == "plain"
    assert target.file_part == "Tools"
    assert target.section == "Model Configuration#Nested"


def test_parse_self_reference() -> None:
    target = parse_link_target("#Section")

    assert target.kind == "self"
    assert target.file_part == ""
    assert target.section == "Section"


def test_parse_path_style() -> None:
    target = parse_link_target("bank/opinions.md#Takes")

    assert target.kind == "path"
    assert target.file_part == "bank/opinions.md"
    assert target.short_name == "opinions"


def test_resolve_plain_name_case_insensitive(resolver: ReferenceResolver) -> None:
    assert resolver.resolve("Bob").status == "resolved"
    assert resolver.resolve("bob").status == "resolved"
    assert resolver.resolve("ALICE").status == "resolved"


def test_resolve_unknown_target(resolver: ReferenceResolver) -> None:
    resolution = resolver.resolve("Nonexistent")

    assert resolution.status == "unresolved"
    assert not resolution.valid


def test_section_link_resolves_iff_file_resolves(resolver: ReferenceResolver) -> None:
    assert resolver.resolve("Tools#Model Configuration").valid
    assert resolver.resolve("Tools").valid
    assert not resolver.resolve("Missing#Model Configuration").valid
    assert not resolver.resolve("Missing").valid


def test_self_reference_always_resolves() -> None:
    empty = ReferenceResolver(VaultIndex.build([]))

    assert empty.resolve("#Anything at all").status == "resolved"


@pytest.mark.parametrize("target", ["bank/opinions", "bank/opinions.md", "BANK/Opinions.md"])
def test_path_style_resolves_with_suggested_name(
    resolver: ReferenceResolver, target: str
) -> None:
    resolution = resolver.resolve(target)

    assert resolution.status == "path_style"
    assert resolution.valid
    assert resolution.suggested_name.lower() == "opinions"


def test_path_style_section_link(resolver: ReferenceResolver) -> None:
    resolution = resolver.resolve("bank/entities/Alice#Background")

    assert resolution.path_style
    assert resolution.suggested_name == "Alice"


def test_missing_path_style_target(resolver: ReferenceResolver) -> None:
    assert resolver.resolve("bank/missing.md").status == "unresolved"


def test_plain_name_never_reports_path_style(resolver: ReferenceResolver) -> None:
    assert resolver.resolve("opinions").status == "resolved"


def test_probe_is_last_resort(index: VaultIndex) -> None:
    probe = FakeProbe(existing={"attachments/diagram.md"})
    resolver = ReferenceResolver(index, probe)

    assert resolver.resolve("Bob").status == "resolved"
    assert resolver.resolve("bank/opinions").status == "path_style"
    assert probe.calls == []

    resolution = resolver.resolve("attachments/diagram")
    assert resolution.status == "path_style"
    assert resolution.suggested_name == "diagram"
    assert probe.calls == ["attachments/diagram"]


def test_probe_only_used_for_path_style(index: VaultIndex) -> None:
    probe = FakeProbe(existing={"Ghost.md"})
    resolver = ReferenceResolver(index, probe)

    assert resolver.resolve("Ghost").status == "unresolved"
    assert probe.calls == []


def test_failing_probe_counts_as_not_found(index: VaultIndex) -> None:
    resolver = ReferenceResolver(index, FakeProbe(fail=True))

    assert resolver.resolve("attachments/diagram").status == "unresolved"
