"""Tests for linking plain-text mentions in isolated files."""

from tests.fakes import make_document
from vaultmind.domain.findings import QualityReport
from vaultmind.fixers.isolated import IsolatedFixer, find_mentions, link_mentions, name_variants


def test_name_variants() -> None:
    assert name_variants("ProjectAlpha") == ["projectalpha", "project alpha"]
    assert name_variants("model-config") == ["model-config", "model config"]
    assert name_variants("AI") == []


def test_find_mentions_case_insensitive() -> None:
    assert find_mentions("Met alice today.", "Alice") == [(4, 9)]


def test_find_mentions_whole_words_only() -> None:
    content = "Malice and Alicent, but Alice."

    mentions = find_mentions(content, "Alice")

    assert len(mentions) == 1
    start, end = mentions[0]
    assert content[start:end] == "Alice"


def test_find_mentions_ignores_frontmatter() -> None:
    assert find_mentions("---\ntitle: Alice\n---\nMet Alice.", "Alice") == [(25, 30)]


def test_find_mentions_ignores_links_and_code() -> None:
    content = "[[Alice]] and [Alice](alice.md) and `Alice` and\n```\nAlice\n```\n"

    assert find_mentions(content, "Alice") == []


def test_find_mentions_split_camel_case() -> None:
    assert find_mentions("Working on project alpha today", "ProjectAlpha") == [(11, 24)]


def test_link_mentions_keeps_original_text_as_alias() -> None:
    content, linked = link_mentions("I met alice yesterday. Alice was happy.", ["Alice"])

    assert content == "I met [[Alice|alice]] yesterday. Alice was happy."
    assert linked == ["Alice"]


def test_link_mentions_exact_casing() -> None:
    content, linked = link_mentions("Talked to Bob about it.", ["Bob"])

    assert content == "Talked to [[Bob]] about it."
    assert linked == ["Bob"]


def test_link_mentions_several_names() -> None:
    content, linked = link_mentions("Alice and Bob met.", ["Alice", "Bob", "Carol"])

    assert content == "[[Alice]] and [[Bob]] met."
    assert linked == ["Alice", "Bob"]


def test_fixer_links_known_notes() -> None:
    """An isolated journal entry gets links to the notes it mentions."""
    documents = [
        make_document(
            "Journal.md",
            content="Today I talked with Alice about ProjectAlpha and the garden plans.",
        ),
        make_document("Alice.md", content="# Alice\n\nA friend. [[Journal]]"),
        make_document("ProjectAlpha.md", content="# Project\n\n[[Alice]]"),
    ]
    report = QualityReport(isolated_files=["Journal.md"])

    actions = IsolatedFixer().fix(documents, report)

    assert len(actions) == 1
    action = actions[0]
    assert action.category == "isolated"
    assert action.file_path == "Journal.md"
    assert action.new_content == (
        "Today I talked with [[Alice]] about [[ProjectAlpha]] and the garden plans."
    )
    assert "[[Alice]], [[ProjectAlpha]]" in action.description


def test_fixer_never_links_to_same_name() -> None:
    documents = [
        make_document("Notes/Alice.md", content="Alice wrote this note about Alice herself today."),
        make_document("People/Alice.md", content="# Alice\n\n[[Notes/Alice]]"),
    ]
    report = QualityReport(isolated_files=["Notes/Alice.md"])

    assert IsolatedFixer().fix(documents, report) == []


def test_fixer_skips_linked_and_short_files() -> None:
    documents = [
        make_document("Linked.md", content="Mentions Alice here and links [[Other]] too."),
        make_document("Short.md", content="Alice!"),
        make_document("Alice.md", content="# Alice\n\n[[Linked]]"),
    ]
    report = QualityReport(isolated_files=["Short.md"])

    assert IsolatedFixer().fix(documents, report) == []
