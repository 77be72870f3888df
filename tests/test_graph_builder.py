"""Tests for knowledge graph construction, clustering and bridge detection."""

import pytest

from tests.fakes import make_document
from vaultmind.analysis.graph_builder import (
    VaultGraphBuilder,
    categorize_document,
    find_clusters,
    to_dot,
)


@pytest.fixture
def builder() -> VaultGraphBuilder:
    return VaultGraphBuilder()


@pytest.mark.parametrize(
    ("path", "category"),
    [
        ("memory/2024-03-01.md", "daily-log"),
        ("memory/self-review.md", "memory"),
        ("bank/entities/Alice.md", "entity"),
        ("bank/projects/vault.md", "project"),
        ("bank/opinions.md", "bank"),
        ("MEMORY.md", "core"),
    ],
)
def test_categorize_document(path: str, category: str) -> None:
    assert categorize_document(path) == category


def test_edges_from_resolved_names_only(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("A.md", ["b", "A", "Missing", "B#Section", "dir/C"]),
        make_document("B.md", []),
        make_document("dir/C.md", []),
    ]

    graph = builder.build(documents)

    assert [(e.source, e.target) for e in graph.edges] == [("A.md", "B.md")]
    assert [n.link_count for n in graph.nodes] == [5, 0, 0]


def test_end_to_end_two_linked_one_isolated(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("A.md", ["B"]),
        make_document("B.md", ["A"]),
        make_document("C.md", []),
    ]

    graph = builder.build(documents)

    assert [set(c) for c in graph.clusters] == [{"A.md", "B.md"}, {"C.md"}]
    assert graph.bridges == []


def test_hubs_ranked_by_incoming_links(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("A.md", ["Hub", "Second"]),
        make_document("B.md", ["Hub", "Second"]),
        make_document("C.md", ["Hub", "Tie"]),
        make_document("Tie.md", []),
        make_document("Second.md", []),
        make_document("Hub.md", []),
    ]

    graph = builder.build(documents)

    assert [(h.id, h.incoming_links) for h in graph.hubs] == [
        ("Hub.md", 3),
        ("Second.md", 2),
        ("Tie.md", 1),
    ]


def test_hub_ties_follow_document_order(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("Source.md", ["Zed", "Amy"]),
        make_document("Zed.md", []),
        make_document("Amy.md", []),
    ]

    graph = builder.build(documents)

    assert [h.id for h in graph.hubs] == ["Zed.md", "Amy.md"]


def test_hubs_capped_at_ten(builder: VaultGraphBuilder) -> None:
    targets = [f"T{i}" for i in range(15)]
    documents = [make_document("Source.md", targets)] + [
        make_document(f"{t}.md", []) for t in targets
    ]

    graph = builder.build(documents)

    assert len(graph.hubs) == 10
    assert all(h.incoming_links == 1 for h in graph.hubs)


def test_no_edges_means_one_cluster_per_node(builder: VaultGraphBuilder) -> None:
    documents = [make_document(f"N{i}.md", []) for i in range(4)]

    graph = builder.build(documents)

    assert graph.clusters == [["N0.md"], ["N1.md"], ["N2.md"], ["N3.md"]]
    assert graph.hubs == []
    assert graph.bridges == []


def test_fully_connected_graph_is_one_cluster(builder: VaultGraphBuilder) -> None:
    names = ["A", "B", "C", "D"]
    documents = [make_document(f"{n}.md", [m for m in names if m != n]) for n in names]

    graph = builder.build(documents)

    assert len(graph.clusters) == 1
    assert set(graph.clusters[0]) == {"A.md", "B.md", "C.md", "D.md"}
    assert graph.bridges == []


def test_direction_is_ignored_for_clusters(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("A.md", []),
        make_document("B.md", ["A"]),
        make_document("C.md", ["B"]),
    ]

    graph = builder.build(documents)

    assert graph.clusters == [["A.md", "B.md", "C.md"]]


def test_chain_middle_is_a_bridge(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("A.md", ["B"]),
        make_document("B.md", ["C"]),
        make_document("C.md", []),
    ]

    graph = builder.build(documents)

    assert graph.bridges == ["B.md"]


def test_node_with_only_incoming_edges_can_be_a_bridge(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("Left.md", ["Center"]),
        make_document("Right.md", ["Center"]),
        make_document("Center.md", []),
    ]

    graph = builder.build(documents)

    assert graph.bridges == ["Center.md"]


def test_star_and_cycle(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("Hub.md", ["Leaf1", "Leaf2", "Ring1"]),
        make_document("Leaf1.md", []),
        make_document("Leaf2.md", []),
        make_document("Ring1.md", ["Ring2"]),
        make_document("Ring2.md", ["Ring3"]),
        make_document("Ring3.md", ["Ring1"]),
        make_document("Lonely.md", []),
    ]

    graph = builder.build(documents)

    assert graph.bridges == ["Hub.md", "Ring1.md"]
    assert len(graph.clusters) == 2


def test_isolated_nodes_are_never_bridges(builder: VaultGraphBuilder) -> None:
    assert builder.build([make_document("Only.md", [])]).bridges == []
    assert builder.build([make_document("Only.md", ["Only"])]).bridges == []


def test_two_node_cluster_has_no_bridge(builder: VaultGraphBuilder) -> None:
    documents = [make_document("A.md", ["B"]), make_document("B.md", [])]

    assert builder.build(documents).bridges == []


def test_empty_vault(builder: VaultGraphBuilder) -> None:
    graph = builder.build([])

    assert graph.nodes == []
    assert graph.clusters == []
    assert graph.bridges == []


def test_find_clusters_ignores_unknown_targets() -> None:
    clusters = find_clusters(["A", "B"], {"A": ["Z"], "B": []})

    assert clusters == [["A"], ["B"]]


def test_to_dot(builder: VaultGraphBuilder) -> None:
    documents = [
        make_document("MEMORY.md", ["Alice"]),
        make_document("bank/entities/Alice.md", []),
    ]

    dot = to_dot(builder.build(documents))

    assert dot.startswith("digraph VaultMind {")
    assert '"MEMORY.md" [label="MEMORY", style=filled, fillcolor="#ff6b6b"];' in dot
    assert '"bank/entities/Alice.md" [label="bank/entities/Alice"' in dot
    assert '"MEMORY.md" -> "bank/entities/Alice.md";' in dot
    assert dot.endswith("}")
