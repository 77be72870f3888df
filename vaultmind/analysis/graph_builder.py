"""Building the knowledge graph and its topology from scanned documents."""

import re
from collections import deque

from loguru import logger

from vaultmind.domain.document import Document
from vaultmind.domain.graph import GraphData, GraphEdge, GraphNode, Hub, NodeCategory

from .index import VaultIndex

MAX_HUBS = 10

DAILY_LOG_PATTERN = re.compile(r"^memory/\d{4}-\d{2}-\d{2}\.md$")

CATEGORY_COLORS: dict[str, str] = {
    "core": "#ff6b6b",
    "daily-log": "#4ecdc4",
    "entity": "#45b7d1",
    "project": "#96ceb4",
    "bank": "#ffeaa7",
    "memory": "#dda0dd",
}

Adjacency = dict[str, list[str]]


def categorize_document(relative_path: str) -> NodeCategory:
    """Derive a node category purely from the shape of the path."""
    if DAILY_LOG_PATTERN.match(relative_path):
        return "daily-log"
    if relative_path.startswith("bank/entities/"):
        return "entity"
    if relative_path.startswith("bank/projects/"):
        return "project"
    if relative_path.startswith("bank/"):
        return "bank"
    if relative_path.startswith("memory/"):
        return "memory"
    return "core"


def find_clusters(node_ids: list[str], adjacency: Adjacency) -> list[list[str]]:
    """Find connected components of the undirected closure of ``adjacency``.

    Args:
        node_ids: All nodes, in the order clusters should be discovered
        adjacency: Directed adjacency lists; edges to unknown nodes are ignored

    Returns:
        One list per component, members in breadth-first order
    """
    undirected: Adjacency = {node_id: [] for node_id in node_ids}
    for source, targets in adjacency.items():
        if source not in undirected:
            continue
        for target in targets:
            if target not in undirected:
                continue
            if target not in undirected[source]:
                undirected[source].append(target)
            if source not in undirected[target]:
                undirected[target].append(source)

    visited: set[str] = set()
    clusters = []

    for node_id in node_ids:
        if node_id in visited:
            continue
        cluster = []
        queue = deque([node_id])
        visited.add(node_id)

        while queue:
            current = queue.popleft()
            cluster.append(current)
            for neighbor in undirected[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        clusters.append(cluster)

    return clusters


def find_bridges(node_ids: list[str], adjacency: Adjacency, cluster_count: int) -> list[str]:
    """Find nodes whose removal increases the number of clusters.

    Each node that touches at least one edge is removed in turn, together
    with its edges, and the clusters of what remains are recounted.

    Args:
        node_ids: All nodes, in document order
        adjacency: Directed adjacency lists
        cluster_count: Number of clusters in the intact graph

    Returns:
        Bridge node ids, in document order
    """
    touched = set()
    for source, targets in adjacency.items():
        if targets:
            touched.add(source)
            touched.update(targets)

    bridges = []
    for candidate in node_ids:
        if candidate not in touched:
            continue

        remaining = [n for n in node_ids if n != candidate]
        filtered = {
            source: [t for t in targets if t != candidate]
            for source, targets in adjacency.items()
            if source != candidate
        }
        if len(find_clusters(remaining, filtered)) > cluster_count:
            bridges.append(candidate)

    return bridges


class VaultGraphBuilder:
    """Builds the directed link graph of a vault and analyses its structure."""

    def build(self, documents: list[Document], index: VaultIndex | None = None) -> GraphData:
        """Build the graph from documents.

        Edges come only from links whose target is exactly the basename of a
        document (case-insensitive); path-style and section links do not add edges.

        Args:
            documents: Scanned documents, in scan order
            index: Lookup tables for the snapshot, built if not given

        Returns:
            GraphData with nodes, edges, hubs, clusters and bridges
        """
        index = index or VaultIndex.build(documents)
        node_ids = [d.relative_path for d in documents]

        adjacency: Adjacency = {node_id: [] for node_id in node_ids}
        incoming_counts = {node_id: 0 for node_id in node_ids}
        edges = []

        for document in documents:
            for link in document.wikilinks:
                target_path = index.path_by_name.get(link.lower())
                if not target_path or target_path == document.relative_path:
                    continue
                edges.append(GraphEdge(source=document.relative_path, target=target_path))
                if target_path not in adjacency[document.relative_path]:
                    adjacency[document.relative_path].append(target_path)
                incoming_counts[target_path] += 1

        nodes = [
            GraphNode(
                id=d.relative_path,
                link_count=len(d.wikilinks),
                category=categorize_document(d.relative_path),
            )
            for d in documents
        ]

        # sorted() is stable, so ties keep document order
        ranked = sorted(
            ((node_id, count) for node_id, count in incoming_counts.items() if count > 0),
            key=lambda item: item[1],
            reverse=True,
        )
        hubs = [Hub(id=node_id, incoming_links=count) for node_id, count in ranked[:MAX_HUBS]]

        clusters = find_clusters(node_ids, adjacency)
        bridges = find_bridges(node_ids, adjacency, len(clusters))

        logger.info(
            f"Graph: {len(nodes)} nodes, {len(edges)} edges, "
            f"{len(clusters)} clusters, {len(bridges)} bridges"
        )
        return GraphData(nodes=nodes, edges=edges, hubs=hubs, bridges=bridges, clusters=clusters)


def to_dot(graph: GraphData) -> str:
    """Render the graph in Graphviz DOT format."""
    lines = ["digraph VaultMind {", "  rankdir=LR;", "  node [shape=box];"]

    for node in graph.nodes:
        color = CATEGORY_COLORS.get(node.category, "#cccccc")
        label = node.id.removesuffix(".md")
        lines.append(f'  "{node.id}" [label="{label}", style=filled, fillcolor="{color}"];')

    for edge in graph.edges:
        lines.append(f'  "{edge.source}" -> "{edge.target}";')

    lines.append("}")
    return "\n".join(lines)
