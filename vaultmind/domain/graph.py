"""Knowledge graph models."""

from typing import Literal

from pydantic import BaseModel

NodeCategory = Literal["daily-log", "entity", "project", "bank", "memory", "core"]


class GraphNode(BaseModel):
    id: str
    link_count: int
    category: NodeCategory


class GraphEdge(BaseModel):
    source: str
    target: str


class Hub(BaseModel):
    id: str
    incoming_links: int


class GraphData(BaseModel):
    """Represents the vault's link graph and its topology."""

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    hubs: list[Hub] = []
    bridges: list[str] = []  # removing any of these splits a cluster
    clusters: list[list[str]] = []
