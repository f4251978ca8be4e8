"""Document link graph construction and querying."""

from docmesh.graph.models import (
    GraphData,
    GraphEdge,
    GraphNode,
    ImpactedDocument,
    ImpactReport,
)
from docmesh.graph.index import LinkIndex, LinkRepository
from docmesh.graph.service import GraphService, build_graph

__all__ = [
    # Models
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "ImpactedDocument",
    "ImpactReport",
    # Index
    "LinkIndex",
    "LinkRepository",
    # Service
    "GraphService",
    "build_graph",
]
