"""Data models for the document link graph."""

from dataclasses import dataclass, field

import networkx as nx

from docmesh.links.models import DocType, LinkType


@dataclass
class GraphNode:
    """A document in the link graph.

    Link counts are derived from the graph's edges and recomputed on every build.
    """

    id: str
    path: str
    title: str
    doc_type: DocType
    outgoing_links: int = 0
    incoming_links: int = 0


@dataclass(frozen=True)
class GraphEdge:
    """A resolved link between two documents."""

    id: str
    source: str  # Source node ID
    target: str  # Target node ID
    link_type: LinkType
    anchor_text: str | None = None


@dataclass
class GraphData:
    """Nodes and edges of a document graph."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "path": n.path,
                    "title": n.title,
                    "docType": n.doc_type.value,
                    "outgoingLinks": n.outgoing_links,
                    "incomingLinks": n.incoming_links,
                }
                for n in self.nodes
            ],
            "edges": [
                {
                    "id": e.id,
                    "source": e.source,
                    "target": e.target,
                    "linkType": e.link_type.value,
                    "anchorText": e.anchor_text,
                }
                for e in self.edges
            ],
        }

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert to a NetworkX multigraph keyed by edge id."""
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(
                node.id,
                path=node.path,
                title=node.title,
                doc_type=node.doc_type.value,
            )
        for edge in self.edges:
            graph.add_edge(
                edge.source,
                edge.target,
                key=edge.id,
                link_type=edge.link_type.value,
                anchor_text=edge.anchor_text,
            )
        return graph


@dataclass(frozen=True)
class ImpactedDocument:
    """A document affected by a change to another document."""

    id: str
    path: str
    title: str
    depth: int  # 1 = links to the changed document, 2 = links to a depth-1 document
    link_type: LinkType | None = None
    anchor_text: str | None = None


@dataclass
class ImpactReport:
    """Documents affected, directly and indirectly, by a change to one document."""

    document_id: str
    direct_impact: list[ImpactedDocument] = field(default_factory=list)
    indirect_impact: list[ImpactedDocument] = field(default_factory=list)

    @property
    def total_impacted(self) -> int:
        return len(self.direct_impact) + len(self.indirect_impact)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""

        def _doc(d: ImpactedDocument) -> dict:
            return {
                "id": d.id,
                "path": d.path,
                "title": d.title,
                "depth": d.depth,
                "linkType": d.link_type.value if d.link_type else None,
                "anchorText": d.anchor_text,
            }

        return {
            "documentId": self.document_id,
            "totalImpacted": self.total_impacted,
            "directImpact": [_doc(d) for d in self.direct_impact],
            "indirectImpact": [_doc(d) for d in self.indirect_impact],
        }
