"""Document link graphs: whole-project graphs, neighborhoods and impact analysis."""

import logging
from collections import deque

from docmesh.config import Config, load_settings
from docmesh.graph.index import LinkRepository
from docmesh.graph.models import GraphData, GraphEdge, GraphNode, ImpactedDocument, ImpactReport
from docmesh.links.models import DocumentRef, LinkRecord

logger = logging.getLogger(__name__)


def _node_from_document(doc: DocumentRef) -> GraphNode:
    return GraphNode(id=doc.id, path=doc.path, title=doc.title, doc_type=doc.doc_type)


def build_graph(links: list[LinkRecord]) -> GraphData:
    """Build a graph from link records.

    Links without a target, or marked broken, are skipped. A document seen
    more than once keeps the attributes of its first sighting. Every link
    becomes one edge, and node link counts are recounted from the edges.

    Args:
        links: Link records to include.

    Returns:
        GraphData with de-duplicated nodes and one edge per usable link.
    """
    nodes: dict[str, GraphNode] = {}
    edges: list[GraphEdge] = []

    for link in links:
        if not link.is_resolved:
            continue

        if link.source.id not in nodes:
            nodes[link.source.id] = _node_from_document(link.source)
        if link.target.id not in nodes:
            nodes[link.target.id] = _node_from_document(link.target)

        edges.append(
            GraphEdge(
                id=link.id,
                source=link.source.id,
                target=link.target.id,
                link_type=link.link_type,
                anchor_text=link.anchor_text,
            )
        )

    outgoing: dict[str, int] = {}
    incoming: dict[str, int] = {}
    for edge in edges:
        outgoing[edge.source] = outgoing.get(edge.source, 0) + 1
        incoming[edge.target] = incoming.get(edge.target, 0) + 1

    for node in nodes.values():
        node.outgoing_links = outgoing.get(node.id, 0)
        node.incoming_links = incoming.get(node.id, 0)

    return GraphData(nodes=list(nodes.values()), edges=edges)


class GraphService:
    """Builds link graphs and impact reports from a link repository."""

    def __init__(self, repository: LinkRepository, settings: Config | None = None) -> None:
        self._links = repository
        self._settings = settings or load_settings()

    def build_graph(self, links: list[LinkRecord]) -> GraphData:
        return build_graph(links)

    def get_graph(self) -> GraphData:
        """Graph of every internal link in the repository."""
        return build_graph(self._links.find_internal_links())

    def get_document_graph(self, document_id: str, depth: int | None = None) -> GraphData:
        """Graph of the documents around one document.

        Breadth-first from document_id. A document at distance d is expanded
        only while d < depth, so depth 0 yields an empty graph and depth 1
        yields the document's direct links. Outgoing links are followed only
        when they resolve to a non-broken target; incoming links are always
        followed so provenance stays visible. A document keeps the first
        distance it was reached at.

        Args:
            document_id: Center document.
            depth: Number of link hops to expand. Defaults to [graph] default_depth.

        Returns:
            GraphData built from every link touched during expansion.
        """
        if depth is None:
            depth = self._settings.graph.default_depth

        visited = {document_id}
        depths = {document_id: 0}
        queue = deque([document_id])
        collected: dict[str, LinkRecord] = {}

        while queue:
            current = queue.popleft()
            current_depth = depths[current]

            if current_depth >= depth:
                continue

            for link in self._links.find_by_source(current):
                if link.target is None or link.broken:
                    continue
                collected.setdefault(link.id, link)
                target_id = link.target.id
                if target_id not in visited:
                    visited.add(target_id)
                    depths[target_id] = current_depth + 1
                    queue.append(target_id)

            for link in self._links.find_by_target(current):
                collected.setdefault(link.id, link)
                source_id = link.source.id
                if source_id not in visited:
                    visited.add(source_id)
                    depths[source_id] = current_depth + 1
                    queue.append(source_id)

        logger.debug(
            f"Document graph for {document_id}: depth={depth}, "
            f"visited={len(visited)}, links={len(collected)}"
        )
        return build_graph(list(collected.values()))

    def analyze_impact(self, document_id: str) -> ImpactReport:
        """Find documents that may need attention when a document changes.

        Direct impact: documents linking to document_id (depth 1), with the
        link's type and anchor text. Indirect impact: documents linking to a
        directly impacted document (depth 2). The two sets are disjoint and
        never contain document_id itself.

        Args:
            document_id: The changed document.

        Returns:
            ImpactReport for the document.
        """
        direct: dict[str, ImpactedDocument] = {}
        for link in self._links.find_by_target(document_id):
            source = link.source
            if source.id == document_id or source.id in direct:
                continue
            direct[source.id] = ImpactedDocument(
                id=source.id,
                path=source.path,
                title=source.title,
                depth=1,
                link_type=link.link_type,
                anchor_text=link.anchor_text,
            )

        indirect: dict[str, ImpactedDocument] = {}
        for direct_id in direct:
            for link in self._links.find_by_target(direct_id):
                source = link.source
                if source.id == document_id or source.id in direct or source.id in indirect:
                    continue
                indirect[source.id] = ImpactedDocument(
                    id=source.id,
                    path=source.path,
                    title=source.title,
                    depth=2,
                )

        report = ImpactReport(
            document_id=document_id,
            direct_impact=list(direct.values()),
            indirect_impact=list(indirect.values()),
        )
        logger.debug(
            f"Impact of {document_id}: direct={len(report.direct_impact)}, "
            f"indirect={len(report.indirect_impact)}"
        )
        return report
