"""In-memory link lookup backed by a NetworkX multigraph."""

from typing import Iterable, Protocol

import networkx as nx

from docmesh.links.models import LinkRecord


class LinkRepository(Protocol):
    """Lookup of link records by source or target document."""

    def find_by_source(self, document_id: str) -> list[LinkRecord]: ...

    def find_by_target(self, document_id: str) -> list[LinkRecord]: ...

    def find_internal_links(self) -> list[LinkRecord]: ...


class LinkIndex:
    """LinkRepository holding every link of a project in memory.

    Links with a target are edges of a MultiDiGraph keyed by link id, so
    parallel links between the same two documents are all kept. Links with
    no target cannot be edges and are kept per source document.
    """

    def __init__(self, links: Iterable[LinkRecord] = ()) -> None:
        self._graph = nx.MultiDiGraph()
        self._unresolved: dict[str, list[LinkRecord]] = {}
        for link in links:
            self.add(link)

    def __len__(self) -> int:
        return self._graph.number_of_edges() + sum(len(v) for v in self._unresolved.values())

    def add(self, link: LinkRecord) -> None:
        if link.target is None:
            self._graph.add_node(link.source.id)
            self._unresolved.setdefault(link.source.id, []).append(link)
        else:
            self._graph.add_edge(link.source.id, link.target.id, key=link.id, link=link)

    def remove_by_source(self, document_id: str) -> None:
        """Drop every link written in a document, e.g. before re-extracting it."""
        if self._graph.has_node(document_id):
            edges = list(self._graph.out_edges(document_id, keys=True))
            self._graph.remove_edges_from(edges)
        self._unresolved.pop(document_id, None)

    def find_by_source(self, document_id: str) -> list[LinkRecord]:
        if not self._graph.has_node(document_id):
            return []
        links = [data["link"] for _, _, data in self._graph.out_edges(document_id, data=True)]
        return links + self._unresolved.get(document_id, [])

    def find_by_target(self, document_id: str) -> list[LinkRecord]:
        if not self._graph.has_node(document_id):
            return []
        return [data["link"] for _, _, data in self._graph.in_edges(document_id, data=True)]

    def find_internal_links(self) -> list[LinkRecord]:
        links = [data["link"] for _, _, data in self._graph.edges(data=True)]
        for unresolved in self._unresolved.values():
            links.extend(unresolved)
        return [link for link in links if link.is_internal]

    def find_broken_links(self) -> list[LinkRecord]:
        """Internal links that did not resolve to a document."""
        return [link for link in self.find_internal_links() if not link.is_resolved]
