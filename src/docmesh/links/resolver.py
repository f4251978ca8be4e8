"""Resolve link targets to documents of the same repository."""

import logging
import posixpath
import uuid
from typing import Callable, Iterable

from docmesh.links.models import DocumentRef, LinkRecord, LinkType
from docmesh.links.parser import extract_links

logger = logging.getLogger(__name__)


def _parent_path(path: str) -> str:
    """Directory part of a repository path ("" at the root)."""
    return path.rsplit("/", 1)[0] if "/" in path else ""


def _strip_fragment_and_query(link_text: str) -> str:
    return link_text.split("#", 1)[0].split("?", 1)[0]


class LinkResolver:
    """Resolves links written in one document to other known documents.

    Wiki page names (no "/" and no ".md") are looked up next to the linking
    document as <name>.md, then <name>/index.md. Everything else is treated
    as a path relative to the linking document's directory; a leading "/"
    makes it relative to the repository root.
    """

    def __init__(
        self,
        documents: Iterable[DocumentRef],
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._by_path = {doc.path: doc for doc in documents}
        self._new_id = id_factory

    def resolve(self, source: DocumentRef, link_text: str) -> DocumentRef | None:
        """Find the document a link points at.

        Args:
            source: Document containing the link.
            link_text: Raw link target.

        Returns:
            The target document, or None if no known document matches.
        """
        parent = _parent_path(source.path)
        target = _strip_fragment_and_query(link_text)

        if "/" not in target and not target.endswith(".md"):
            for candidate in (f"{target}.md", f"{target}/index.md"):
                path = f"{parent}/{candidate}" if parent else candidate
                if path in self._by_path:
                    return self._by_path[path]
            return None

        if target.startswith("/"):
            resolved = posixpath.normpath(target.lstrip("/"))
        else:
            resolved = posixpath.normpath(posixpath.join(parent, target))
        return self._by_path.get(resolved)

    def build_link_records(self, source: DocumentRef, content: str | None) -> list[LinkRecord]:
        """Extract and resolve every link of a document.

        Internal and wiki links that do not resolve are marked broken.
        External and anchor links never have a target and are not broken.

        Args:
            source: Document the content belongs to.
            content: Document text.

        Returns:
            One LinkRecord per link, in document order.
        """
        records: list[LinkRecord] = []
        for parsed in extract_links(content):
            target = None
            if parsed.link_type in (LinkType.INTERNAL, LinkType.WIKI):
                target = self.resolve(source, parsed.link_text)
                if target is None:
                    logger.debug(
                        f"Unresolved link in {source.path} line {parsed.line_number}: "
                        f"{parsed.link_text}"
                    )

            records.append(
                LinkRecord(
                    id=self._new_id(),
                    source=source,
                    target=target,
                    link_type=parsed.link_type,
                    anchor_text=parsed.anchor_text,
                    broken=parsed.link_type in (LinkType.INTERNAL, LinkType.WIKI)
                    and target is None,
                    link_text=parsed.link_text,
                    line_number=parsed.line_number,
                )
            )

        if records:
            logger.info(f"Resolved {len(records)} links for document: {source.path}")
        return records
