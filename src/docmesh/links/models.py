"""Data models for links between documents."""

from dataclasses import dataclass
from enum import Enum


class LinkType(Enum):
    """Kinds of links found in Markdown documents."""

    INTERNAL = "INTERNAL"  # relative path, e.g. ./docs/api.md
    WIKI = "WIKI"  # [[Page]] or [[Page|text]]
    EXTERNAL = "EXTERNAL"  # http(s) URL
    ANCHOR = "ANCHOR"  # #section in the same document


class DocType(Enum):
    """Document formats tracked by the graph."""

    MD = "MD"
    ADOC = "ADOC"
    OPENAPI = "OPENAPI"
    ADR = "ADR"
    OTHER = "OTHER"


@dataclass(frozen=True)
class DocumentRef:
    """The document fields the link graph needs."""

    id: str
    path: str
    title: str
    doc_type: DocType = DocType.MD


@dataclass(frozen=True)
class ParsedLink:
    """A link as written in a document, before resolution."""

    link_text: str  # raw target: URL, relative path or wiki page name
    link_type: LinkType
    anchor_text: str
    line_number: int  # 1-indexed


@dataclass(frozen=True)
class LinkRecord:
    """A link from one document to another.

    target is None when the link could not be resolved to a known document.
    """

    id: str
    source: DocumentRef
    target: DocumentRef | None
    link_type: LinkType
    anchor_text: str | None = None
    broken: bool = False
    link_text: str = ""
    line_number: int | None = None

    @property
    def is_internal(self) -> bool:
        return self.link_type in (LinkType.INTERNAL, LinkType.WIKI)

    @property
    def is_resolved(self) -> bool:
        """True when the link points at a known document and is not broken."""
        return self.target is not None and not self.broken
