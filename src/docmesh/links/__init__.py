"""Link extraction and resolution between documents."""

from docmesh.links.models import DocType, DocumentRef, LinkRecord, LinkType, ParsedLink
from docmesh.links.parser import extract_links, link_type_for
from docmesh.links.resolver import LinkResolver

__all__ = [
    # Models
    "DocType",
    "DocumentRef",
    "LinkRecord",
    "LinkType",
    "ParsedLink",
    # Parsing
    "extract_links",
    "link_type_for",
    # Resolution
    "LinkResolver",
]
