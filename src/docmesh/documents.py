"""Document-level metadata: YAML frontmatter, title, headings and type.

Frontmatter is an optional YAML block at the very top of a document:

    ---
    title: Deployment Guide
    tags: [ops]
    ---

Its title, when present, takes precedence over the first H1 heading.
"""

import re
from dataclasses import dataclass, field

import yaml

from docmesh.chunking.blocks import HeadingBlock, parse_blocks
from docmesh.links.models import DocType

TITLE_MAX_LENGTH = 100
UNTITLED = "Untitled"

OPENAPI_NAME = re.compile(r"(?:^|/)(?:openapi|swagger)[^/]*\.(?:ya?ml|json)$", re.IGNORECASE)
ADR_PATH = re.compile(r"(?:^|/)(?:adr|adrs|decisions)/", re.IGNORECASE)


@dataclass(frozen=True)
class Section:
    """The text under one heading, up to the next heading of any level.

    Text before the first heading forms a section with heading "" and level 0.
    """

    heading: str
    level: int
    content: str
    start_line: int  # 0-indexed line of the heading in the full document


@dataclass
class ParsedDocument:
    """Metadata extracted from a Markdown document.

    Attributes:
        title: Frontmatter title, first H1, or first line of text.
        headings: All headings formatted as "## Text", in order.
        sections: Body split at every heading.
        metadata: Parsed frontmatter (empty when there is none).
        body: Content with the frontmatter removed.
    """

    title: str
    headings: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)
    body: str = ""


def parse_frontmatter(content: str) -> tuple[dict | None, str]:
    """Split YAML frontmatter from document content.

    Args:
        content: Full document content that may start with frontmatter.

    Returns:
        Tuple of (metadata_dict, remaining_content).
        If no valid frontmatter found, returns (None, original_content).
    """
    if not content.startswith("---\n"):
        return None, content

    end_pos = content.find("\n---\n", 3)
    if end_pos == -1:
        if content.rstrip().endswith("\n---"):
            end_pos = content.rstrip().rfind("\n---")
        else:
            return None, content

    try:
        metadata = yaml.safe_load(content[4:end_pos])
    except yaml.YAMLError:
        return None, content
    if not isinstance(metadata, dict):
        return None, content

    remaining_start = end_pos + 5  # len("\n---\n")
    if remaining_start < len(content) and content[remaining_start] == "\n":
        remaining_start += 1

    return metadata, content[remaining_start:]


def _fallback_title(body: str) -> str:
    for line in body.split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            if len(stripped) > TITLE_MAX_LENGTH:
                return stripped[:TITLE_MAX_LENGTH] + "..."
            return stripped
    return UNTITLED


def _sections(body: str, headings: list[HeadingBlock], line_offset: int) -> list[Section]:
    lines = body.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    sections: list[Section] = []

    preamble = "\n".join(lines[: headings[0].line] if headings else lines).strip()
    if preamble:
        sections.append(Section(heading="", level=0, content=preamble, start_line=line_offset))

    for i, heading in enumerate(headings):
        start = heading.line + heading.raw.count("\n") + 1
        end = headings[i + 1].line if i + 1 < len(headings) else len(lines)
        sections.append(
            Section(
                heading=heading.text,
                level=heading.level,
                content="\n".join(lines[start:end]).strip(),
                start_line=heading.line + line_offset,
            )
        )

    return sections


def parse_document(content: str | None) -> ParsedDocument:
    """Extract title, headings, sections and frontmatter from a Markdown document."""
    if not content:
        return ParsedDocument(title=UNTITLED)

    metadata, body = parse_frontmatter(content)
    metadata = metadata or {}

    headings = [b for b in parse_blocks(body) if isinstance(b, HeadingBlock)]

    title = metadata.get("title")
    if not isinstance(title, str) or not title.strip():
        h1 = next((h.text for h in headings if h.level == 1), None)
        title = h1 if h1 else _fallback_title(body)

    return ParsedDocument(
        title=title.strip(),
        headings=[f"{'#' * h.level} {h.text}" for h in headings],
        sections=_sections(body, headings, content[: len(content) - len(body)].count("\n")),
        metadata=metadata,
        body=body,
    )


def detect_doc_type(path: str) -> DocType:
    """Classify a document by its repository path."""
    lowered = path.lower()
    if OPENAPI_NAME.search(lowered):
        return DocType.OPENAPI
    if ADR_PATH.search(lowered) and lowered.endswith((".md", ".markdown")):
        return DocType.ADR
    if lowered.endswith((".md", ".markdown")):
        return DocType.MD
    if lowered.endswith((".adoc", ".asciidoc")):
        return DocType.ADOC
    return DocType.OTHER
