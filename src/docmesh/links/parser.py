"""Extract links from Markdown documents."""

import logging
import re

from docmesh.links.models import LinkType, ParsedLink

logger = logging.getLogger(__name__)

# [text](url)
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# [[page]] or [[page|text]]
WIKI_LINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")


def link_type_for(url: str) -> LinkType:
    """Classify a Markdown link target."""
    if url.startswith(("http://", "https://")):
        return LinkType.EXTERNAL
    if url.startswith("#"):
        return LinkType.ANCHOR
    return LinkType.INTERNAL


def extract_links(content: str | None) -> list[ParsedLink]:
    """Extract wiki and Markdown links from a document, line by line.

    Args:
        content: Document text. None and "" yield no links.

    Returns:
        Links in line order; on each line wiki links come before Markdown links.
    """
    if not content:
        return []

    links: list[ParsedLink] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        for match in WIKI_LINK_PATTERN.finditer(line):
            target = match.group(1).strip()
            anchor_text = match.group(2) if match.group(2) is not None else target
            links.append(ParsedLink(target, LinkType.WIKI, anchor_text.strip(), line_number))

        for match in MARKDOWN_LINK_PATTERN.finditer(line):
            url = match.group(2).strip()
            links.append(
                ParsedLink(url, link_type_for(url), match.group(1).strip(), line_number)
            )

    logger.debug(f"Extracted {len(links)} links from content")
    return links
