"""Split Markdown into a flat sequence of heading and content blocks.

Only headings carry structure for chunking. Everything else (paragraphs,
lists, tables, quotes, fenced code) is an opaque content block whose raw text
is kept verbatim. Blocks are separated by blank lines, except inside fenced
code, which always stays a single block.
"""

import re
from dataclasses import dataclass, field


ATX_HEADING = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
ATX_CLOSING = re.compile(r"(?:^|[ \t]+)#+$")
SETEXT_H1 = re.compile(r"^ {0,3}=+[ \t]*$")
SETEXT_H2 = re.compile(r"^ {0,3}-+[ \t]*$")
FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
FRONTMATTER_DELIMITER = "---"

# Lines that start a list or quote never become setext heading text
NON_PARAGRAPH_START = re.compile(r"^ {0,3}(?:[-+*>]|\d+[.)])(?:[ \t]|$)")


@dataclass(frozen=True)
class HeadingBlock:
    """An ATX (# Title) or setext (Title / =====) heading."""

    level: int
    text: str
    raw: str
    line: int = field(default=0, compare=False)  # 0-indexed first line


@dataclass(frozen=True)
class ContentBlock:
    """Any non-heading block, raw text preserved."""

    raw: str
    line: int = field(default=0, compare=False)


Block = HeadingBlock | ContentBlock


def _atx_heading(line: str, line_number: int = 0) -> HeadingBlock | None:
    match = ATX_HEADING.match(line)
    if not match:
        return None
    text = ATX_CLOSING.sub("", match.group(2) or "").strip()
    return HeadingBlock(
        level=len(match.group(1)), text=text, raw=line.strip(), line=line_number
    )


def _setext_level(line: str, paragraph: list[str]) -> int:
    """Return 1 or 2 if line underlines paragraph as a setext heading, else 0."""
    if not paragraph or NON_PARAGRAPH_START.match(paragraph[0]):
        return 0
    if SETEXT_H1.match(line):
        return 1
    if SETEXT_H2.match(line):
        return 2
    return 0


def _is_fence_close(line: str, fence: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= len(fence) and stripped == fence[0] * len(stripped)


def parse_blocks(markdown: str | None) -> list[Block]:
    """Parse Markdown text into heading and content blocks.

    Args:
        markdown: Markdown source. None and "" yield no blocks.

    Returns:
        Blocks in document order, each with the 0-indexed line it starts on.
    """
    if not markdown:
        return []

    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    blocks: list[Block] = []
    current: list[str] = []
    current_start = 0
    fence: str | None = None
    start = 0

    def flush() -> None:
        if current:
            raw = "\n".join(current)
            if raw.strip():
                blocks.append(ContentBlock(raw=raw, line=current_start))
            current.clear()

    # YAML frontmatter stays one block even though it contains "---" lines
    if lines[0].strip() == FRONTMATTER_DELIMITER:
        for i in range(1, len(lines)):
            if lines[i].strip() == FRONTMATTER_DELIMITER:
                blocks.append(ContentBlock(raw="\n".join(lines[: i + 1]), line=0))
                start = i + 1
                break

    for index in range(start, len(lines)):
        line = lines[index]

        if fence is not None:
            current.append(line)
            if _is_fence_close(line, fence):
                fence = None
                flush()
            continue

        if not line.strip():
            flush()
            continue

        fence_match = FENCE_OPEN.match(line)
        if fence_match:
            flush()
            fence = fence_match.group(1)
            current_start = index
            current.append(line)
            continue

        heading = _atx_heading(line, index)
        if heading is not None:
            flush()
            blocks.append(heading)
            continue

        level = _setext_level(line, current)
        if level:
            text = " ".join(part.strip() for part in current)
            raw = "\n".join(current + [line])
            current.clear()
            blocks.append(HeadingBlock(level=level, text=text, raw=raw, line=current_start))
            continue

        if not current:
            current_start = index
        current.append(line)

    flush()
    return blocks
