"""Document metadata tests."""

import pytest

from docmesh.documents import Section, detect_doc_type, parse_document, parse_frontmatter
from docmesh.links import DocType


class TestParseFrontmatter:
    def test_no_frontmatter(self):
        metadata, body = parse_frontmatter("# Title\n\nBody")

        assert metadata is None
        assert body == "# Title\n\nBody"

    def test_frontmatter_is_split_off(self):
        metadata, body = parse_frontmatter("---\ntitle: Guide\ntags: [ops, deploy]\n---\n# Heading\n")

        assert metadata == {"title": "Guide", "tags": ["ops", "deploy"]}
        assert body == "# Heading\n"

    def test_invalid_yaml_is_left_in_content(self):
        content = "---\ntitle: [unclosed\n---\nBody"

        assert parse_frontmatter(content) == (None, content)

    def test_unterminated_frontmatter(self):
        content = "---\ntitle: Guide\nBody"

        assert parse_frontmatter(content) == (None, content)


class TestParseDocument:
    def test_title_from_first_h1(self):
        doc = parse_document("Intro text\n\n## Setup\n\n# Real Title\n\n# Second")

        assert doc.title == "Real Title"
        assert doc.headings == ["## Setup", "# Real Title", "# Second"]

    def test_frontmatter_title_wins(self):
        doc = parse_document("---\ntitle: From Metadata\n---\n# From Heading\n")

        assert doc.title == "From Metadata"
        assert doc.metadata == {"title": "From Metadata"}
        assert doc.body == "# From Heading\n"

    def test_title_falls_back_to_first_text_line(self):
        doc = parse_document("## Only subsections\n\nFirst line of text\nsecond line")

        assert doc.title == "First line of text"

    def test_long_fallback_title_is_truncated(self):
        doc = parse_document("x" * 150)

        assert doc.title == "x" * 100 + "..."

    @pytest.mark.parametrize("content", [None, "", "## Only\n\n### Headings"])
    def test_untitled(self, content):
        assert parse_document(content).title == "Untitled"

    def test_hashes_in_code_are_not_headings(self):
        doc = parse_document("```\n# comment\n```\n\n# Title")

        assert doc.headings == ["# Title"]
        assert doc.title == "Title"


class TestSections:
    def test_body_is_split_at_each_heading(self):
        content = "Preamble text\n\n# Guide\n\nIntro\n\n## Install\n\nStep one\nStep two\n"

        sections = parse_document(content).sections

        assert sections == [
            Section(heading="", level=0, content="Preamble text", start_line=0),
            Section(heading="Guide", level=1, content="Intro", start_line=2),
            Section(heading="Install", level=2, content="Step one\nStep two", start_line=6),
        ]

    def test_heading_without_content(self):
        sections = parse_document("# A\n## B\ntext").sections

        assert sections == [
            Section(heading="A", level=1, content="", start_line=0),
            Section(heading="B", level=2, content="text", start_line=1),
        ]

    def test_start_lines_count_frontmatter(self):
        sections = parse_document("---\ntitle: Guide\n---\n# Setup\n\nRun it.").sections

        assert sections == [Section(heading="Setup", level=1, content="Run it.", start_line=3)]

    def test_setext_heading_and_fenced_hashes(self):
        content = "Title\n=====\n\n```\n# not a heading\n```\n\nMore"

        sections = parse_document(content).sections

        assert sections == [
            Section(
                heading="Title",
                level=1,
                content="```\n# not a heading\n```\n\nMore",
                start_line=0,
            )
        ]

    def test_no_headings_is_one_preamble_section(self):
        sections = parse_document("Just text.").sections

        assert sections == [Section(heading="", level=0, content="Just text.", start_line=0)]

    def test_empty_document_has_no_sections(self):
        assert parse_document("").sections == []


class TestDetectDocType:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("docs/guide.md", DocType.MD),
            ("README.markdown", DocType.MD),
            ("docs/manual.adoc", DocType.ADOC),
            ("api/openapi.yaml", DocType.OPENAPI),
            ("swagger.json", DocType.OPENAPI),
            ("docs/adr/0001-use-postgres.md", DocType.ADR),
            ("decisions/0002-queue.md", DocType.ADR),
            ("docs/adr/diagram.png", DocType.OTHER),
            ("notes.txt", DocType.OTHER),
        ],
    )
    def test_detects_type_from_path(self, path, expected):
        assert detect_doc_type(path) == expected
