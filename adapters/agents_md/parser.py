"""
AGENTS.md -> canonical parser.

AGENTS.md files are plain project-instruction Markdown, optionally with a
small front matter block (project, scope). The document is scanned in
overview mode: the "# Title" heading opens a "Project Overview" context
section, and every "##" heading gets its kind from the shared heuristics.

Parsing never raises. Unreadable front matter is logged and ignored; the
worst case is a package holding only its metadata section.
"""

import logging
from typing import Any, Dict

from core.canonical_models import (
    CanonicalContent,
    CanonicalPackage,
    MetadataSection,
    PackageMetadata,
    Subtype,
)
from core.frontmatter import parse_frontmatter
from core.heuristics import first_paragraph_after_title, infer_tags
from core.taxonomy import with_taxonomy
from adapters.shared.markdown_parser import ScanOptions, parse_sections

logger = logging.getLogger(__name__)

FORMAT_NAME = 'agents.md'
SCAN_OPTIONS = ScanOptions(overview_title=True, recognize_persona=False)
TAG_MARKERS = ((('codex', 'openai'), 'codex'),)


class AgentsMdParser:
    """Stateless parser for AGENTS.md project instructions."""

    format_name = FORMAT_NAME
    subtype = Subtype.RULE

    def parse(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        frontmatter, body = parse_frontmatter(content)
        sections = parse_sections(body, SCAN_OPTIONS)
        description = metadata.description or first_paragraph_after_title(body)

        metadata_section = MetadataSection(title=metadata.name, description=description)

        passthrough: Dict[str, Any] = {'title': metadata.name, 'description': description}
        config = {
            key: frontmatter[key] for key in ('project', 'scope')
            if isinstance(frontmatter.get(key), str)
        }
        if config:
            passthrough['agents_md_config'] = config

        tags = set(metadata.tags)
        tags.update(infer_tags(body, TAG_MARKERS))

        logger.debug(f"Parsed AGENTS.md {metadata.id}: {len(sections)} body sections")
        return CanonicalPackage(
            id=metadata.id,
            name=metadata.name,
            version=metadata.version or '1.0.0',
            description=description,
            author=metadata.author or '',
            tags=frozenset(tags),
            source_format=self.format_name,
            metadata=with_taxonomy(passthrough, self.format_name, self.subtype),
            content=CanonicalContent(sections=(metadata_section, *sections)),
        )
