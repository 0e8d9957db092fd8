"""
Cursor rule (.mdc / .cursorrules) -> canonical parser.

Reads the three keys Cursor understands (description, globs, alwaysApply)
plus the comment-line extension fields the Cursor converter writes
(title, version, tags, author). The body's "# Title" heading and first
paragraph become the metadata section; the rest goes through the shared
section scanner.
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
from core.frontmatter import load_comment_fields, parse_frontmatter, split_frontmatter
from core.heuristics import infer_tags
from core.taxonomy import with_taxonomy
from adapters.shared.markdown_parser import ScanOptions, parse_sections, split_title_block
from adapters.shared.options import as_bool, as_tuple

logger = logging.getLogger(__name__)

SCAN_OPTIONS = ScanOptions(overview_title=False, recognize_persona=True)
TAG_MARKERS = ((('cursor',), 'cursor'),)


class CursorParser:
    """Stateless parser for Cursor rule files."""

    format_name = 'cursor'
    subtype = Subtype.RULE

    def parse(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        frontmatter, body = parse_frontmatter(content)
        yaml_text, _ = split_frontmatter(content)
        extensions = load_comment_fields(yaml_text) if frontmatter else {}

        header = split_title_block(body)
        description = (
            metadata.description
            or _string(frontmatter.get('description'))
            or header.description
        )
        title = metadata.name or _string(extensions.get('title')) or header.title or metadata.id

        metadata_section = MetadataSection(title=title, description=description, icon=header.icon)
        sections = [metadata_section, *parse_sections(header.rest, SCAN_OPTIONS)]

        passthrough: Dict[str, Any] = {
            'title': title,
            'description': description,
            'always_apply': bool(as_bool(frontmatter.get('alwaysApply'))),
        }
        globs = as_tuple(frontmatter.get('globs'))
        if globs:
            passthrough['globs'] = globs
        for key in ('version', 'author'):
            if extensions.get(key):
                passthrough[key] = str(extensions[key])

        tags = set(metadata.tags)
        tags.update(as_tuple(extensions.get('tags')) or ())
        tags.update(infer_tags(body, TAG_MARKERS))

        logger.debug(f"Parsed cursor rule {metadata.id}: {len(sections)} sections")
        return CanonicalPackage(
            id=metadata.id,
            name=metadata.name,
            version=metadata.version or passthrough.get('version') or '1.0.0',
            description=description,
            author=metadata.author or passthrough.get('author', ''),
            tags=frozenset(tags),
            source_format=self.format_name,
            metadata=with_taxonomy(passthrough, self.format_name, self.subtype),
            content=CanonicalContent(sections=tuple(sections)),
        )


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ''
