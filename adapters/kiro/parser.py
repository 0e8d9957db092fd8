"""
Kiro steering file -> canonical parser.

Front matter keys inclusion, fileMatchPattern and domain are kept as
package metadata so a later conversion can reuse them; the body is read
the same way as a Cursor rule body.
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
from core.heuristics import infer_tags
from core.taxonomy import with_taxonomy
from adapters.shared.markdown_parser import ScanOptions, parse_sections, split_title_block

logger = logging.getLogger(__name__)

SCAN_OPTIONS = ScanOptions(overview_title=False, recognize_persona=True)
TAG_MARKERS = ((('kiro', 'steering'), 'kiro'),)

FRONTMATTER_FIELDS = {
    'inclusion': 'inclusion',
    'fileMatchPattern': 'file_match_pattern',
    'domain': 'domain',
}


class KiroParser:
    """Stateless parser for Kiro steering files."""

    format_name = 'kiro'
    subtype = Subtype.RULE

    def parse(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        frontmatter, body = parse_frontmatter(content)
        header = split_title_block(body)
        description = metadata.description or header.description

        sections = [
            MetadataSection(title=metadata.name, description=description, icon=header.icon),
            *parse_sections(header.rest, SCAN_OPTIONS),
        ]

        passthrough: Dict[str, Any] = {'title': metadata.name, 'description': description}
        for native_key, key in FRONTMATTER_FIELDS.items():
            value = frontmatter.get(native_key)
            if isinstance(value, str) and value:
                passthrough[key] = value

        tags = set(metadata.tags)
        tags.update(infer_tags(body, TAG_MARKERS))

        logger.debug(f"Parsed kiro steering file {metadata.id}: {len(sections)} sections")
        return CanonicalPackage(
            id=metadata.id,
            name=metadata.name,
            version=metadata.version or '1.0.0',
            description=description,
            author=metadata.author or '',
            tags=frozenset(tags),
            source_format=self.format_name,
            metadata=with_taxonomy(passthrough, self.format_name, self.subtype),
            content=CanonicalContent(sections=tuple(sections)),
        )
