"""
Claude Code agent (.claude/agents/*.md) -> canonical parser.

File format:
---
name: agent-name
description: Agent description
tools: Read, Grep, Glob, Bash  # comma-separated string or list
model: sonnet|opus|haiku|inherit
permissionMode: (optional, Claude-specific)
skills: (optional, Claude-specific)
---
Agent instructions in markdown...

The tools list becomes a tools section right after the metadata section.
Prose before the first heading is the agent's core prompt and is kept as
an "Instructions" section. model, permissionMode and skills ride along in
package metadata.
"""

import logging
from typing import Any, Dict, List, Optional

from core.canonical_models import (
    CanonicalContent,
    CanonicalPackage,
    MetadataSection,
    PackageMetadata,
    Section,
    Subtype,
    ToolsSection,
)
from core.frontmatter import parse_frontmatter
from core.heuristics import infer_tags
from core.taxonomy import with_taxonomy
from adapters.shared.markdown_parser import ScanOptions, parse_sections, split_title_block

logger = logging.getLogger(__name__)

SCAN_OPTIONS = ScanOptions(overview_title=False, recognize_persona=True, preamble_title='Instructions')
TAG_MARKERS = ((('claude', 'anthropic'), 'claude'),)


class ClaudeAgentParser:
    """Stateless parser for Claude Code agent files."""

    format_name = 'claude'
    subtype = Subtype.AGENT

    def parse(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        frontmatter, body = parse_frontmatter(content)
        header = split_title_block(body)

        description = (
            metadata.description
            or _string(frontmatter.get('description'))
            or header.description
        )
        title = metadata.name or _string(frontmatter.get('name')) or header.title or metadata.id

        sections: List[Section] = [MetadataSection(title=title, description=description, icon=header.icon)]
        tools = self._parse_tools(frontmatter.get('tools'))
        if tools:
            sections.append(ToolsSection(items=tuple(tools)))
        sections.extend(parse_sections(header.rest, SCAN_OPTIONS))

        passthrough: Dict[str, Any] = {'title': title, 'description': description}
        if _string(frontmatter.get('name')):
            passthrough['claude_name'] = frontmatter['name']
        model = self._normalize_model(frontmatter.get('model'))
        if model:
            passthrough['model'] = model
        if 'permissionMode' in frontmatter:
            passthrough['claude_permission_mode'] = frontmatter['permissionMode']
        if 'skills' in frontmatter:
            passthrough['claude_skills'] = frontmatter['skills']

        tags = set(metadata.tags)
        tags.update(infer_tags(body, TAG_MARKERS))

        logger.debug(f"Parsed claude agent {metadata.id}: {len(sections)} sections, {len(tools)} tools")
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

    def _parse_tools(self, tools_value: Any) -> List[str]:
        """
        Parse tools from comma-separated string or list.

        Args:
            tools_value: Either string "tool1, tool2" or list ["tool1", "tool2"]

        Returns:
            List of tool names
        """
        if isinstance(tools_value, str):
            return [t.strip() for t in tools_value.split(',') if t.strip()]
        elif isinstance(tools_value, list):
            return [str(t) for t in tools_value]
        return []

    def _normalize_model(self, model: Any) -> Optional[str]:
        """
        Normalize model name to canonical form.

        Claude already uses short names (sonnet, opus, haiku) which
        are the canonical form, so just lowercase and return.
        """
        if not model or not isinstance(model, str):
            return None
        return model.lower()


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ''
