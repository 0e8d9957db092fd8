"""
Canonical -> Claude Code agent converter.

Claude is the one target that understands tools: every tools section is
folded into the front matter "tools" string instead of the body. Name,
description and model go into front matter as well; the sections render
as the Markdown prompt body.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from core.canonical_models import (
    CanonicalPackage,
    ContextSection,
    CustomSection,
    ExamplesSection,
    InstructionsSection,
    MetadataSection,
    PersonaSection,
    RulesSection,
    ToolsSection,
)
from core.errors import InvalidSectionError
from adapters.shared.markdown_renderer import (
    MarkdownConverter,
    RenderContext,
    render_context,
    render_examples,
    render_instructions,
    render_metadata,
    render_persona,
    render_rules,
)
from adapters.shared.options import option

MODELS = ('sonnet', 'opus', 'haiku', 'inherit')


@dataclass(frozen=True)
class ClaudeConfig:
    model: Optional[str] = None

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> 'ClaudeConfig':
        options = options or {}
        return cls(model=option(options, 'model'))


class ClaudeConverter(MarkdownConverter):
    """Renders packages as Claude Code agent files."""

    format_name = 'claude'

    def prepare_config(self, package: CanonicalPackage, config: Any) -> ClaudeConfig:
        if isinstance(config, ClaudeConfig):
            return config
        return ClaudeConfig.from_options(config)

    def render_header(self, ctx: RenderContext) -> str:
        package = ctx.package
        config: ClaudeConfig = ctx.config

        frontmatter: Dict[str, Any] = {'name': _agent_name(package)}

        description = package.description or package.get_metadata('description')
        if description:
            frontmatter['description'] = description
        else:
            ctx.warnings.append("Agent has no description; Claude uses it to decide when to delegate")

        tools = _collect_tools(package)
        if tools:
            frontmatter['tools'] = ', '.join(tools)

        model = config.model or package.get_metadata('model')
        if model:
            if model.lower() not in MODELS:
                ctx.warnings.append(f"Model '{model}' is not a Claude model alias; written as given")
            frontmatter['model'] = model

        # Restore Claude-specific metadata
        if package.get_metadata('claude_permission_mode'):
            frontmatter['permissionMode'] = package.get_metadata('claude_permission_mode')

        if package.get_metadata('claude_skills'):
            frontmatter['skills'] = package.get_metadata('claude_skills')

        yaml_str = yaml.dump(frontmatter, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return f"---\n{yaml_str}---"

    def convert_metadata(self, section: MetadataSection, ctx: RenderContext) -> Optional[str]:
        return render_metadata(section)

    def convert_instructions(self, section: InstructionsSection, ctx: RenderContext) -> Optional[str]:
        return render_instructions(section)

    def convert_rules(self, section: RulesSection, ctx: RenderContext) -> Optional[str]:
        return render_rules(section)

    def convert_examples(self, section: ExamplesSection, ctx: RenderContext) -> Optional[str]:
        return render_examples(section)

    def convert_persona(self, section: PersonaSection, ctx: RenderContext) -> Optional[str]:
        return render_persona(section)

    def convert_context(self, section: ContextSection, ctx: RenderContext) -> Optional[str]:
        return render_context(section)

    def convert_tools(self, section: ToolsSection, ctx: RenderContext) -> Optional[str]:
        # already written to front matter
        return None

    def convert_custom(self, section: CustomSection, ctx: RenderContext) -> Optional[str]:
        return self.skip_foreign_custom(section, ctx)


def _agent_name(package: CanonicalPackage) -> str:
    """Claude agent names are lowercase and hyphenated."""
    name = package.get_metadata('claude_name') or package.name or package.id
    slug = re.sub(r'[^a-z0-9]+', '-', str(name).lower()).strip('-')
    return slug or 'agent'


def _collect_tools(package: CanonicalPackage) -> List[str]:
    tools: List[str] = []
    for section in package.content.sections_of(ToolsSection):
        for tool in section.items:
            if not isinstance(tool, str):
                raise InvalidSectionError(f"tools section items must be strings, got {type(tool).__name__}")
            if tool not in tools:
                tools.append(tool)
    return tools
