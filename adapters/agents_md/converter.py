"""
Canonical -> AGENTS.md converter.

Plain Markdown with no front matter. Every section kind except tools has
a Markdown rendering; custom sections survive when unowned or owned by
agents.md. Package metadata that AGENTS.md cannot hold (globs, inclusion
mode...) is simply not written.
"""

from typing import Any, Optional

from core.canonical_models import (
    ContextSection,
    CustomSection,
    ExamplesSection,
    InstructionsSection,
    MetadataSection,
    PersonaSection,
    RulesSection,
    ToolsSection,
)
from core.frontmatter import quote
from adapters.shared.markdown_renderer import (
    TOOLS_OWNER,
    MarkdownConverter,
    RenderContext,
    render_context,
    render_examples,
    render_instructions,
    render_metadata,
    render_persona,
    render_rules,
)


class AgentsMdConverter(MarkdownConverter):
    """Renders packages as AGENTS.md project instructions."""

    format_name = 'agents.md'

    def render_header(self, ctx: RenderContext) -> str:
        agents_config: Any = ctx.package.get_metadata('agents_md_config') or {}
        if not agents_config:
            return ''
        # project/scope front matter read back by the parser
        lines = ['---']
        for key in ('project', 'scope'):
            if agents_config.get(key):
                lines.append(f"{key}: {quote(agents_config[key])}")
        lines.append('---')
        return '\n'.join(lines) if len(lines) > 2 else ''

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
        ctx.skip(f"Tools section skipped ({TOOLS_OWNER}-specific)")
        return None

    def convert_custom(self, section: CustomSection, ctx: RenderContext) -> Optional[str]:
        return self.skip_foreign_custom(section, ctx)
