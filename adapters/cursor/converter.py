"""
Canonical -> Cursor rule (.mdc) converter.

Cursor's own tooling only reads three front matter keys: description,
globs and alwaysApply. The remaining package fields (title, version, tags,
author) go into the same block as comment lines, which Cursor ignores and
the Cursor parser reads back.

Tools sections are dropped (they only mean something to Claude); custom
sections are kept when unowned or owned by cursor.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

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
from core.frontmatter import quote, render_block
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
from adapters.shared.options import as_bool, as_tuple, option, option_list


@dataclass(frozen=True)
class CursorConfig:
    """Optional overrides for the MDC header."""
    version: Optional[str] = None
    globs: Optional[Tuple[str, ...]] = None
    always_apply: Optional[bool] = None
    author: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> 'CursorConfig':
        options = options or {}
        always_apply = option(options, 'alwaysApply', 'always_apply')
        return cls(
            version=option(options, 'version'),
            globs=option_list(options, 'globs'),
            always_apply=as_bool(always_apply),
            author=option(options, 'author'),
            tags=option_list(options, 'tags'),
        )


class CursorConverter(MarkdownConverter):
    """Renders packages as Cursor MDC rule files."""

    format_name = 'cursor'

    def prepare_config(self, package: CanonicalPackage, config: Any) -> CursorConfig:
        if isinstance(config, CursorConfig):
            return config
        return CursorConfig.from_options(config)

    def render_header(self, ctx: RenderContext) -> str:
        package = ctx.package
        config: CursorConfig = ctx.config
        lines: List[str] = []

        description = package.get_metadata('description') or package.description
        if description:
            lines.append(f"description: {quote(description)}")

        globs = config.globs if config.globs is not None else as_tuple(package.get_metadata('globs'))
        if globs:
            lines.append('globs:')
            for glob in globs:
                lines.append(f"  - {quote(glob)}")

        always_apply = config.always_apply
        if always_apply is None:
            always_apply = bool(as_bool(package.get_metadata('always_apply')))
        lines.append(f"alwaysApply: {'true' if always_apply else 'false'}")

        # extension fields, invisible to Cursor
        title = package.get_metadata('title') or package.id
        if title:
            lines.append(f"# title: {quote(title)}")

        version = config.version or package.get_metadata('version')
        if version:
            lines.append(f"# version: {quote(version)}")

        tags = config.tags if config.tags is not None else tuple(sorted(package.tags))
        if tags:
            lines.append('# tags:')
            for tag in tags:
                lines.append(f"#   - {quote(tag)}")

        author = config.author or package.author
        if author:
            lines.append(f"# author: {quote(author)}")

        return render_block(lines)

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
