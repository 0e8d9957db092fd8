"""
Canonical -> Kiro steering file converter.

Kiro steering files declare when they apply through an inclusion mode.
There is no safe default for it, so the caller must choose one:

- always     loaded into every interaction
- manual     loaded when referenced with #name
- fileMatch  loaded when an open file matches fileMatchPattern

A missing mode, an unknown mode, or fileMatch without a pattern raises
MissingConfigurationError before anything is rendered. Kiro has no
notion of personas or tools, so those sections are skipped.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

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
from core.errors import MissingConfigurationError
from core.frontmatter import quote, render_block
from adapters.shared.markdown_renderer import (
    TOOLS_OWNER,
    MarkdownConverter,
    RenderContext,
    render_context,
    render_examples,
    render_instructions,
    render_metadata,
    render_rules,
)
from adapters.shared.options import option

INCLUSION_MODES = ('always', 'manual', 'fileMatch')
FILE_MATCH = 'fileMatch'


@dataclass(frozen=True)
class KiroConfig:
    inclusion: Optional[str] = None
    file_match_pattern: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> 'KiroConfig':
        options = options or {}
        return cls(
            inclusion=option(options, 'inclusion'),
            file_match_pattern=option(options, 'fileMatchPattern', 'file_match_pattern'),
            domain=option(options, 'domain'),
        )

    def validate(self) -> 'KiroConfig':
        """
        Raises:
            MissingConfigurationError: If inclusion is absent/unknown, or
                fileMatch mode has no fileMatchPattern
        """
        if not self.inclusion:
            raise MissingConfigurationError(
                "Kiro format requires inclusion mode (one of: always, manual, fileMatch)",
                option='inclusion',
            )
        if self.inclusion not in INCLUSION_MODES:
            raise MissingConfigurationError(
                f"Kiro format requires inclusion mode to be one of "
                f"{', '.join(INCLUSION_MODES)}; got '{self.inclusion}'",
                option='inclusion',
            )
        if self.inclusion == FILE_MATCH and not self.file_match_pattern:
            raise MissingConfigurationError(
                "fileMatch inclusion mode requires fileMatchPattern",
                option='fileMatchPattern',
            )
        return self


class KiroConverter(MarkdownConverter):
    """Renders packages as Kiro steering files."""

    format_name = 'kiro'

    def prepare_config(self, package: CanonicalPackage, config: Any) -> KiroConfig:
        if not isinstance(config, KiroConfig):
            config = KiroConfig.from_options(config)
        return config.validate()

    def render_header(self, ctx: RenderContext) -> str:
        config: KiroConfig = ctx.config
        lines: List[str] = [f"inclusion: {config.inclusion}"]
        if config.inclusion == FILE_MATCH:
            lines.append(f"fileMatchPattern: {quote(config.file_match_pattern)}")
        if config.domain:
            lines.append(f"domain: {quote(config.domain)}")

        if not _description(ctx.package):
            ctx.skip("Description skipped (package has no description)")

        return render_block(lines)

    def convert_metadata(self, section: MetadataSection, ctx: RenderContext) -> Optional[str]:
        return render_metadata(section, title=ctx.config.domain)

    def convert_instructions(self, section: InstructionsSection, ctx: RenderContext) -> Optional[str]:
        return render_instructions(section)

    def convert_rules(self, section: RulesSection, ctx: RenderContext) -> Optional[str]:
        return render_rules(section)

    def convert_examples(self, section: ExamplesSection, ctx: RenderContext) -> Optional[str]:
        return render_examples(section)

    def convert_persona(self, section: PersonaSection, ctx: RenderContext) -> Optional[str]:
        ctx.skip("Persona section skipped (not supported by Kiro)")
        return None

    def convert_context(self, section: ContextSection, ctx: RenderContext) -> Optional[str]:
        return render_context(section)

    def convert_tools(self, section: ToolsSection, ctx: RenderContext) -> Optional[str]:
        ctx.skip(f"Tools section skipped ({TOOLS_OWNER}-specific)")
        return None

    def convert_custom(self, section: CustomSection, ctx: RenderContext) -> Optional[str]:
        return self.skip_foreign_custom(section, ctx)


def _description(package: CanonicalPackage) -> str:
    return package.description or package.get_metadata('description') or ''
