"""
Markdown rendering shared by the Markdown-based converters.

MarkdownConverter is the template every converter fills in. It declares
one abstract hook per section kind, so a converter that forgets a kind
cannot be instantiated: each one must either render the kind or skip it
with a warning. convert() drives the hooks in document order and turns
any fault inside them into a failed, zero-score result.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

from core.canonical_models import (
    CanonicalPackage,
    ContextSection,
    ConversionResult,
    CustomSection,
    ExamplesSection,
    InstructionsSection,
    MetadataSection,
    PersonaSection,
    Priority,
    RulesSection,
    ToolsSection,
    section_kind,
)
from core.errors import InvalidSectionError
from core.quality import build_result, failed_result

logger = logging.getLogger(__name__)

TOOLS_OWNER = 'Claude'


@dataclass
class RenderContext:
    """Per-call state handed to every section hook."""
    package: CanonicalPackage
    config: Any = None
    warnings: List[str] = field(default_factory=list)

    def skip(self, message: str):
        logger.debug(message)
        self.warnings.append(message)


def _require_str(value: Any, section: str, field_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidSectionError(
            f"{section} section field '{field_name}' must be a string, got {type(value).__name__}"
        )
    return value


def _require_list(value: Any, section: str, field_name: str) -> list:
    if isinstance(value, str) or not hasattr(value, '__iter__'):
        raise InvalidSectionError(f"{section} section field '{field_name}' must be a list")
    return list(value)


def render_metadata(section: MetadataSection, title: Optional[str] = None) -> str:
    """Top-level heading (with icon) followed by the description."""
    title = _require_str(title if title is not None else section.title, 'metadata', 'title')
    lines = []
    if section.icon:
        lines.append(f"# {_require_str(section.icon, 'metadata', 'icon')} {title}")
    else:
        lines.append(f"# {title}")

    if section.description:
        lines.append('')
        lines.append(_require_str(section.description, 'metadata', 'description'))

    return '\n'.join(lines)


def render_instructions(section: InstructionsSection) -> str:
    lines = [f"## {_require_str(section.title, 'instructions', 'title')}", '']
    if section.priority in (Priority.HIGH, 'high'):
        lines.append('**Important:**')
        lines.append('')
    lines.append(_require_str(section.content, 'instructions', 'content'))
    return '\n'.join(lines)


def render_rules(section: RulesSection) -> str:
    """
    Numbered list when ordered, "-" bullets otherwise, with indented
    rationale and example sub-bullets.
    """
    lines = [f"## {_require_str(section.title, 'rules', 'title')}", '']

    for index, rule in enumerate(_require_list(section.items, 'rules', 'items'), start=1):
        prefix = f"{index}." if section.ordered else '-'
        lines.append(f"{prefix} {_require_str(rule.content, 'rules', 'content')}")

        if rule.rationale:
            lines.append(f"   - *Rationale: {rule.rationale}*")

        for example in rule.examples or ():
            lines.append(f"   - Example: `{example}`")

    return '\n'.join(lines)


def render_examples(section: ExamplesSection) -> str:
    lines = [f"## {_require_str(section.title, 'examples', 'title')}", '']

    for example in _require_list(section.items, 'examples', 'items'):
        prefix = '✅ Good' if example.is_good else '❌ Bad'
        lines.append(f"### {prefix}: {_require_str(example.description, 'examples', 'description')}")
        lines.append('')
        lines.append('```' + (example.language or ''))
        lines.append(_require_str(example.code, 'examples', 'code'))
        lines.append('```')
        lines.append('')

    return '\n'.join(lines).rstrip()


def render_persona(section: PersonaSection) -> str:
    role = _require_str(section.role, 'persona', 'role')
    lines = ['## Role', '']

    if section.icon and section.name:
        lines.append(f"{section.icon} **{section.name}** - {role}")
    elif section.name:
        lines.append(f"**{section.name}** - {role}")
    else:
        lines.append(role)

    style = _require_list(section.style, 'persona', 'style')
    if style:
        lines.append('')
        lines.append(f"**Style:** {', '.join(style)}")

    expertise = _require_list(section.expertise, 'persona', 'expertise')
    if expertise:
        lines.append('')
        lines.append('**Expertise:**')
        for area in expertise:
            lines.append(f"- {area}")

    return '\n'.join(lines)


def render_context(section: ContextSection) -> str:
    return '\n'.join([
        f"## {_require_str(section.title, 'context', 'title')}",
        '',
        _require_str(section.content, 'context', 'content'),
    ])


class MarkdownConverter(ABC):
    """
    Base converter: header + sections rendered in document order.

    Subclasses set format_name and implement every convert_* hook. A hook
    returns the rendered text, or None after recording a warning through
    ctx.skip() when the target cannot express the section.
    """

    format_name: str = ''

    def convert(self, package: CanonicalPackage, config: Any = None) -> ConversionResult:
        """
        Convert a package.

        Raises:
            MissingConfigurationError: From prepare_config(), before any output
        """
        config = self.prepare_config(package, config)
        ctx = RenderContext(package=package, config=config)

        try:
            header = self.render_header(ctx)
            body = self.render_body(ctx)
        except Exception as e:
            logger.error(f"{self.format_name} conversion of {package.id} failed: {e}")
            return failed_result(self.format_name, e, ctx.warnings)

        content = f"{header}\n\n{body}" if header and body else (header or body)
        return build_result(content.rstrip() + '\n', self.format_name, ctx.warnings)

    def prepare_config(self, package: CanonicalPackage, config: Any) -> Any:
        """Validate/complete configuration; raise for missing required values."""
        return config

    def render_header(self, ctx: RenderContext) -> str:
        """Text placed before the sections (front matter); empty by default."""
        return ''

    def render_body(self, ctx: RenderContext) -> str:
        handlers = {
            MetadataSection: self.convert_metadata,
            InstructionsSection: self.convert_instructions,
            RulesSection: self.convert_rules,
            ExamplesSection: self.convert_examples,
            PersonaSection: self.convert_persona,
            ContextSection: self.convert_context,
            ToolsSection: self.convert_tools,
            CustomSection: self.convert_custom,
        }
        parts = []
        for section in ctx.package.content.sections:
            handler = handlers.get(type(section))
            if handler is None:
                ctx.skip(f"Unknown section type skipped: {section_kind(section)}")
                continue
            rendered = handler(section, ctx)
            if rendered:
                parts.append(rendered.rstrip())
        return '\n\n'.join(parts)

    def skip_foreign_custom(self, section: CustomSection, ctx: RenderContext) -> Optional[str]:
        """Emit custom content only when it is unowned or owned by this format."""
        owner = section.owning_ecosystem
        if not owner or owner == self.format_name:
            return _require_str(section.content, 'custom', 'content')
        ctx.skip(f"Custom {owner} section skipped")
        return None

    @abstractmethod
    def convert_metadata(self, section: MetadataSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_instructions(self, section: InstructionsSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_rules(self, section: RulesSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_examples(self, section: ExamplesSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_persona(self, section: PersonaSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_context(self, section: ContextSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_tools(self, section: ToolsSection, ctx: RenderContext) -> Optional[str]:
        pass

    @abstractmethod
    def convert_custom(self, section: CustomSection, ctx: RenderContext) -> Optional[str]:
        pass
