"""
Line scanner that turns heading-structured Markdown into canonical sections.

The scan is a single forward pass. Its state (open section, pending code
block, whether we are inside a fence) lives in one ScanState value that
each step returns; section builders are only touched through that value,
so closing a section always starts the next one from a clean draft.

Transitions:
- "# Title"     closes the open section and opens a "Project Overview"
                context seeded with the title (overview mode), or is
                handled like "##" otherwise
- "## Title"    closes the open section and opens one whose kind comes
                from core.heuristics.infer_section_kind
- "### Title"   starts a pending example (polarity from its marker)
- "```lang"     opens/closes a fence; a closed fence becomes an example
                in examples sections, re-fenced text anywhere else
- "- x"/"1. x"  adds a rule inside rules sections
- "   - Why:"   attaches rationale/examples to the latest rule
- other text    is appended to the open section; text before the first
                heading is dropped unless ScanOptions.preamble_title is set
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from core.canonical_models import (
    ContextSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    PersonaSection,
    Priority,
    Rule,
    RulesSection,
    Section,
)
from core.heuristics import (
    CONTEXT,
    EXAMPLES,
    INSTRUCTIONS,
    PERSONA,
    RULES,
    ORDINAL_RE,
    SUB_BULLET_RE,
    heading_text,
    infer_section_kind,
    is_list_item,
    parse_example_heading,
    strip_list_marker,
)

OVERVIEW_TITLE = 'Project Overview'
IMPORTANT_MARKER = '**Important:**'
PERSONA_TITLES = ('role', 'persona')

_RULE_EXAMPLE_RE = re.compile(r'^Example:\s*`([^`]+)`')
_PERSONA_HEAD_RE = re.compile(r'^(?:(\S+)\s+)?\*\*(.+?)\*\*\s+-\s+(.+)$')
_STYLE_RE = re.compile(r'^\*\*Style:\*\*\s*(.*)$')
_EXPERTISE_MARKER = '**Expertise:**'


@dataclass
class _RuleDraft:
    content: str
    rationale: Optional[str] = None
    examples: List[str] = field(default_factory=list)


@dataclass
class _CodeDraft:
    description: str
    good: Optional[bool] = None
    language: Optional[str] = None
    lines: List[str] = field(default_factory=list)


@dataclass
class _SectionDraft:
    kind: str
    title: str
    lines: List[str] = field(default_factory=list)
    rules: List[_RuleDraft] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)
    ordered: Optional[bool] = None
    optional: bool = False


@dataclass(frozen=True)
class ScanOptions:
    """
    Per-format switches.

    overview_title: treat "# " headings as a Project Overview context
    recognize_persona: parse "## Role" sections back into a persona
    preamble_title: keep text before the first heading as an instructions
        section with this title instead of dropping it
    """
    overview_title: bool = True
    recognize_persona: bool = False
    preamble_title: Optional[str] = None


@dataclass(frozen=True)
class ScanState:
    section: Optional[_SectionDraft] = None
    code: Optional[_CodeDraft] = None
    in_code: bool = False


def parse_sections(body: str, options: ScanOptions = ScanOptions()) -> List[Section]:
    """Scan a Markdown body into canonical sections, in reading order."""
    lines = body.split('\n')
    sections: List[Section] = []
    state = ScanState()
    if options.preamble_title:
        state = ScanState(section=_SectionDraft(INSTRUCTIONS, options.preamble_title, optional=True))

    for index, line in enumerate(lines):
        state = _step(state, line, index, lines, sections, options)

    # unmatched fence: keep what was collected
    if state.in_code and state.code is not None:
        state = _close_fence(state)
    _emit(state.section, sections)
    return sections


def _step(state: ScanState, line: str, index: int, lines: Sequence[str],
          sections: List[Section], options: ScanOptions) -> ScanState:
    if state.in_code:
        if line.startswith('```'):
            return _close_fence(state)
        state.code.lines.append(line)
        return state

    title = heading_text(line, 1)
    if title is not None:
        _emit(state.section, sections)
        if options.overview_title:
            return ScanState(section=_SectionDraft(CONTEXT, OVERVIEW_TITLE, [title]))
        return ScanState(section=_open_section(title, index, lines, options))

    title = heading_text(line, 2)
    if title is not None:
        _emit(state.section, sections)
        return ScanState(section=_open_section(title, index, lines, options))

    title = heading_text(line, 3)
    if title is not None:
        description, good = parse_example_heading(title)
        if state.section is not None and state.section.kind != EXAMPLES:
            state.section.lines.append(line)
        return replace(state, code=_CodeDraft(description, good))

    if line.startswith('```'):
        language = line[3:].strip() or None
        code = state.code
        if code is None:
            code = _CodeDraft('Code example')
        code.language = language
        return replace(state, code=code, in_code=True)

    section = state.section
    if section is not None and section.kind == RULES:
        if is_list_item(line):
            if section.ordered is None:
                section.ordered = bool(ORDINAL_RE.match(line))
            section.rules.append(_RuleDraft(strip_list_marker(line)))
            return state
        if SUB_BULLET_RE.match(line) and section.rules:
            _attach_sub_bullet(section.rules[-1], SUB_BULLET_RE.sub('', line, count=1).strip())
            return state

    if line.strip() and section is not None:
        section.lines.append(line)
    return state


def _open_section(title: str, index: int, lines: Sequence[str], options: ScanOptions) -> _SectionDraft:
    if options.recognize_persona and title.lower() in PERSONA_TITLES:
        return _SectionDraft(PERSONA, title)
    return _SectionDraft(infer_section_kind(title, lines, index), title)


def _close_fence(state: ScanState) -> ScanState:
    code = state.code
    section = state.section
    text = '\n'.join(code.lines)

    if section is not None and section.kind == EXAMPLES:
        section.examples.append(Example(
            description=code.description,
            code=text,
            language=code.language,
            good=code.good,
        ))
    elif section is not None:
        section.lines.append(f"```{code.language or ''}\n{text}\n```")

    return replace(state, code=None, in_code=False)


def _attach_sub_bullet(rule: _RuleDraft, text: str):
    text = text.strip('*').strip()
    for prefix in ('Rationale:', 'Why:'):
        if text.startswith(prefix):
            rule.rationale = text[len(prefix):].strip()
            return
    if text.startswith('Example:'):
        match = _RULE_EXAMPLE_RE.match(text)
        rule.examples.append(match.group(1) if match else text[len('Example:'):].strip())


def _emit(draft: Optional[_SectionDraft], sections: List[Section]):
    if draft is None or (draft.optional and not draft.lines):
        return
    section = _build(draft)
    if section is not None:
        sections.append(section)


def _build(draft: _SectionDraft) -> Optional[Section]:
    text = '\n'.join(draft.lines)

    if draft.kind == RULES:
        if not draft.rules:
            # a rules section with no rules reads as prose
            return InstructionsSection(title=draft.title, content=text)
        return RulesSection(
            title=draft.title,
            items=tuple(Rule(r.content, r.rationale, tuple(r.examples)) for r in draft.rules),
            ordered=bool(draft.ordered),
        )

    if draft.kind == EXAMPLES:
        if not draft.examples and draft.lines:
            return InstructionsSection(title=draft.title, content=text)
        return ExamplesSection(title=draft.title, items=tuple(draft.examples))

    if draft.kind == CONTEXT:
        return ContextSection(title=draft.title, content=text)

    if draft.kind == PERSONA:
        persona = _build_persona(draft.lines)
        if persona is not None:
            return persona
        return InstructionsSection(title=draft.title, content=text)

    return _build_instructions(draft)


def _build_instructions(draft: _SectionDraft) -> InstructionsSection:
    lines = list(draft.lines)
    priority = None
    if lines and lines[0].strip() == IMPORTANT_MARKER:
        priority = Priority.HIGH
        lines = lines[1:]
    return InstructionsSection(title=draft.title, content='\n'.join(lines), priority=priority)


def _build_persona(lines: Sequence[str]) -> Optional[PersonaSection]:
    name = icon = role = None
    style: List[str] = []
    expertise: List[str] = []
    in_expertise = False

    for line in lines:
        stripped = line.strip()
        style_match = _STYLE_RE.match(stripped)
        if style_match:
            style = [s.strip() for s in style_match.group(1).split(',') if s.strip()]
            in_expertise = False
        elif stripped == _EXPERTISE_MARKER:
            in_expertise = True
        elif in_expertise and stripped.startswith('- '):
            expertise.append(stripped[2:].strip())
        elif role is None:
            head = _PERSONA_HEAD_RE.match(stripped)
            if head:
                icon, name, role = head.group(1), head.group(2), head.group(3)
            else:
                role = stripped

    if role is None:
        return None
    return PersonaSection(role=role, name=name, icon=icon, style=tuple(style), expertise=tuple(expertise))


@dataclass(frozen=True)
class TitleBlock:
    """The "# Title" line and first paragraph that open a rendered document."""
    title: Optional[str] = None
    icon: Optional[str] = None
    description: str = ''
    rest: str = ''


def split_title_block(body: str) -> TitleBlock:
    """
    Peel the leading "# Title" heading and its first paragraph off a body.

    When the first non-blank line is not a level-one heading nothing is
    peeled and the whole body is returned as rest.
    """
    lines = body.split('\n')
    index = 0
    while index < len(lines) and not lines[index].strip():
        index += 1

    title = heading_text(lines[index], 1) if index < len(lines) else None
    if title is None:
        return TitleBlock(rest=body)

    icon = None
    first, _, remainder = title.partition(' ')
    if remainder and len(first) <= 2 and not any(ch.isalnum() for ch in first):
        icon, title = first, remainder.strip()

    index += 1
    while index < len(lines) and not lines[index].strip():
        index += 1

    paragraph: List[str] = []
    while index < len(lines) and lines[index].strip() and not lines[index].startswith('#'):
        if lines[index].startswith('```'):
            break
        paragraph.append(lines[index].strip())
        index += 1

    return TitleBlock(
        title=title,
        icon=icon,
        description=' '.join(paragraph),
        rest='\n'.join(lines[index:]),
    )
