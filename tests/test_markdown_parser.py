"""
Unit tests for the shared Markdown section scanner.

Tests cover:
- Heading transitions and section kinds
- Rules with rationale/example sub-bullets
- Code fences inside and outside examples sections
- Persona and priority recovery
- Preamble handling and the title block
"""

from core.canonical_models import (
    ContextSection,
    ExamplesSection,
    InstructionsSection,
    PersonaSection,
    Priority,
    RulesSection,
)
from adapters.shared.markdown_parser import ScanOptions, parse_sections, split_title_block

FLAT = ScanOptions(overview_title=False)


class TestHeadings:
    def test_title_opens_project_overview(self):
        sections = parse_sections('# My Rules\n\nIntro text.\n')
        assert sections == [ContextSection(title='Project Overview', content='My Rules\nIntro text.')]

    def test_title_without_overview_mode(self):
        sections = parse_sections('# Background\n\nSome history.', FLAT)
        assert sections == [ContextSection(title='Background', content='Some history.')]

    def test_text_before_first_heading_is_dropped(self):
        sections = parse_sections('stray line\n\n## Setup\n\nRun make.', FLAT)
        assert sections == [InstructionsSection(title='Setup', content='Run make.')]

    def test_sections_keep_reading_order(self):
        body = '## About\n\nx\n\n## Rules\n\n- a\n\n## Usage\n\n### Call it\n\n```py\nf()\n```\n'
        kinds = [s.kind for s in parse_sections(body, FLAT)]
        assert kinds == ['context', 'rules', 'examples']


class TestRules:
    def test_rationale_sub_bullet(self):
        body = '## Guidelines\n\n- Use strict types\n   - Rationale: fewer runtime errors\n'
        (rules,) = parse_sections(body, FLAT)
        assert isinstance(rules, RulesSection)
        assert len(rules.items) == 1
        assert rules.items[0].content == 'Use strict types'
        assert rules.items[0].rationale == 'fewer runtime errors'
        assert rules.ordered is False

    def test_italic_why_and_inline_example(self):
        body = '\n'.join([
            '## Rules',
            '',
            '- Prefer f-strings',
            '   - *Why: easier to read*',
            '   - Example: `f"{name}"`',
            '- Keep functions short',
        ])
        (rules,) = parse_sections(body, FLAT)
        first, second = rules.items
        assert first.rationale == 'easier to read'
        assert first.examples == ('f"{name}"',)
        assert second.rationale is None

    def test_sub_bullet_attaches_to_latest_rule(self):
        body = '## Rules\n\n- one\n- two\n   - Why: because\n'
        (rules,) = parse_sections(body, FLAT)
        assert rules.items[0].rationale is None
        assert rules.items[1].rationale == 'because'

    def test_ordinal_items_make_ordered_rules(self):
        (rules,) = parse_sections('## Steps to follow (rules)\n\n1. first\n2. second\n', FLAT)
        assert rules.ordered is True
        assert [r.content for r in rules.items] == ['first', 'second']

    def test_rules_heading_without_items_reads_as_prose(self):
        sections = parse_sections('## Rules\n\nBe nice.', FLAT)
        assert sections == [InstructionsSection(title='Rules', content='Be nice.')]


class TestCodeFences:
    def test_bad_example_polarity(self):
        body = '## Examples\n\n### ❌ Bad: missing assertions\n\n```python\ndef test_x():\n    run()\n```\n'
        (examples,) = parse_sections(body, FLAT)
        assert isinstance(examples, ExamplesSection)
        (example,) = examples.items
        assert example.description == 'missing assertions'
        assert example.good is False
        assert example.language == 'python'
        assert example.code == 'def test_x():\n    run()'

    def test_fence_without_heading_gets_default_description(self):
        (examples,) = parse_sections('## Examples\n\n```\nx\n```', FLAT)
        assert examples.items[0].description == 'Code example'
        assert examples.items[0].language is None

    def test_headings_inside_fence_are_code(self):
        body = '## Examples\n\n```md\n## Not a heading\n- not a rule\n```\n'
        (examples,) = parse_sections(body, FLAT)
        assert examples.items[0].code == '## Not a heading\n- not a rule'

    def test_fence_outside_examples_is_kept_as_text(self):
        body = '## Background\n\nBuild with:\n\n```bash\nmake\n```\n'
        (context,) = parse_sections(body, FLAT)
        assert context.content == 'Build with:\n```bash\nmake\n```'

    def test_unmatched_fence_keeps_collected_code(self):
        (examples,) = parse_sections('## Examples\n\n```python\nx = 1', FLAT)
        assert examples.items[0].code == 'x = 1'


class TestPersonaAndPriority:
    def test_role_section_becomes_persona(self):
        body = '\n'.join([
            '## Role',
            '',
            '🧪 **Tess** - Test engineer',
            '',
            '**Style:** thorough, direct',
            '',
            '**Expertise:**',
            '- pytest',
            '- mocking',
        ])
        (persona,) = parse_sections(body, ScanOptions(overview_title=False, recognize_persona=True))
        assert persona == PersonaSection(
            role='Test engineer',
            name='Tess',
            icon='🧪',
            style=('thorough', 'direct'),
            expertise=('pytest', 'mocking'),
        )

    def test_role_section_without_persona_support(self):
        (section,) = parse_sections('## Role\n\nReviewer', FLAT)
        assert isinstance(section, InstructionsSection)

    def test_important_marker_sets_priority(self):
        (section,) = parse_sections('## Deploys\n\n**Important:**\n\nNever push on Friday.', FLAT)
        assert section.priority is Priority.HIGH
        assert section.content == 'Never push on Friday.'


class TestPreamble:
    OPTIONS = ScanOptions(overview_title=False, preamble_title='Instructions')

    def test_preamble_kept(self):
        sections = parse_sections('You review code.\n\n## Focus\n\nSecurity first.', self.OPTIONS)
        assert sections == [
            InstructionsSection(title='Instructions', content='You review code.'),
            InstructionsSection(title='Focus', content='Security first.'),
        ]

    def test_empty_preamble_dropped(self):
        sections = parse_sections('\n## Focus\n\nSecurity first.', self.OPTIONS)
        assert len(sections) == 1


class TestTitleBlock:
    def test_icon_title_and_description(self):
        block = split_title_block('# 🧪 Testing\n\nHow we test.\nMore.\n\n## Rules\n- a')
        assert block.icon == '🧪'
        assert block.title == 'Testing'
        assert block.description == 'How we test. More.'
        assert block.rest.strip() == '## Rules\n- a'

    def test_plain_title(self):
        block = split_title_block('# Testing Guide\n\n## Rules')
        assert block.icon is None
        assert block.title == 'Testing Guide'
        assert block.description == ''

    def test_no_title(self):
        block = split_title_block('## Rules\n- a')
        assert block.title is None
        assert block.rest == '## Rules\n- a'
