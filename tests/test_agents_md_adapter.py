"""
Unit tests for the AGENTS.md adapter.

Tests cover:
- Parsing project instructions into canonical sections
- Graceful degradation on malformed input
- Rendering back to Markdown
- File path detection
"""

import pytest
from pathlib import Path

from core.canonical_models import (
    ContextSection,
    ExamplesSection,
    MetadataSection,
    PackageMetadata,
    RulesSection,
    ToolsSection,
)
from adapters import AgentsMdAdapter

ROUND_TRIP_TEXT = "# My Rules\n\nIntro text.\n\n## Guidelines\n\n- Use strict types\n   - Rationale: fewer runtime errors\n"

AGENTS_MD = """# Payments Service

Python API that talks to the payment provider.

## Coding Standards

1. Use type hints everywhere
   - Rationale: mypy runs in CI
2. Never log card numbers

## Examples

### ✅ Good: explicit timeout

```python
requests.get(url, timeout=5)
```

### ❌ Bad: no timeout

```python
requests.get(url)
```

## Background

Runs on the codex sandbox in CI.
"""


class TestAgentsMdParsing:
    """Tests for AGENTS.md -> canonical."""

    @pytest.fixture
    def adapter(self):
        return AgentsMdAdapter()

    @pytest.fixture
    def metadata(self):
        return PackageMetadata(id='payments', name='Payments Service', tags=('python',))

    def test_round_trip_scenario(self, adapter, metadata):
        package = adapter.to_canonical(ROUND_TRIP_TEXT, metadata)

        contexts = package.content.sections_of(ContextSection)
        assert len(contexts) == 1
        assert contexts[0].title == 'Project Overview'
        assert 'My Rules' in contexts[0].content

        rules = package.content.sections_of(RulesSection)
        assert len(rules) == 1
        assert rules[0].title == 'Guidelines'
        assert len(rules[0].items) == 1
        assert rules[0].items[0].content == 'Use strict types'
        assert rules[0].items[0].rationale == 'fewer runtime errors'

    def test_metadata_section_comes_first(self, adapter, metadata):
        package = adapter.to_canonical(AGENTS_MD, metadata)
        first = package.sections[0]
        assert isinstance(first, MetadataSection)
        assert first.title == 'Payments Service'
        assert first.description == 'Python API that talks to the payment provider.'

    def test_caller_description_wins(self, adapter):
        metadata = PackageMetadata(id='p', name='P', description='Given')
        package = adapter.to_canonical(AGENTS_MD, metadata)
        assert package.description == 'Given'

    def test_sections_and_polarity(self, adapter, metadata):
        package = adapter.to_canonical(AGENTS_MD, metadata)
        kinds = [s.kind for s in package.sections]
        assert kinds == ['metadata', 'context', 'rules', 'examples', 'context']

        (rules,) = package.content.sections_of(RulesSection)
        assert rules.ordered is True
        assert rules.items[0].rationale == 'mypy runs in CI'

        (examples,) = package.content.sections_of(ExamplesSection)
        assert [(e.description, e.good) for e in examples.items] == [
            ('explicit timeout', True),
            ('no timeout', False),
        ]

    def test_identity_taxonomy_and_tags(self, adapter, metadata):
        package = adapter.to_canonical(AGENTS_MD, metadata)
        assert package.id == 'payments'
        assert package.source_format == 'agents.md'
        assert package.get_metadata('format') == 'agents.md'
        assert package.get_metadata('subtype') == 'rule'
        assert {'python', 'api', 'codex'} <= package.tags

    def test_project_scope_frontmatter(self, adapter, metadata):
        content = '---\nproject: payments\nscope: backend\n---\n' + AGENTS_MD
        package = adapter.to_canonical(content, metadata)
        assert package.get_metadata('agents_md_config') == {'project': 'payments', 'scope': 'backend'}


class TestAgentsMdDegradation:
    """Malformed input never raises."""

    @pytest.fixture
    def adapter(self):
        return AgentsMdAdapter()

    @pytest.fixture
    def metadata(self):
        return PackageMetadata(id='x', name='X')

    def test_empty_string(self, adapter, metadata):
        package = adapter.to_canonical('', metadata)
        assert len(package.sections) == 1
        assert isinstance(package.sections[0], MetadataSection)

    def test_frontmatter_only(self, adapter, metadata):
        package = adapter.to_canonical('---\nproject: x\n---\n', metadata)
        assert len(package.sections) == 1

    def test_broken_frontmatter(self, adapter, metadata):
        package = adapter.to_canonical('---\nproject: [oops\n---\n# Title\n', metadata)
        assert isinstance(package.sections[0], MetadataSection)

    def test_unmatched_fence(self, adapter, metadata):
        package = adapter.to_canonical('## Examples\n\n```python\nprint(1)\n', metadata)
        (examples,) = package.content.sections_of(ExamplesSection)
        assert examples.items[0].code.startswith('print(1)')


class TestAgentsMdRendering:
    """Tests for canonical -> AGENTS.md."""

    @pytest.fixture
    def adapter(self):
        return AgentsMdAdapter()

    def test_render_and_reparse_keeps_structure(self, adapter):
        metadata = PackageMetadata(id='payments', name='Payments Service')
        package = adapter.to_canonical(AGENTS_MD, metadata)
        result = adapter.from_canonical(package)

        assert result.format == 'agents.md'
        assert result.quality_score == 100
        assert not result.content.startswith('---')
        assert '1. Use type hints everywhere' in result.content
        assert '   - *Rationale: mypy runs in CI*' in result.content
        assert '### ❌ Bad: no timeout' in result.content

        again = adapter.to_canonical(result.content, metadata)
        (rules,) = again.content.sections_of(RulesSection)
        assert len(rules.items) == 2
        (examples,) = again.content.sections_of(ExamplesSection)
        assert [e.good for e in examples.items] == [True, False]

    def test_tools_skipped(self, adapter):
        package = adapter.to_canonical('# T\n', PackageMetadata(id='t', name='T'))
        package = package.with_sections([*package.sections, ToolsSection(items=('WebFetch',))])
        result = adapter.from_canonical(package)
        assert 'WebFetch' not in result.content
        assert result.warnings == ('Tools section skipped (Claude-specific)',)
        assert result.quality_score == 90

    def test_project_scope_written_back(self, adapter):
        content = '---\nproject: payments\n---\n# Payments\n'
        package = adapter.to_canonical(content, PackageMetadata(id='p', name='Payments'))
        result = adapter.from_canonical(package)
        assert result.content.startswith('---\nproject: "payments"\n---\n')

    def test_project_and_scope_with_colons_round_trip(self, adapter):
        metadata = PackageMetadata(id='acme', name='Acme')
        package = adapter.to_canonical('# Acme\n\nCore services.\n', metadata)
        package = package.with_metadata(agents_md_config={'project': 'Acme: core', 'scope': 'api: v2'})
        result = adapter.from_canonical(package)

        again = adapter.to_canonical(result.content, metadata)
        assert again.get_metadata('agents_md_config') == {'project': 'Acme: core', 'scope': 'api: v2'}


class TestAgentsMdPaths:
    def test_can_handle(self):
        adapter = AgentsMdAdapter()
        assert adapter.can_handle(Path('AGENTS.md'))
        assert adapter.can_handle(Path('repo/agents.md'))
        assert not adapter.can_handle(Path('README.md'))

    def test_output_path(self):
        adapter = AgentsMdAdapter()
        assert adapter.output_path(Path('/repo/.cursor/rules/x.mdc')) == Path('/repo/.cursor/rules/AGENTS.md')

    def test_read_and_write(self, tmp_path):
        adapter = AgentsMdAdapter()
        source = tmp_path / 'AGENTS.md'
        source.write_text(AGENTS_MD, encoding='utf-8')
        package = adapter.read(source, PackageMetadata(id='payments', name='Payments Service'))
        assert len(package.content.sections_of(RulesSection)) == 1

        target = tmp_path / 'copy' / 'AGENTS.md'
        target.parent.mkdir()
        result = adapter.write(package, target)
        assert target.read_text(encoding='utf-8') == result.content
