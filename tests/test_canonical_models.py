"""
Unit tests for canonical data models.

Tests cover:
- Section dataclasses and their kind names
- Immutability of packages, sections and results
- Metadata helpers on CanonicalPackage
- Example polarity defaults
- Taxonomy stamping and error types
"""

import dataclasses

import pytest
from core.canonical_models import (
    CanonicalContent,
    CanonicalPackage,
    ContextSection,
    ConversionResult,
    CustomSection,
    Example,
    ExamplesSection,
    InstructionsSection,
    MetadataSection,
    PackageMetadata,
    PersonaSection,
    Rule,
    RulesSection,
    SECTION_TYPES,
    Subtype,
    ToolsSection,
    section_kind,
)
from core.errors import MissingConfigurationError, PromptBridgeError
from core.taxonomy import taxonomy_metadata, with_taxonomy


class TestSections:
    """Tests for the section dataclasses."""

    def test_kind_names(self):
        kinds = [t.kind for t in SECTION_TYPES]
        assert kinds == [
            'metadata', 'instructions', 'rules', 'examples',
            'persona', 'context', 'tools', 'custom',
        ]

    def test_sections_are_frozen(self):
        section = InstructionsSection(title='Setup', content='Run make')
        with pytest.raises(dataclasses.FrozenInstanceError):
            section.title = 'Other'

    def test_list_fields_become_tuples(self):
        rules = RulesSection(title='Rules', items=[Rule('a', examples=['x'])])
        assert isinstance(rules.items, tuple)
        assert rules.items[0].examples == ('x',)

        persona = PersonaSection(role='Reviewer', style=['terse'], expertise=['python'])
        assert persona.style == ('terse',)
        assert persona.expertise == ('python',)

        assert ToolsSection(items=['Read', 'Grep']).items == ('Read', 'Grep')

    def test_rules_default_unordered(self):
        assert RulesSection(title='Rules', items=()).ordered is False

    def test_custom_section_owner_optional(self):
        assert CustomSection(content='raw').owning_ecosystem is None

    def test_section_kind_of_foreign_objects(self):
        assert section_kind(ContextSection(title='Background', content='x')) == 'context'
        assert section_kind({'type': 'diagram'}) == 'diagram'
        assert section_kind(object()) == 'object'


class TestExample:
    """Tests for Example polarity."""

    def test_missing_polarity_reads_as_good(self):
        assert Example(description='d', code='c').is_good is True

    def test_explicit_bad(self):
        example = Example(description='d', code='c', good=False)
        assert example.is_good is False


class TestCanonicalPackage:
    """Tests for CanonicalPackage."""

    @pytest.fixture
    def package(self):
        return CanonicalPackage(
            id='style',
            name='Style Guide',
            tags=['python', 'python'],
            metadata={'globs': ('*.py',)},
            content=CanonicalContent(sections=[
                MetadataSection(title='Style Guide', description='How we write code'),
                RulesSection(title='Rules', items=[Rule('Use type hints')]),
                ExamplesSection(title='Examples'),
            ]),
        )

    def test_defaults(self):
        package = CanonicalPackage(id='p', name='P')
        assert package.version == '1.0.0'
        assert package.source_format == 'canonical'
        assert package.sections == ()
        assert package.content.format == 'canonical'
        assert package.content.version == '1.0'

    def test_tags_are_a_set(self, package):
        assert package.tags == frozenset({'python'})

    def test_metadata_is_read_only(self, package):
        with pytest.raises(TypeError):
            package.metadata['globs'] = ('*.ts',)

    def test_get_and_has_metadata(self, package):
        assert package.get_metadata('globs') == ('*.py',)
        assert package.get_metadata('missing', 'fallback') == 'fallback'
        assert package.has_metadata('globs')
        assert not package.has_metadata('missing')

    def test_with_metadata_returns_copy(self, package):
        updated = package.with_metadata(model='opus')
        assert updated.get_metadata('model') == 'opus'
        assert updated.get_metadata('globs') == ('*.py',)
        assert not package.has_metadata('model')

    def test_with_sections(self, package):
        updated = package.with_sections([ContextSection(title='About', content='x')])
        assert len(updated.sections) == 1
        assert len(package.sections) == 3

    def test_sections_of_and_metadata_section(self, package):
        assert len(package.content.sections_of(RulesSection)) == 1
        assert package.content.metadata_section.description == 'How we write code'
        assert CanonicalContent().metadata_section is None


class TestPackageMetadata:
    def test_tags_tuple(self):
        metadata = PackageMetadata(id='x', name='X', tags=['a', 'b'])
        assert metadata.tags == ('a', 'b')
        assert metadata.description is None


class TestConversionResult:
    def test_defaults(self):
        result = ConversionResult(content='x', format='cursor', warnings=['w'])
        assert result.warnings == ('w',)
        assert result.lossy_conversion is False
        assert result.quality_score == 100


class TestSubtype:
    def test_values(self):
        assert [s.value for s in Subtype] == ['rule', 'agent', 'skill', 'prompt']


class TestTaxonomy:
    def test_taxonomy_metadata(self):
        assert taxonomy_metadata('cursor', Subtype.RULE) == {'format': 'cursor', 'subtype': 'rule'}
        assert taxonomy_metadata('claude', 'agent')['subtype'] == 'agent'

    def test_unknown_subtype(self):
        with pytest.raises(ValueError):
            taxonomy_metadata('cursor', 'snippet')

    def test_with_taxonomy_overrides(self):
        merged = with_taxonomy({'format': 'stale', 'title': 'T'}, 'kiro', Subtype.RULE)
        assert merged == {'format': 'kiro', 'subtype': 'rule', 'title': 'T'}


class TestErrors:
    def test_missing_configuration_error(self):
        error = MissingConfigurationError('need inclusion', option='inclusion')
        assert isinstance(error, ValueError)
        assert isinstance(error, PromptBridgeError)
        assert error.option == 'inclusion'
        assert str(error) == 'need inclusion'
