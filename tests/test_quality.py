"""
Unit tests for quality scoring.
"""

from core.quality import (
    BASE_SCORE,
    LOSSY_PENALTY,
    build_result,
    failed_result,
    is_lossy_warning,
    score_warnings,
)


class TestScoring:
    """Tests for the shared lossy-warning classification."""

    def test_no_warnings_scores_full(self):
        assert score_warnings([]) == (False, BASE_SCORE)

    def test_informational_warning_is_free(self):
        assert score_warnings(['Model renamed to sonnet']) == (False, 100)

    def test_lossy_markers(self):
        assert is_lossy_warning('Tools section skipped (Claude-specific)')
        assert is_lossy_warning('Persona is not supported here')
        assert not is_lossy_warning('Skipped with a capital S')

    def test_fixed_penalty_regardless_of_count(self):
        warnings = ['A skipped', 'B skipped', 'C not supported']
        assert score_warnings(warnings) == (True, BASE_SCORE - LOSSY_PENALTY)

    def test_build_result(self):
        result = build_result('body\n', 'cursor', ['Tools section skipped (Claude-specific)'])
        assert result.content == 'body\n'
        assert result.format == 'cursor'
        assert result.lossy_conversion is True
        assert result.quality_score == 90


class TestFailedResult:
    def test_failed_result_keeps_earlier_warnings(self):
        result = failed_result('kiro', ValueError('boom'), ['Persona section skipped'])
        assert result.content == ''
        assert result.quality_score == 0
        assert result.lossy_conversion is True
        assert result.warnings == ('Persona section skipped', 'Conversion error: boom')
