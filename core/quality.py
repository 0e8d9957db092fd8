"""
Fidelity scoring shared by every converter.

A warning is lossy when it says something was skipped or is not supported.
Any lossy warning flags the conversion as lossy and takes a fixed penalty
off the base score; informational warnings cost nothing. Every converter
goes through build_result()/failed_result() so scores stay comparable
across formats.
"""

from typing import Iterable, Sequence, Tuple

from .canonical_models import ConversionResult

BASE_SCORE = 100
LOSSY_PENALTY = 10
FAILED_SCORE = 0
LOSSY_MARKERS = ('not supported', 'skipped')


def is_lossy_warning(warning: str) -> bool:
    return any(marker in warning for marker in LOSSY_MARKERS)


def score_warnings(warnings: Iterable[str]) -> Tuple[bool, int]:
    """
    Classify a warning list.

    Returns:
        Tuple of (lossy_conversion, quality_score)
    """
    lossy = any(is_lossy_warning(w) for w in warnings)
    score = BASE_SCORE - LOSSY_PENALTY if lossy else BASE_SCORE
    return lossy, score


def build_result(content: str, format_name: str, warnings: Sequence[str]) -> ConversionResult:
    """Wrap converter output with its diagnostics."""
    lossy, score = score_warnings(warnings)
    return ConversionResult(
        content=content,
        format=format_name,
        warnings=tuple(warnings),
        lossy_conversion=lossy,
        quality_score=score,
    )


def failed_result(format_name: str, error: Exception, warnings: Sequence[str] = ()) -> ConversionResult:
    """Result for a conversion that faulted part way through."""
    return ConversionResult(
        content='',
        format=format_name,
        warnings=tuple(warnings) + (f"Conversion error: {error}",),
        lossy_conversion=True,
        quality_score=FAILED_SCORE,
    )
