"""
Editor-facing taxonomy stamped onto parsed packages.

The pair (format, subtype) is a fixed property of each parser, never
inferred from content.
"""

from typing import Any, Dict, Mapping, Union

from .canonical_models import Subtype


def taxonomy_metadata(format_name: str, subtype: Union[Subtype, str]) -> Dict[str, Any]:
    """
    Metadata entries declaring a package's format and sub-kind.

    Raises:
        ValueError: If subtype is not a known Subtype value
    """
    subtype = Subtype(subtype)
    return {
        'format': format_name,
        'subtype': subtype.value,
    }


def with_taxonomy(metadata: Mapping[str, Any], format_name: str,
                  subtype: Union[Subtype, str]) -> Dict[str, Any]:
    merged = dict(metadata)
    merged.update(taxonomy_metadata(format_name, subtype))
    return merged
