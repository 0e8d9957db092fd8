"""Helpers for reading converter option dicts."""

from typing import Any, Dict, Optional, Tuple

TRUE_STRINGS = ('true', 'yes', 'on', '1')
FALSE_STRINGS = ('false', 'no', 'off', '0', '')


def option(options: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First non-None value among keys (native camelCase or snake_case spellings)."""
    for key in keys:
        value = options.get(key)
        if value is not None:
            return value
    return default


def as_tuple(value: Any) -> Optional[Tuple[str, ...]]:
    """
    Normalize a string, comma list or sequence into a tuple of strings.

    Any other scalar (bool, number, date, mapping) gives None.
    """
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(',') if v.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(v) for v in value if v is not None)
    return None


def as_bool(value: Any) -> Optional[bool]:
    """Read a YAML or command-line flag; "false" and "no" are False."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        return None
    if isinstance(value, (int, float)):
        return bool(value)
    return None


def option_list(options: Dict[str, Any], *keys: str) -> Optional[Tuple[str, ...]]:
    return as_tuple(option(options, *keys))
