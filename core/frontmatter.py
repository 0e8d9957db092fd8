"""
YAML front matter helpers.

Front matter is a leading block delimited by "---" lines. Parsing never
raises: unparseable YAML is logged and treated as absent front matter.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\n(?:(.*?)\n)?---[ \t]*(?:\n(.*))?$', re.DOTALL)


def normalize_newlines(content: str) -> str:
    return content.replace('\r\n', '\n').replace('\r', '\n')


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """
    Split raw text into (yaml_text, body).

    yaml_text is None when the text has no front matter block.
    """
    content = normalize_newlines(content)
    match = FRONTMATTER_RE.match(content)
    if not match:
        return None, content
    return match.group(1) or '', match.group(2) or ''


def _safe_load(yaml_text: str) -> Optional[Dict[str, Any]]:
    """Load a YAML mapping; None when the text is not one."""
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse YAML frontmatter: {e}")
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("YAML frontmatter is not a mapping; treating it as absent")
        return None
    return data


def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Parse optional front matter.

    Returns:
        Tuple of (frontmatter dict, body). When the block does not parse,
        the dict is empty and the body is the whole original text.
    """
    yaml_text, body = split_frontmatter(content)
    if yaml_text is None:
        return {}, body
    data = _safe_load(yaml_text)
    if data is None:
        return {}, normalize_newlines(content)
    return data, body


def load_comment_fields(yaml_text: Optional[str]) -> Dict[str, Any]:
    """
    Recover extension fields written as "# key: value" comment lines.

    Lines such as "# tags:" followed by "#   - x" are uncommented and read
    as one YAML document. Anything that does not parse is ignored.
    """
    if not yaml_text:
        return {}
    uncommented: List[str] = []
    for line in yaml_text.split('\n'):
        if line.startswith('# '):
            uncommented.append(line[2:])
        elif line.startswith('#'):
            uncommented.append(line[1:])
    if not uncommented:
        return {}
    try:
        data = yaml.safe_load('\n'.join(uncommented))
    except yaml.YAMLError as e:
        logger.debug(f"Ignoring unparseable comment fields: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def quote(value: Any) -> str:
    """Double-quoted scalar that is valid YAML."""
    return json.dumps(str(value), ensure_ascii=False)


def render_block(lines: Iterable[str]) -> str:
    return '\n'.join(['---', *lines, '---'])
