"""
Best-effort format sniffing from file content.

These checks look at surface features only (front matter delimiters and
keys, JSON object literals, headings). They are a convenience for picking
a parser when the caller did not say, not a validator, and they can be
fooled by adversarial input.
"""

import json
from typing import Optional

from .frontmatter import normalize_newlines, parse_frontmatter

CURSOR_KEYS = ('description', 'globs', 'alwaysApply')
KIRO_KEYS = ('inclusion', 'fileMatchPattern')


def _has_frontmatter(content: str) -> bool:
    return normalize_newlines(content).lstrip('\ufeff').startswith('---\n')


def _has_heading(content: str) -> bool:
    return any(line.startswith('#') for line in normalize_newlines(content).split('\n'))


def is_continue_format(content: str) -> bool:
    """JSON object carrying a systemMessage key."""
    if '"systemMessage"' not in content:
        return False
    try:
        data = json.loads(content)
    except ValueError:
        # truncated or hand-edited JSON still names the key
        return content.lstrip().startswith('{')
    return isinstance(data, dict) and 'systemMessage' in data


def is_kiro_format(content: str) -> bool:
    if not _has_frontmatter(content):
        return False
    frontmatter, _ = parse_frontmatter(content)
    return any(key in frontmatter for key in KIRO_KEYS)


def is_cursor_format(content: str) -> bool:
    """
    Cursor rule file.

    Either an MDC file whose front matter uses Cursor's keys, or a legacy
    .cursorrules file: plain headings, no front matter, no JSON.
    """
    if _has_frontmatter(content):
        frontmatter, _ = parse_frontmatter(content)
        return ('globs' in frontmatter or 'alwaysApply' in frontmatter) and not is_kiro_format(content)
    return (
        '# ' in content
        and '---\n' not in content
        and '"systemMessage"' not in content
    )


def is_claude_format(content: str) -> bool:
    """Claude agent file: front matter with a name key."""
    if not _has_frontmatter(content):
        return False
    frontmatter, _ = parse_frontmatter(content)
    return 'name' in frontmatter and not any(key in frontmatter for key in KIRO_KEYS)


def is_agents_md_format(content: str) -> bool:
    """Plain Markdown with headings; front matter, if any, only holds project/scope."""
    if is_continue_format(content) or not _has_heading(content):
        return False
    if not _has_frontmatter(content):
        return True
    frontmatter, _ = parse_frontmatter(content)
    return set(frontmatter) <= {'project', 'scope'}


def detect_format(content: str) -> Optional[str]:
    """
    Guess which ecosystem a document belongs to.

    Checked in order: continue (JSON), kiro, cursor MDC, claude, then
    heading-only Markdown which is reported as agents.md.
    """
    if is_continue_format(content):
        return 'continue'
    if is_kiro_format(content):
        return 'kiro'
    if _has_frontmatter(content) and is_cursor_format(content):
        return 'cursor'
    if is_claude_format(content):
        return 'claude'
    if is_agents_md_format(content):
        return 'agents.md'
    return None
