"""
Heading and content heuristics shared by the Markdown parsers.

Section-kind inference is an ordered, first-match-wins rule list:

1. title keywords for examples
2. title keywords for rules
3. title keywords for context
4. lookahead over the next few lines (list item -> rules,
   sub-heading or code fence -> examples)
5. instructions

A heading such as "Examples of Rules" therefore lands in examples.
"""

import re
from typing import List, Optional, Sequence, Tuple

EXAMPLES = 'examples'
RULES = 'rules'
CONTEXT = 'context'
INSTRUCTIONS = 'instructions'
PERSONA = 'persona'

LOOKAHEAD_LINES = 4
MAX_INFERRED_TAGS = 5

# (kind, keywords) in priority order
TITLE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (EXAMPLES, ('example', 'sample', 'usage')),
    (RULES, ('rule', 'guideline', 'standard', 'convention', 'requirement', 'must', 'should')),
    (CONTEXT, ('context', 'background', 'overview', 'about', 'introduction')),
)

TECH_KEYWORDS = (
    'typescript',
    'javascript',
    'python',
    'react',
    'testing',
    'api',
    'backend',
    'frontend',
    'database',
    'security',
)

LIST_ITEM_RE = re.compile(r'^(?:-|\d+\.)\s+')
ORDINAL_RE = re.compile(r'^\d+\.\s')
SUB_BULLET_RE = re.compile(r'^ {2,4}-\s+')

GOOD_MARKERS = ('✅', 'preferred', 'do:')
BAD_MARKERS = ('❌', 'avoid', "don't:")
_EMOJI_PREFIX_RE = re.compile(r'^[✅❌]\s*')
_LABEL_PREFIX_RE = re.compile(r"^(?:good|bad|preferred|avoid|do|don't)\s*:\s*", re.IGNORECASE)


def is_list_item(line: str) -> bool:
    """True for a top-level "- " bullet or "1." ordinal."""
    return line.startswith('- ') or bool(ORDINAL_RE.match(line))


def strip_list_marker(line: str) -> str:
    return LIST_ITEM_RE.sub('', line, count=1).strip()


def infer_section_kind(title: str, lines: Sequence[str], heading_index: int) -> str:
    """
    Guess the section kind for a "##" heading.

    Args:
        title: Heading text without the leading hashes
        lines: All lines of the document body
        heading_index: Index of the heading line within lines

    Returns:
        One of 'examples', 'rules', 'context', 'instructions'
    """
    title_lower = title.lower()
    for kind, keywords in TITLE_KEYWORDS:
        if any(keyword in title_lower for keyword in keywords):
            return kind

    end = min(heading_index + 1 + LOOKAHEAD_LINES, len(lines))
    for line in lines[heading_index + 1:end]:
        stripped = line.strip()
        if is_list_item(stripped):
            return RULES
        if stripped.startswith('### ') or stripped.startswith('```'):
            return EXAMPLES

    return INSTRUCTIONS


def parse_example_heading(text: str) -> Tuple[str, bool]:
    """
    Split a "###" example heading into (description, good).

    Leading markers decide polarity; no marker means a good example.
    """
    text = text.strip()
    lowered = text.lower()

    good = True
    if lowered.startswith(BAD_MARKERS):
        good = False
    elif lowered.startswith(GOOD_MARKERS):
        good = True

    description = _EMOJI_PREFIX_RE.sub('', text, count=1)
    description = _LABEL_PREFIX_RE.sub('', description, count=1)
    return description.strip(), good


def infer_tags(body: str, markers: Sequence[Tuple[Sequence[str], str]] = ()) -> List[str]:
    """
    Scan body text for known technology keywords.

    Args:
        body: Document text
        markers: (trigger words, tag) pairs for ecosystem-specific tags

    Returns:
        At most MAX_INFERRED_TAGS tags in vocabulary order
    """
    lowered = body.lower()
    tags = [keyword for keyword in TECH_KEYWORDS if keyword in lowered]

    for triggers, tag in markers:
        if any(trigger in lowered for trigger in triggers) and tag not in tags:
            tags.append(tag)

    return tags[:MAX_INFERRED_TAGS]


def first_paragraph_after_title(body: str, limit: int = 200) -> str:
    """
    Text following the top-level "# " heading, up to the next "##"/"###".

    Non-blank lines are joined with single spaces and cut to limit characters.
    """
    collected: List[str] = []
    after_heading = False

    for line in body.split('\n'):
        if line.startswith('# '):
            after_heading = True
            continue
        if after_heading and (line.startswith('## ') or line.startswith('### ')):
            break
        if after_heading and line.strip():
            collected.append(line.strip())

    return ' '.join(collected)[:limit]


def heading_text(line: str, level: int) -> Optional[str]:
    """Return the text of a heading of exactly the given level, else None."""
    prefix = '#' * level + ' '
    if line.startswith(prefix):
        return line[len(prefix):].strip()
    return None
