"""
Format adapters for converting between tool-specific formats and canonical representation.

Each adapter pairs a parser (native text -> CanonicalPackage) with a
converter (CanonicalPackage -> native text + warnings + quality score).

Available adapters:
- AgentsMdAdapter: AGENTS.md project instructions
- CursorAdapter: Cursor rules (.mdc, .cursorrules)
- KiroAdapter: Kiro steering files (.kiro/steering/*.md)
- ClaudeAdapter: Claude Code agents (.claude/agents/*.md)

Adding a new adapter:
1. Create adapters/yourformat/ with a parser, a MarkdownConverter
   subclass and a FormatAdapter coordinator
2. Add it to ALL_ADAPTERS below
"""

from core.registry import FormatRegistry

from .agents_md import AgentsMdAdapter
from .claude import ClaudeAdapter
from .cursor import CursorAdapter
from .kiro import KiroAdapter

# Registration order is also path-detection order
ALL_ADAPTERS = (AgentsMdAdapter, CursorAdapter, KiroAdapter, ClaudeAdapter)


def default_registry() -> FormatRegistry:
    """FormatRegistry with every bundled adapter registered."""
    registry = FormatRegistry()
    for adapter_class in ALL_ADAPTERS:
        registry.register(adapter_class())
    return registry


__all__ = [
    'ALL_ADAPTERS',
    'AgentsMdAdapter',
    'ClaudeAdapter',
    'CursorAdapter',
    'KiroAdapter',
    'default_registry',
]
