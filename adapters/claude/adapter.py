"""
Claude Code format adapter - coordinator.

Delegates parsing and rendering to the Claude agent parser and converter.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.adapter_interface import FormatAdapter
from core.canonical_models import CanonicalPackage, ConversionResult, PackageMetadata, Subtype
from .converter import ClaudeConverter
from .parser import ClaudeAgentParser


class ClaudeAdapter(FormatAdapter):
    """
    Adapter for Claude Code agents.

    Claude stores agents as Markdown files with YAML front matter in
    ~/.claude/agents/ (user level) or .claude/agents/ (project level).
    """

    def __init__(self):
        self._parser = ClaudeAgentParser()
        self._converter = ClaudeConverter()

    @property
    def format_name(self) -> str:
        return "claude"

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.AGENT]

    def can_handle(self, file_path: Path) -> bool:
        """
        Claude agents are .md files under a .claude directory or an
        agents/ directory.
        """
        parts = file_path.parts
        return file_path.suffix == '.md' and ('.claude' in parts or 'agents' in parts[:-1])

    def to_canonical(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        return self._parser.parse(content, metadata)

    def from_canonical(self, package: CanonicalPackage,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        return self._converter.convert(package, options)
