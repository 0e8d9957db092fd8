"""
AGENTS.md format adapter - coordinator.

Delegates parsing and rendering to the AGENTS.md parser and converter.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.adapter_interface import FormatAdapter
from core.canonical_models import CanonicalPackage, ConversionResult, PackageMetadata, Subtype
from .converter import AgentsMdConverter
from .parser import AgentsMdParser


class AgentsMdAdapter(FormatAdapter):
    """Adapter for AGENTS.md project instruction files."""

    def __init__(self):
        self._parser = AgentsMdParser()
        self._converter = AgentsMdConverter()

    @property
    def format_name(self) -> str:
        return "agents.md"

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def default_filename(self) -> Optional[str]:
        return "AGENTS.md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.name.lower() == 'agents.md'

    def to_canonical(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        return self._parser.parse(content, metadata)

    def from_canonical(self, package: CanonicalPackage,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        return self._converter.convert(package, options)
