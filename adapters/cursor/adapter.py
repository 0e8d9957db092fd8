"""
Cursor format adapter - coordinator.

Delegates parsing and rendering to the Cursor parser and converter.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.adapter_interface import FormatAdapter
from core.canonical_models import CanonicalPackage, ConversionResult, PackageMetadata, Subtype
from .converter import CursorConverter
from .parser import CursorParser


class CursorAdapter(FormatAdapter):
    """
    Adapter for Cursor rules.

    Handles .cursor/rules/*.mdc files and legacy .cursorrules files.
    """

    def __init__(self):
        self._parser = CursorParser()
        self._converter = CursorConverter()

    @property
    def format_name(self) -> str:
        return "cursor"

    @property
    def file_extension(self) -> str:
        return ".mdc"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.mdc' or file_path.name == '.cursorrules'

    def to_canonical(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        return self._parser.parse(content, metadata)

    def from_canonical(self, package: CanonicalPackage,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        return self._converter.convert(package, options)
