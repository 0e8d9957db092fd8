"""
Kiro format adapter - coordinator.

Delegates parsing and rendering to the Kiro parser and converter.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.adapter_interface import FormatAdapter
from core.canonical_models import CanonicalPackage, ConversionResult, PackageMetadata, Subtype
from .converter import KiroConverter
from .parser import KiroParser


class KiroAdapter(FormatAdapter):
    """
    Adapter for Kiro steering files (.kiro/steering/*.md).

    from_canonical() needs an 'inclusion' option and raises
    MissingConfigurationError without one.
    """

    def __init__(self):
        self._parser = KiroParser()
        self._converter = KiroConverter()

    @property
    def format_name(self) -> str:
        return "kiro"

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        parts = file_path.parts
        return file_path.suffix == '.md' and ('.kiro' in parts or 'steering' in parts[:-1])

    def to_canonical(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        return self._parser.parse(content, metadata)

    def from_canonical(self, package: CanonicalPackage,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        return self._converter.convert(package, options)
