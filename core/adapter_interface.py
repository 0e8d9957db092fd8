"""
Abstract interface every format adapter implements.

An adapter pairs one ecosystem's parser (native text -> CanonicalPackage)
with its converter (CanonicalPackage -> native text + diagnostics). The
two halves are independent: neither calls the other, and neither keeps
state between calls, so one adapter instance can serve concurrent callers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .canonical_models import CanonicalPackage, ConversionResult, PackageMetadata, Subtype


class FormatAdapter(ABC):
    """Base class for format adapters."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Unique identifier for this format (e.g. 'cursor')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Primary file extension for this format."""
        pass

    @property
    def default_filename(self) -> Optional[str]:
        """Fixed file name the ecosystem expects, if it has one (e.g. AGENTS.md)."""
        return None

    @property
    @abstractmethod
    def supported_subtypes(self) -> List[Subtype]:
        """Package sub-kinds this format can hold."""
        pass

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """Check whether a file path looks like this format."""
        pass

    @abstractmethod
    def to_canonical(self, content: str, metadata: PackageMetadata) -> CanonicalPackage:
        """
        Parse native text into a canonical package.

        Never raises for malformed text; the worst case is a package with
        only its metadata section.
        """
        pass

    @abstractmethod
    def from_canonical(self, package: CanonicalPackage,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """
        Render a canonical package as native text.

        Raises:
            MissingConfigurationError: If a required option is absent
        """
        pass

    def read(self, file_path: Path, metadata: PackageMetadata) -> CanonicalPackage:
        """Read a file and convert it to canonical."""
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.to_canonical(content, metadata)

    def write(self, package: CanonicalPackage, file_path: Path,
              options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """Convert a package and write the result to file_path."""
        result = self.from_canonical(package, options)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(result.content)
        return result

    def output_path(self, source_file: Path) -> Path:
        """Where a converted copy of source_file goes when no output is given."""
        if self.default_filename:
            return source_file.parent / self.default_filename
        base_name = source_file.name.split('.')[0] or source_file.stem
        return source_file.parent / f"{base_name}{self.file_extension}"
