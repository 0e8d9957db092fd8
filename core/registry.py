"""
Registry of available format adapters.

Looks adapters up by name, by file path (each adapter's can_handle) and
by content (core.detection heuristics).
"""

from pathlib import Path
from typing import Dict, List, Optional

from .adapter_interface import FormatAdapter
from .canonical_models import Subtype
from .detection import detect_format


class FormatRegistry:
    """Holds one adapter per format name."""

    def __init__(self):
        self._adapters: Dict[str, FormatAdapter] = {}

    def register(self, adapter: FormatAdapter):
        """
        Register an adapter.

        Raises:
            ValueError: If an adapter with the same format name exists
        """
        name = adapter.format_name
        if name in self._adapters:
            raise ValueError(f"Format '{name}' is already registered")
        self._adapters[name] = adapter

    def unregister(self, format_name: str):
        """Remove an adapter; unknown names are ignored."""
        self._adapters.pop(format_name, None)

    def get_adapter(self, format_name: str) -> Optional[FormatAdapter]:
        return self._adapters.get(format_name)

    def list_formats(self) -> List[str]:
        return list(self._adapters.keys())

    def detect_format(self, file_path: Path) -> Optional[FormatAdapter]:
        """
        Find the adapter whose file naming convention matches file_path.

        Adapters are asked in registration order; the first match wins.
        """
        for adapter in self._adapters.values():
            if adapter.can_handle(file_path):
                return adapter
        return None

    def sniff_format(self, content: str) -> Optional[FormatAdapter]:
        """Find the adapter for a document by looking at its text."""
        format_name = detect_format(content)
        if format_name is None:
            return None
        return self._adapters.get(format_name)

    def supports_subtype(self, format_name: str, subtype: Subtype) -> bool:
        adapter = self._adapters.get(format_name)
        if not adapter:
            return False
        return subtype in adapter.supported_subtypes

    def get_formats_supporting(self, subtype: Subtype) -> List[str]:
        return [
            name for name, adapter in self._adapters.items()
            if subtype in adapter.supported_subtypes
        ]
