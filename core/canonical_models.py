"""
Canonical data models for assistant configuration documents.

Every supported format (Cursor rules, Kiro steering files, AGENTS.md,
Claude agents) is parsed into a CanonicalPackage and rendered back out of
one. The package holds an ordered tuple of sections; each section kind is
its own frozen dataclass, so a converter has to decide explicitly what to
do with every kind it can meet.

All models are immutable once built. Use dataclasses.replace() or the
with_* helpers to derive modified copies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union


class Subtype(Enum):
    """Editor-facing kind of a package within its ecosystem."""
    RULE = "rule"
    AGENT = "agent"
    SKILL = "skill"
    PROMPT = "prompt"


class Priority(Enum):
    NORMAL = "normal"
    HIGH = "high"


@dataclass(frozen=True)
class Rule:
    """A single directive inside a rules section."""
    content: str
    rationale: Optional[str] = None
    examples: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "examples", tuple(self.examples or ()))


@dataclass(frozen=True)
class Example:
    """
    A code sample inside an examples section.

    good is None when the source did not say; that reads as a "do" example.
    """
    description: str
    code: str
    language: Optional[str] = None
    good: Optional[bool] = None

    @property
    def is_good(self) -> bool:
        return self.good is not False


@dataclass(frozen=True)
class MetadataSection:
    kind: ClassVar[str] = "metadata"
    title: str
    description: str = ""
    icon: Optional[str] = None


@dataclass(frozen=True)
class InstructionsSection:
    kind: ClassVar[str] = "instructions"
    title: str
    content: str
    priority: Optional[Priority] = None


@dataclass(frozen=True)
class RulesSection:
    kind: ClassVar[str] = "rules"
    title: str
    items: Tuple[Rule, ...]
    ordered: bool = False

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ExamplesSection:
    kind: ClassVar[str] = "examples"
    title: str
    items: Tuple[Example, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class PersonaSection:
    kind: ClassVar[str] = "persona"
    role: str
    name: Optional[str] = None
    icon: Optional[str] = None
    style: Tuple[str, ...] = ()
    expertise: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "style", tuple(self.style or ()))
        object.__setattr__(self, "expertise", tuple(self.expertise or ()))


@dataclass(frozen=True)
class ContextSection:
    kind: ClassVar[str] = "context"
    title: str
    content: str


@dataclass(frozen=True)
class ToolsSection:
    kind: ClassVar[str] = "tools"
    items: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class CustomSection:
    """Raw content that only makes sense in one ecosystem (or any, if unowned)."""
    kind: ClassVar[str] = "custom"
    content: str
    owning_ecosystem: Optional[str] = None


Section = Union[
    MetadataSection,
    InstructionsSection,
    RulesSection,
    ExamplesSection,
    PersonaSection,
    ContextSection,
    ToolsSection,
    CustomSection,
]

SECTION_TYPES: Tuple[type, ...] = (
    MetadataSection,
    InstructionsSection,
    RulesSection,
    ExamplesSection,
    PersonaSection,
    ContextSection,
    ToolsSection,
    CustomSection,
)


def section_kind(section: Any) -> str:
    """Return the kind name of a section, or a best-effort name for foreign objects."""
    kind = getattr(section, "kind", None)
    if isinstance(kind, str):
        return kind
    if isinstance(section, Mapping) and isinstance(section.get("type"), str):
        return section["type"]
    return type(section).__name__


@dataclass(frozen=True)
class CanonicalContent:
    sections: Tuple[Section, ...] = ()
    format: str = "canonical"
    version: str = "1.0"

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    def sections_of(self, section_type: type) -> List[Section]:
        """All sections of the given class, in document order."""
        return [s for s in self.sections if isinstance(s, section_type)]

    @property
    def metadata_section(self) -> Optional[MetadataSection]:
        for section in self.sections:
            if isinstance(section, MetadataSection):
                return section
        return None


@dataclass(frozen=True)
class PackageMetadata:
    """
    Package identity supplied by the caller (manifest/registry layer).

    The engine never derives id or name itself.
    """
    id: str
    name: str
    description: Optional[str] = None
    author: Optional[str] = None
    tags: Tuple[str, ...] = ()
    version: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "tags", tuple(self.tags or ()))


@dataclass(frozen=True)
class CanonicalPackage:
    """
    The unit of conversion.

    metadata is a read-only mapping of ecosystem passthrough fields
    (inclusion mode, globs, model, taxonomy...).
    """
    id: str
    name: str
    content: CanonicalContent = field(default_factory=CanonicalContent)
    version: str = "1.0.0"
    description: str = ""
    author: str = ""
    tags: FrozenSet[str] = frozenset()
    source_format: str = "canonical"
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", frozenset(self.tags or ()))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))

    @property
    def sections(self) -> Tuple[Section, ...]:
        return self.content.sections

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def has_metadata(self, key: str) -> bool:
        return key in self.metadata

    def with_metadata(self, **values: Any) -> "CanonicalPackage":
        """Return a copy with the given metadata keys set."""
        merged: Dict[str, Any] = dict(self.metadata)
        merged.update(values)
        return replace(self, metadata=merged)

    def with_sections(self, sections: Iterable[Section]) -> "CanonicalPackage":
        return replace(self, content=replace(self.content, sections=tuple(sections)))


@dataclass(frozen=True)
class ConversionResult:
    """Output of every converter."""
    content: str
    format: str
    warnings: Tuple[str, ...] = ()
    lossy_conversion: bool = False
    quality_score: int = 100

    def __post_init__(self):
        object.__setattr__(self, "warnings", tuple(self.warnings))
