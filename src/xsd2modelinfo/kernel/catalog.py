"""Resolved catalog: the output handed to an external serializer."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ResolvedProperty(BaseModel):
    """A property of a catalog entry, in declaration order."""
    name: str
    type: str  # target reference: primitive, directive target, or entry name
    min_occurs: int = 1
    max_occurs: Optional[int] = 1  # None means unbounded

    model_config = ConfigDict(frozen=True, extra="forbid")

    @computed_field
    @property
    def is_list(self) -> bool:
        return self.max_occurs is None or self.max_occurs > 1


class CatalogEntry(BaseModel):
    """One emitted class or simple type."""
    identifier: str  # qualified name text of the schema type
    name: str  # target name (model-prefixed)
    kind: Literal["complex", "simple"]
    label: Optional[str] = None
    base_type: Optional[str] = None
    properties: tuple[ResolvedProperty, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def get_property(self, name: str) -> Optional[ResolvedProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


class CatalogWarning(BaseModel):
    """Non-fatal observation made during resolution."""
    code: str
    message: str
    identifier: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ResolvedCatalog(BaseModel):
    """Complete, self-consistent set of entries for one import run."""
    model: Optional[str] = None
    entries: List[CatalogEntry] = Field(default_factory=list)  # sorted by identifier
    roots: Dict[str, Optional[str]] = Field(default_factory=dict)  # top-level element -> type reference
    warnings: List[CatalogWarning] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def get_entry(self, identifier: str) -> Optional[CatalogEntry]:
        """Get entry by qualified name text."""
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry
        return None

    def get_entry_by_name(self, name: str) -> Optional[CatalogEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def get_identifiers(self) -> set[str]:
        return {e.identifier for e in self.entries}

    def get_names(self) -> set[str]:
        return {e.name for e in self.entries}
