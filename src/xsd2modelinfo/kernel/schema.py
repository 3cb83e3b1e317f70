"""Pydantic models for the parsed schema graph handed over by the XSD parser."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import DuplicateTypeError
from .qname import QualifiedName


XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"


def _validate_reference(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        QualifiedName.parse(v)
    except ValueError as e:
        raise ValueError(str(e))
    return v.strip()


class ElementDeclaration(BaseModel):
    """A child (or top-level) element declaration."""
    name: str
    type: str  # qualified name text, e.g. "{urn:hl7-org:v3}CD"
    min_occurs: int = Field(1, ge=0)
    max_occurs: Optional[int] = Field(1, ge=0, description="None means unbounded")

    model_config = ConfigDict(extra="forbid")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        return _validate_reference(v)

    @model_validator(mode="after")
    def validate_cardinality(self):
        if self.max_occurs is not None and self.max_occurs < self.min_occurs:
            raise ValueError(
                f"Element '{self.name}': max_occurs ({self.max_occurs}) is less than "
                f"min_occurs ({self.min_occurs})"
            )
        return self

    @property
    def type_qname(self) -> QualifiedName:
        return QualifiedName.parse(self.type)


class SchemaTypeNode(BaseModel):
    """One named XSD complex or simple type."""
    namespace: str = ""
    name: str
    kind: Literal["complex", "simple"]
    base_type: Optional[str] = None  # complex derivation base (extension/restriction)
    restriction_base: Optional[str] = None  # simple types only
    elements: List[ElementDeclaration] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("base_type", "restriction_base")
    @classmethod
    def validate_references(cls, v: Optional[str]) -> Optional[str]:
        return _validate_reference(v)

    @model_validator(mode="after")
    def validate_node(self):
        QualifiedName(self.namespace, self.name)
        if self.kind == "simple":
            if self.elements:
                raise ValueError(f"Simple type '{self.name}' cannot declare elements")
            if self.base_type is not None:
                raise ValueError(f"Simple type '{self.name}' uses restriction_base, not base_type")
        elif self.restriction_base is not None:
            raise ValueError(f"Complex type '{self.name}' cannot declare restriction_base")
        return self

    @property
    def qname(self) -> QualifiedName:
        return QualifiedName(self.namespace, self.name)

    @property
    def is_simple_restriction(self) -> bool:
        return self.kind == "simple" and self.restriction_base is not None


class SchemaGraph(BaseModel):
    """Read-only graph of named types and top-level elements."""
    types: List[SchemaTypeNode] = Field(default_factory=list)
    elements: List[ElementDeclaration] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def type_index(self) -> Dict[QualifiedName, SchemaTypeNode]:
        """Index types by qualified name.

        Raises:
            DuplicateTypeError: if a qualified name is declared twice
        """
        index: Dict[QualifiedName, SchemaTypeNode] = {}
        for node in self.types:
            if node.qname in index:
                raise DuplicateTypeError(str(node.qname))
            index[node.qname] = node
        return index


def is_builtin(qname: QualifiedName) -> bool:
    """True for types in the XML Schema namespace."""
    return qname.namespace == XSD_NAMESPACE
