"""Mapping directives: per-type overrides onto target system types."""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .errors import ConfigurationError, RetypedElementMappingError


class Relationship(str, Enum):
    """How a schema type relates to its target system type."""
    RETYPE = "RETYPE"  # schema type is replaced by the target type
    EXTEND = "EXTEND"  # schema type is re-parented under the target type


class MappingDirective(BaseModel):
    """One override for exactly one qualified type.

    RETYPE directives never carry element mappings. EXTEND directives may map
    source element names onto target property names, so distinctly named XSD
    elements can line up with properties the target type already has.
    """
    relationship: Relationship
    target_system_type: str
    element_map: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    _frozen: bool = PrivateAttr(default=False)

    @field_validator("target_system_type")
    @classmethod
    def validate_target_system_type(cls, v: str) -> str:
        """Target type must be a non-empty name."""
        v = v.strip()
        if not v:
            raise ValueError("target_system_type must not be empty")
        return v

    @model_validator(mode="after")
    def validate_element_map_relationship(self):
        """Element mappings are only valid on EXTEND directives."""
        if self.relationship == Relationship.RETYPE and self.element_map:
            raise ValueError("RETYPE directives cannot carry element mappings")
        return self

    @classmethod
    def retype(cls, target_system_type: str) -> "MappingDirective":
        return cls(relationship=Relationship.RETYPE, target_system_type=target_system_type)

    @classmethod
    def extend(cls, target_system_type: str) -> "MappingDirective":
        return cls(relationship=Relationship.EXTEND, target_system_type=target_system_type)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Disallow further element mappings (called once loading completes)."""
        self._frozen = True

    def add_element_mapping(self, element: str, target: str, identifier: str | None = None) -> None:
        """Map a source element name onto a target property name.

        Overwrites any earlier mapping for the same element.

        Raises:
            RetypedElementMappingError: if this directive is a RETYPE
            ConfigurationError: if the directive has been frozen
        """
        if self.relationship == Relationship.RETYPE:
            raise RetypedElementMappingError(element, identifier)
        if self._frozen:
            raise ConfigurationError(
                f"Cannot add element mapping '{element}' after configuration load completed",
                identifier=identifier,
            )
        self.element_map[element] = target

    def mapped_name(self, element: str) -> str:
        """Return the target property name for a source element."""
        return self.element_map.get(element, element)
