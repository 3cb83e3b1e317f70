"""Exceptions raised while loading import options or resolving a schema graph.

Two families exist: ConfigurationError (bad or inconsistent override rules)
and SchemaError (malformed input graph). Both are fatal to an import.
"""

from typing import List, Optional

from ..codes import ValidationCode


class ModelImportError(Exception):
    """Base exception for all model import failures."""

    rule: ValidationCode = ValidationCode.INVALID_CONFIGURATION

    def __init__(self, message: str, identifier: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message)


class ConfigurationError(ModelImportError):
    """Raised when override rules are invalid or inconsistent."""
    rule = ValidationCode.INVALID_CONFIGURATION


class SchemaError(ModelImportError):
    """Raised when the schema graph is malformed."""
    rule = ValidationCode.INVALID_SCHEMA


class UnknownRestrictionPolicyError(ConfigurationError):
    """Raised when simpletype-restriction-policy names no known policy."""
    rule = ValidationCode.UNKNOWN_RESTRICTION_POLICY

    def __init__(self, value: str, allowed: List[str]):
        self.value = value
        super().__init__(
            f"Unknown simpletype-restriction-policy '{value}'. "
            f"Expected one of: {', '.join(allowed)}"
        )


class ElementMappingBeforeClassMappingError(ConfigurationError):
    """Raised when extend.<QName>[<el>] has no class-level directive for <QName>."""
    rule = ValidationCode.ELEMENT_MAPPING_BEFORE_CLASS_MAPPING

    def __init__(self, key: str, identifier: str):
        self.key = key
        super().__init__(
            f"Class element mapping declared before class mapping: {key}",
            identifier=identifier,
        )


class RetypedElementMappingError(ConfigurationError):
    """Raised when an element mapping targets a retyped class."""
    rule = ValidationCode.ELEMENT_MAPPING_ON_RETYPE

    def __init__(self, element: str, identifier: Optional[str] = None):
        self.element = element
        where = f" {identifier}" if identifier else ""
        super().__init__(
            f"Cannot map class elements for retyped class{where}: element '{element}'",
            identifier=identifier,
        )


class UnreachableDirectiveError(ConfigurationError):
    """Raised when directives name types absent from the schema graph."""
    rule = ValidationCode.UNREACHABLE_DIRECTIVE

    def __init__(self, identifiers: List[str]):
        self.identifiers = sorted(identifiers)
        super().__init__(
            "Directives reference types not declared in the schema: "
            + ", ".join(self.identifiers),
            identifier=self.identifiers[0] if self.identifiers else None,
        )


class LabelCollisionError(ConfigurationError):
    """Raised when two types normalize to the same short label."""
    rule = ValidationCode.LABEL_COLLISION

    def __init__(self, label: str, identifiers: List[str]):
        self.label = label
        self.identifiers = sorted(identifiers)
        super().__init__(
            f"Label '{label}' produced by more than one type after prefix normalization: "
            + ", ".join(self.identifiers),
            identifier=self.identifiers[0],
        )


class NameCollisionError(ConfigurationError):
    """Raised when two distinct qualified types share one target name."""
    rule = ValidationCode.NAME_COLLISION

    def __init__(self, name: str, identifiers: List[str]):
        self.name = name
        self.identifiers = sorted(identifiers)
        super().__init__(
            f"Target name '{name}' produced by more than one type: "
            + ", ".join(self.identifiers),
            identifier=self.identifiers[0],
        )


class DuplicateTypeError(SchemaError):
    """Raised when the schema graph declares the same type twice."""
    rule = ValidationCode.DUPLICATE_TYPE

    def __init__(self, identifier: str):
        super().__init__(f"Type declared more than once: {identifier}", identifier=identifier)


class DuplicateElementError(SchemaError):
    """Raised when two top-level elements share a name."""
    rule = ValidationCode.DUPLICATE_ELEMENT

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Top-level element declared more than once: {name}", identifier=name)


class MissingTypeReferenceError(SchemaError):
    """Raised when a reference names a type that is not declared."""
    rule = ValidationCode.MISSING_TYPE_REFERENCE

    def __init__(self, reference: str, referrer: Optional[str] = None):
        self.reference = reference
        self.referrer = referrer
        msg = f"Type reference '{reference}' not found in schema"
        if referrer:
            msg += f" (referenced from {referrer})"
        super().__init__(msg, identifier=referrer or reference)


class UnmappedBuiltinTypeError(SchemaError):
    """Raised when an XSD built-in type has no target primitive."""
    rule = ValidationCode.UNMAPPED_BUILTIN_TYPE

    def __init__(self, identifier: str):
        super().__init__(
            f"XSD built-in type '{identifier}' has no target system primitive",
            identifier=identifier,
        )


class BaseTypeCycleError(SchemaError):
    """Raised when base-type or restriction chains form a cycle."""
    rule = ValidationCode.BASE_TYPE_CYCLE

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        cycle_str = " -> ".join(cycle + cycle[:1])
        super().__init__(f"Cycle detected in base type chain:\n  Cycle: {cycle_str}", identifier=cycle[0])
