"""Issue code constants for xsd2modelinfo.api.validate().

These constants prevent stringly-typed error codes and ensure
client code uses the correct validation codes.
"""

from enum import Enum


class ValidationCode(str, Enum):
    """Validation error and warning codes."""

    # Configuration errors (blocking)
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    UNKNOWN_RESTRICTION_POLICY = "UNKNOWN_RESTRICTION_POLICY"
    ELEMENT_MAPPING_BEFORE_CLASS_MAPPING = "ELEMENT_MAPPING_BEFORE_CLASS_MAPPING"
    ELEMENT_MAPPING_ON_RETYPE = "ELEMENT_MAPPING_ON_RETYPE"
    UNREACHABLE_DIRECTIVE = "UNREACHABLE_DIRECTIVE"
    LABEL_COLLISION = "LABEL_COLLISION"
    NAME_COLLISION = "NAME_COLLISION"

    # Schema errors (blocking)
    INVALID_SCHEMA = "INVALID_SCHEMA"
    DUPLICATE_TYPE = "DUPLICATE_TYPE"
    DUPLICATE_ELEMENT = "DUPLICATE_ELEMENT"
    MISSING_TYPE_REFERENCE = "MISSING_TYPE_REFERENCE"
    BASE_TYPE_CYCLE = "BASE_TYPE_CYCLE"
    UNMAPPED_BUILTIN_TYPE = "UNMAPPED_BUILTIN_TYPE"

    # Warnings (non-blocking)
    UNKNOWN_MAPPED_ELEMENT = "UNKNOWN_MAPPED_ELEMENT"
    DUPLICATE_PROPERTY_NAME = "DUPLICATE_PROPERTY_NAME"
