"""Tests for mapping directives."""

import pytest
from pydantic import ValidationError

from xsd2modelinfo.kernel.directives import MappingDirective, Relationship
from xsd2modelinfo.kernel.errors import ConfigurationError, RetypedElementMappingError


def test_retype_factory():
    d = MappingDirective.retype("System.String")
    assert d.relationship == Relationship.RETYPE
    assert d.target_system_type == "System.String"
    assert d.element_map == {}


def test_extend_accepts_element_mappings():
    d = MappingDirective.extend("System.Code")
    d.add_element_mapping("codeValue", "code")
    d.add_element_mapping("codeSystem", "system")
    assert d.element_map == {"codeValue": "code", "codeSystem": "system"}


def test_later_element_mapping_overwrites():
    d = MappingDirective.extend("System.Code")
    d.add_element_mapping("codeValue", "code")
    d.add_element_mapping("codeValue", "value")
    assert d.element_map == {"codeValue": "value"}


def test_retype_rejects_element_mapping():
    d = MappingDirective.retype("System.String")
    with pytest.raises(RetypedElementMappingError, match="retyped"):
        d.add_element_mapping("el", "x", identifier="{urn:x}A")


def test_retype_with_element_map_rejected_at_construction():
    with pytest.raises(ValidationError, match="RETYPE directives cannot carry element mappings"):
        MappingDirective(
            relationship=Relationship.RETYPE,
            target_system_type="System.String",
            element_map={"a": "b"},
        )


def test_empty_target_rejected():
    with pytest.raises(ValidationError, match="target_system_type must not be empty"):
        MappingDirective.extend("   ")


def test_frozen_directive_rejects_new_mappings():
    d = MappingDirective.extend("System.Code")
    d.freeze()
    assert d.frozen
    with pytest.raises(ConfigurationError, match="after configuration load completed"):
        d.add_element_mapping("codeValue", "code")


def test_mapped_name_falls_back_to_source_name():
    d = MappingDirective.extend("System.Code")
    d.add_element_mapping("codeValue", "code")
    assert d.mapped_name("codeValue") == "code"
    assert d.mapped_name("displayName") == "displayName"
