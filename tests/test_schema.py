"""Tests for schema graph input models."""

import pytest
from pydantic import ValidationError

from xsd2modelinfo.kernel.errors import DuplicateTypeError
from xsd2modelinfo.kernel.qname import QualifiedName
from xsd2modelinfo.kernel.schema import ElementDeclaration, SchemaGraph, SchemaTypeNode, is_builtin

from conftest import NS, ref, xsd


def test_type_qname():
    node = SchemaTypeNode(namespace=NS, name="CD", kind="complex")
    assert node.qname == QualifiedName(NS, "CD")


def test_element_defaults():
    el = ElementDeclaration(name="code", type=ref("CD"))
    assert (el.min_occurs, el.max_occurs) == (1, 1)
    assert el.type_qname == QualifiedName(NS, "CD")


def test_unbounded_max_occurs():
    el = ElementDeclaration(name="item", type=ref("CD"), min_occurs=0, max_occurs=None)
    assert el.max_occurs is None


def test_max_less_than_min_rejected():
    with pytest.raises(ValidationError, match="less than"):
        ElementDeclaration(name="item", type=ref("CD"), min_occurs=2, max_occurs=1)


def test_malformed_reference_rejected():
    with pytest.raises(ValidationError, match="Malformed"):
        ElementDeclaration(name="item", type="{urn:x")


def test_simple_type_cannot_have_elements():
    with pytest.raises(ValidationError, match="cannot declare elements"):
        SchemaTypeNode(
            namespace=NS,
            name="Code",
            kind="simple",
            restriction_base=xsd("string"),
            elements=[{"name": "x", "type": xsd("string")}],
        )


def test_complex_type_cannot_have_restriction_base():
    with pytest.raises(ValidationError, match="cannot declare restriction_base"):
        SchemaTypeNode(namespace=NS, name="CD", kind="complex", restriction_base=xsd("string"))


def test_type_name_with_braces_rejected():
    with pytest.raises(ValidationError, match="braces"):
        SchemaTypeNode(namespace=NS, name="x{y", kind="complex")


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        SchemaGraph(types=[], elements=[], facets=[])


def test_type_index_detects_duplicates():
    graph = SchemaGraph(types=[
        {"namespace": NS, "name": "A", "kind": "complex"},
        {"namespace": NS, "name": "A", "kind": "complex"},
    ])
    with pytest.raises(DuplicateTypeError, match=r"\{urn:example:model\}A"):
        graph.type_index()


def test_is_builtin():
    assert is_builtin(QualifiedName.parse(xsd("string")))
    assert not is_builtin(QualifiedName.parse(ref("string")))
