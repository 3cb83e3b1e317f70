"""Pytest configuration and shared fixtures.

No sys.path hacks - tests should import from the installed xsd2modelinfo package.
"""

import pytest

from xsd2modelinfo.kernel.schema import XSD_NAMESPACE


NS = "urn:example:model"


def xsd(local_name: str) -> str:
    """Qualified name text for an XSD built-in type."""
    return f"{{{XSD_NAMESPACE}}}{local_name}"


def ref(local_name: str) -> str:
    """Qualified name text for a type in the test namespace."""
    return f"{{{NS}}}{local_name}"


@pytest.fixture
def restriction_graph():
    """Three-level simple restriction chain plus a complex type using it."""
    return {
        "types": [
            {"namespace": NS, "name": "Token", "kind": "simple", "restriction_base": xsd("string")},
            {"namespace": NS, "name": "Code", "kind": "simple", "restriction_base": ref("Token")},
            {"namespace": NS, "name": "ShortCode", "kind": "simple", "restriction_base": ref("Code")},
            {
                "namespace": NS,
                "name": "Observation",
                "kind": "complex",
                "elements": [
                    {"name": "code", "type": ref("ShortCode")},
                    {"name": "status", "type": ref("Token"), "min_occurs": 0},
                    {"name": "value", "type": xsd("decimal"), "max_occurs": None},
                ],
            },
        ],
        "elements": [{"name": "observation", "type": ref("Observation")}],
    }


@pytest.fixture
def cda_graph():
    """A small prefixed schema in the shape of HL7 CDA types."""
    return {
        "types": [
            {
                "namespace": NS,
                "name": "ANY",
                "kind": "complex",
                "elements": [],
            },
            {
                "namespace": NS,
                "name": "CD",
                "kind": "complex",
                "base_type": ref("ANY"),
                "elements": [
                    {"name": "codeSystem", "type": xsd("string")},
                    {"name": "codeValue", "type": xsd("string")},
                    {"name": "displayName", "type": xsd("string"), "min_occurs": 0},
                ],
            },
            {
                "namespace": NS,
                "name": "TS",
                "kind": "complex",
                "base_type": ref("ANY"),
                "elements": [],
            },
            {
                "namespace": NS,
                "name": "POCD_MT000040.Procedure",
                "kind": "complex",
                "elements": [
                    {"name": "code", "type": ref("CD")},
                    {"name": "effectiveTime", "type": ref("TS"), "min_occurs": 0},
                ],
            },
            {
                "namespace": NS,
                "name": "POCD_MT000040.Observation",
                "kind": "complex",
                "elements": [
                    {"name": "code", "type": ref("CD")},
                    {"name": "value", "type": ref("ANY"), "max_occurs": None},
                ],
            },
        ],
        "elements": [],
    }
