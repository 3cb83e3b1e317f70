"""Tests for import options: directive parsing, ordering, export and policy defaults."""

import pytest

from xsd2modelinfo.kernel.directives import MappingDirective, Relationship
from xsd2modelinfo.kernel.errors import (
    ConfigurationError,
    ElementMappingBeforeClassMappingError,
    RetypedElementMappingError,
    UnknownRestrictionPolicyError,
)
from xsd2modelinfo.kernel.options import ImportOptions, RestrictionPolicy
from xsd2modelinfo.kernel.qname import QualifiedName


A = QualifiedName("", "A")


class TestApplyDirectives:
    """Tests for apply_directives / apply_properties."""

    def test_element_key_before_class_key_in_input_order_succeeds(self):
        """Input order is irrelevant: extend.A is applied before extend.A[el]."""
        options = ImportOptions()
        options.apply_directives({"extend.A[el]": "x", "extend.A": "BaseType"})

        directive = options.directives[A]
        assert directive.relationship == Relationship.EXTEND
        assert directive.target_system_type == "BaseType"
        assert directive.element_map == {"el": "x"}

    def test_element_key_without_class_key_fails(self):
        options = ImportOptions()
        with pytest.raises(ElementMappingBeforeClassMappingError, match=r"extend\.A\[el\]") as exc_info:
            options.apply_directives({"extend.A[el]": "x"})
        assert exc_info.value.identifier == "A"

    def test_element_key_on_retyped_class_fails(self):
        options = ImportOptions()
        with pytest.raises(RetypedElementMappingError):
            options.apply_directives({"retype.A": "System.String", "extend.A[el]": "x"})

    def test_retype_wins_over_extend_for_same_type(self):
        options = ImportOptions()
        options.apply_directives({"retype.A": "System.String", "extend.A": "System.Any"})
        assert options.directives[A].relationship == Relationship.RETYPE
        assert options.directives[A].target_system_type == "System.String"

    def test_qualified_keys(self):
        options = ImportOptions()
        options.apply_directives({
            "retype.{urn:hl7-org:v3}ST": "System.String",
            "extend.{urn:hl7-org:v3}CD": "System.Code",
            "extend.{urn:hl7-org:v3}CD[codeValue]": "code",
        })
        st = QualifiedName("urn:hl7-org:v3", "ST")
        cd = QualifiedName("urn:hl7-org:v3", "CD")
        assert options.directives[st].relationship == Relationship.RETYPE
        assert options.directives[cd].element_map == {"codeValue": "code"}

    def test_unrelated_keys_ignored(self):
        options = ImportOptions()
        options.apply_directives({"foo": "bar", "retyped": "x", "extend": "y"})
        assert options.directives == {}

    def test_whitespace_around_keys_tolerated(self):
        options = ImportOptions()
        options.apply_directives({" extend.A ": "T", " extend.A[ el ] ": "x"})
        assert options.directives[A].element_map == {"el": "x"}

    def test_malformed_qname_key_is_configuration_error(self):
        options = ImportOptions()
        with pytest.raises(ConfigurationError, match="Invalid qualified name"):
            options.apply_directives({"retype.{urn:x": "System.String"})

    @pytest.mark.parametrize("key, value", [("retype.A", ""), ("extend.A", "   ")])
    def test_empty_target_type_is_configuration_error(self, key, value):
        options = ImportOptions()
        with pytest.raises(ConfigurationError, match=r"Empty target type for key") as exc_info:
            options.apply_directives({key: value})
        assert key in str(exc_info.value)
        assert exc_info.value.identifier == "A"

    def test_reapplying_class_key_resets_element_map(self):
        options = ImportOptions()
        options.apply_directives({"extend.A": "T", "extend.A[el]": "x"})
        options.apply_directives({"extend.A": "U"})
        assert options.directives[A].target_system_type == "U"
        assert options.directives[A].element_map == {}

    def test_scalar_keys(self):
        options = ImportOptions().apply_properties({
            "model": "CDA",
            "normalize-prefix": "CDA.POCD_MT000040.",
            "simpletype-restriction-policy": "EXTEND_BASETYPE",
        })
        assert options.model == "CDA"
        assert options.normalize_prefix == "CDA.POCD_MT000040."
        assert options.restriction_policy == RestrictionPolicy.EXTEND_BASETYPE

    def test_empty_scalar_values_ignored(self):
        options = ImportOptions(model="Keep").apply_properties({"model": "", "normalize-prefix": ""})
        assert options.model == "Keep"
        assert options.normalize_prefix is None

    def test_unknown_policy_rejected(self):
        with pytest.raises(UnknownRestrictionPolicyError, match="use_basetype"):
            ImportOptions().apply_properties({"simpletype-restriction-policy": "use_basetype"})


class TestRestrictionPolicy:
    """Policy accessor defaults."""

    def test_defaults_to_use_basetype(self):
        assert ImportOptions().restriction_policy == RestrictionPolicy.USE_BASETYPE

    def test_unset_policy_is_not_exported(self):
        assert "simpletype-restriction-policy" not in ImportOptions().export_properties()

    def test_explicit_policy_is_exported(self):
        options = ImportOptions().with_restriction_policy(RestrictionPolicy.USE_BASETYPE)
        assert options.export_properties()["simpletype-restriction-policy"] == "USE_BASETYPE"


class TestExport:
    """Tests for export_directives / export_properties."""

    def test_export_is_sorted_by_qname_then_element(self):
        options = ImportOptions()
        options.apply_directives({
            "extend.{urn:b}B": "System.Code",
            "extend.{urn:b}B[z]": "zz",
            "extend.{urn:b}B[a]": "aa",
            "retype.{urn:a}A": "System.String",
        })
        assert list(options.export_directives().items()) == [
            ("retype.{urn:a}A", "System.String"),
            ("extend.{urn:b}B", "System.Code"),
            ("extend.{urn:b}B[a]", "aa"),
            ("extend.{urn:b}B[z]", "zz"),
        ]

    def test_round_trip(self):
        raw = {
            "model": "CDA",
            "normalize-prefix": "CDA.POCD_MT000040.",
            "simpletype-restriction-policy": "IGNORE",
            "retype.{urn:hl7-org:v3}ST": "System.String",
            "extend.{urn:hl7-org:v3}CD[codeValue]": "code",
            "extend.{urn:hl7-org:v3}CD": "System.Code",
            "extend.Local": "System.Any",
        }
        first = ImportOptions.from_properties(raw)
        second = ImportOptions.from_properties(first.export_properties())

        assert second.export_properties() == first.export_properties()
        assert set(first.export_properties().items()) == set(raw.items())

    def test_scalar_settings_exported_only_when_set(self):
        assert ImportOptions().export_properties() == {}


class TestMergeAndFreeze:
    """Tests for merge() and freeze()."""

    def test_merge_overrides_settings_and_directives(self):
        base = ImportOptions.from_properties({
            "model": "Base",
            "retype.A": "System.String",
            "extend.B": "System.Any",
        })
        overlay = ImportOptions.from_properties({
            "simpletype-restriction-policy": "IGNORE",
            "extend.A": "System.Code",
            "extend.A[x]": "y",
        })
        merged = ImportOptions().merge(base).merge(overlay)

        assert merged.model == "Base"
        assert merged.restriction_policy == RestrictionPolicy.IGNORE
        assert merged.directives[A].relationship == Relationship.EXTEND
        assert merged.directives[A].element_map == {"x": "y"}
        assert merged.directives[QualifiedName("", "B")].target_system_type == "System.Any"

    def test_merge_copies_directives(self):
        source = ImportOptions.from_properties({"extend.A": "T"})
        merged = ImportOptions().merge(source)
        merged.directives[A].add_element_mapping("el", "x")
        assert source.directives[A].element_map == {}

    def test_frozen_options_reject_changes(self):
        options = ImportOptions.from_properties({"extend.A": "T"})
        assert options.frozen
        with pytest.raises(ConfigurationError, match="frozen"):
            options.apply_directives({"retype.B": "System.String"})
        with pytest.raises(ConfigurationError, match="frozen"):
            options.with_model("Other")
        with pytest.raises(ConfigurationError):
            options.directives[A].add_element_mapping("el", "x")
        with pytest.raises(ConfigurationError, match="frozen"):
            options.model = "Other"
        with pytest.raises(ConfigurationError, match="frozen"):
            options.normalize_prefix = "Other."
        with pytest.raises(ConfigurationError, match="frozen"):
            options.restriction_policy = RestrictionPolicy.IGNORE

    def test_directives_view_is_read_only(self):
        options = ImportOptions()
        with pytest.raises(TypeError):
            options.directives[A] = MappingDirective.retype("System.String")
        assert options.directives == {}
