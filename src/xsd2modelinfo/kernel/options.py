"""Import options: model name, restriction policy, prefix normalization and type directives."""

import re
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from pydantic import ValidationError

from .directives import MappingDirective, Relationship
from .errors import (
    ConfigurationError,
    ElementMappingBeforeClassMappingError,
    UnknownRestrictionPolicyError,
)
from .qname import QualifiedName


RETYPE_PATTERN = re.compile(r"\s*retype\.(.+?)\s*")
EXTEND_PATTERN = re.compile(r"\s*extend\.([^\[]+?)\s*")
EXTEND_ELEMENT_PATTERN = re.compile(r"\s*extend\.([^\[]+)\[([^\]]+)\]\s*")

MODEL_KEY = "model"
NORMALIZE_PREFIX_KEY = "normalize-prefix"
RESTRICTION_POLICY_KEY = "simpletype-restriction-policy"


class RestrictionPolicy(str, Enum):
    """How an XSD simple type restricting another simple type is represented.

    The target catalog cannot express restriction facets, so restrictions
    collapse to one of:

    - USE_BASETYPE: replace every use of the restricted type with its base
      type (a restriction of xsd:string becomes System.String). Default.
    - EXTEND_BASETYPE: emit the restricted type as a subtype of its immediate
      base. Keeps the distinction, may require casts downstream.
    - IGNORE: emit the restricted type with no relation to its base.
    """
    USE_BASETYPE = "USE_BASETYPE"
    EXTEND_BASETYPE = "EXTEND_BASETYPE"
    IGNORE = "IGNORE"


def _parse_qname(text: str, key: str) -> QualifiedName:
    try:
        return QualifiedName.parse(text)
    except ValueError as e:
        raise ConfigurationError(f"Invalid qualified name in key '{key}': {e}") from e


def _directive_for_key(relationship: Relationship, target: str, key: str, qname: QualifiedName) -> MappingDirective:
    try:
        return MappingDirective(relationship=relationship, target_system_type=target)
    except ValidationError as e:
        raise ConfigurationError(f"Empty target type for key '{key}'", identifier=str(qname)) from e


class ImportOptions:
    """Configuration for one import run.

    Populated from key/value properties, frozen, then handed read-only to the
    resolver. One instance per import; never shared between runs.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        restriction_policy: Optional[RestrictionPolicy] = None,
        normalize_prefix: Optional[str] = None,
    ):
        self._frozen = False
        self._model = model
        self._restriction_policy = restriction_policy
        self._normalize_prefix = normalize_prefix
        self._directives: Dict[QualifiedName, MappingDirective] = {}

    @property
    def model(self) -> Optional[str]:
        return self._model

    @model.setter
    def model(self, value: Optional[str]) -> None:
        self._check_mutable()
        self._model = value

    @property
    def normalize_prefix(self) -> Optional[str]:
        return self._normalize_prefix

    @normalize_prefix.setter
    def normalize_prefix(self, value: Optional[str]) -> None:
        self._check_mutable()
        self._normalize_prefix = value

    @property
    def directives(self) -> Mapping[QualifiedName, MappingDirective]:
        """Read-only view of the directives, keyed by qualified name."""
        return MappingProxyType(self._directives)

    @property
    def restriction_policy(self) -> RestrictionPolicy:
        """Configured policy, USE_BASETYPE when unset."""
        if self._restriction_policy is None:
            return RestrictionPolicy.USE_BASETYPE
        return self._restriction_policy

    @restriction_policy.setter
    def restriction_policy(self, value: Optional[RestrictionPolicy]) -> None:
        self._check_mutable()
        self._restriction_policy = value

    @property
    def frozen(self) -> bool:
        return self._frozen

    def with_model(self, model: Optional[str]) -> "ImportOptions":
        self.model = model
        return self

    def with_restriction_policy(self, policy: Optional[RestrictionPolicy]) -> "ImportOptions":
        self.restriction_policy = policy
        return self

    def with_normalize_prefix(self, prefix: Optional[str]) -> "ImportOptions":
        self.normalize_prefix = prefix
        return self

    def get_directive(self, qname: QualifiedName) -> Optional[MappingDirective]:
        return self.directives.get(qname)

    def apply_properties(self, properties: Mapping[str, str]) -> "ImportOptions":
        """Apply scalar settings and type directives from raw key/value pairs."""
        self._check_mutable()

        model = properties.get(MODEL_KEY)
        if model:
            self.model = model

        prefix = properties.get(NORMALIZE_PREFIX_KEY)
        if prefix:
            self.normalize_prefix = prefix

        policy = properties.get(RESTRICTION_POLICY_KEY)
        if policy:
            try:
                self._restriction_policy = RestrictionPolicy(policy)
            except ValueError:
                raise UnknownRestrictionPolicyError(policy, [p.value for p in RestrictionPolicy]) from None

        self.apply_directives(properties)
        return self

    def apply_directives(self, raw_entries: Mapping[str, str]) -> None:
        """Apply retype/extend directives.

        Class-level keys (retype.X, extend.X) are applied in a first pass and
        element-level keys (extend.X[el]) in a second, so input order never
        matters. Within a pass keys are visited in sorted order, which makes
        retype.X win over extend.X when both are present. Unrecognized keys
        are ignored.

        Raises:
            ElementMappingBeforeClassMappingError: extend.X[el] with no directive for X
            RetypedElementMappingError: extend.X[el] where X is retyped
            ConfigurationError: a class-level key with an empty target type
        """
        self._check_mutable()
        keys = sorted(raw_entries)

        element_keys = []
        for key in keys:
            if EXTEND_ELEMENT_PATTERN.fullmatch(key):
                element_keys.append(key)
                continue

            match = RETYPE_PATTERN.fullmatch(key)
            if match:
                qname = _parse_qname(match.group(1), key)
                self._directives[qname] = _directive_for_key(Relationship.RETYPE, raw_entries[key], key, qname)
                continue

            match = EXTEND_PATTERN.fullmatch(key)
            if match:
                qname = _parse_qname(match.group(1), key)
                self._directives[qname] = _directive_for_key(Relationship.EXTEND, raw_entries[key], key, qname)

        for key in element_keys:
            match = EXTEND_ELEMENT_PATTERN.fullmatch(key)
            qname = _parse_qname(match.group(1), key)
            directive = self.directives.get(qname)
            if directive is None:
                raise ElementMappingBeforeClassMappingError(key, str(qname))
            directive.add_element_mapping(match.group(2).strip(), raw_entries[key], identifier=str(qname))

    def export_directives(self) -> Dict[str, str]:
        """Export directives as key/value pairs, sorted by qualified name then element."""
        exported: Dict[str, str] = {}
        for qname in sorted(self.directives, key=str):
            directive = self.directives[qname]
            if directive.relationship == Relationship.RETYPE:
                exported[f"retype.{qname}"] = directive.target_system_type
            else:
                exported[f"extend.{qname}"] = directive.target_system_type
                for element in sorted(directive.element_map):
                    exported[f"extend.{qname}[{element}]"] = directive.element_map[element]
        return exported

    def export_properties(self) -> Dict[str, str]:
        """Export every explicitly set option; inverse of apply_properties."""
        exported: Dict[str, str] = {}
        if self.model is not None:
            exported[MODEL_KEY] = self.model
        if self.normalize_prefix is not None:
            exported[NORMALIZE_PREFIX_KEY] = self.normalize_prefix
        if self._restriction_policy is not None:
            exported[RESTRICTION_POLICY_KEY] = self._restriction_policy.value
        exported.update(self.export_directives())
        return exported

    def merge(self, other: "ImportOptions") -> "ImportOptions":
        """Layer another configuration on top of this one.

        Scalar settings set in ``other`` win; its directives replace ours key by key.
        """
        self._check_mutable()
        if other.model is not None:
            self.model = other.model
        if other.normalize_prefix is not None:
            self.normalize_prefix = other.normalize_prefix
        if other._restriction_policy is not None:
            self._restriction_policy = other._restriction_policy
        for qname, directive in other.directives.items():
            self._directives[qname] = MappingDirective(
                relationship=directive.relationship,
                target_system_type=directive.target_system_type,
                element_map=dict(directive.element_map),
            )
        return self

    def freeze(self) -> "ImportOptions":
        """Mark loading complete; the options are read-only afterwards."""
        for directive in self._directives.values():
            directive.freeze()
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigurationError("Import options are frozen; configuration load already completed")

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "ImportOptions":
        """Build and freeze options from key/value pairs (pure, no I/O)."""
        return cls().apply_properties(properties).freeze()
