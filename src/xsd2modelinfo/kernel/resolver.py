"""Resolution engine: schema graph + import options -> resolved catalog."""

from collections import defaultdict
from typing import Dict, List, Optional

from ..codes import ValidationCode
from .catalog import CatalogEntry, CatalogWarning, ResolvedCatalog, ResolvedProperty
from .directives import MappingDirective, Relationship
from .errors import (
    BaseTypeCycleError,
    DuplicateElementError,
    LabelCollisionError,
    MissingTypeReferenceError,
    NameCollisionError,
    UnmappedBuiltinTypeError,
    UnreachableDirectiveError,
)
from .options import ImportOptions, RestrictionPolicy
from .primitives import primitive_for
from .qname import QualifiedName
from .schema import SchemaGraph, SchemaTypeNode, is_builtin


class ModelResolver:
    """Resolves one schema graph against one set of import options.

    Every type is resolved independently through ``resolve_reference``, a
    memoized pure function of (graph, options), so the order in which types
    are visited never changes base types or property lists.
    """

    def __init__(self, graph: SchemaGraph, options: ImportOptions):
        self.graph = graph
        self.options = options
        self.types: Dict[QualifiedName, SchemaTypeNode] = graph.type_index()
        self._references: Dict[QualifiedName, Optional[str]] = {}
        self._catalog: Optional[ResolvedCatalog] = None

        cycles = self._detect_cycles()
        if cycles:
            raise BaseTypeCycleError([str(q) for q in cycles[0]])

    def target_name(self, qname: QualifiedName) -> str:
        """Name of a schema type in the target catalog."""
        if self.options.model:
            return f"{self.options.model}.{qname.local_name}"
        return qname.local_name

    def resolve_reference(self, qname: QualifiedName, referrer: Optional[str] = None) -> Optional[str]:
        """Resolve a reference to a schema type into a target reference.

        Returns:
            A built-in primitive name, a directive target, or the target name
            of an emitted catalog entry.

        Raises:
            MissingTypeReferenceError: if the type is not declared
            UnmappedBuiltinTypeError: if an XSD built-in has no primitive
        """
        if qname in self._references:
            return self._references[qname]

        if is_builtin(qname):
            primitive = primitive_for(qname)
            if primitive is None:
                raise UnmappedBuiltinTypeError(str(qname))
            self._references[qname] = primitive
            return primitive

        node = self.types.get(qname)
        if node is None:
            raise MissingTypeReferenceError(str(qname), referrer)

        directive = self.options.get_directive(qname)
        if directive is not None and directive.relationship == Relationship.RETYPE:
            reference = directive.target_system_type
        elif self._is_erased_restriction(node, directive):
            # Chains collapse transitively; cycles were rejected at construction
            reference = self.resolve_reference(
                QualifiedName.parse(node.restriction_base), referrer=str(qname)
            )
        else:
            reference = self.target_name(qname)

        self._references[qname] = reference
        return reference

    def resolve(self) -> ResolvedCatalog:
        """Produce the resolved catalog.

        Raises:
            ConfigurationError: unreachable directives, name or label collisions
            SchemaError: missing references, unmapped built-ins, duplicate top-level elements
        """
        if self._catalog is not None:
            return self._catalog

        unreachable = [str(q) for q in self.options.directives if q not in self.types]
        if unreachable:
            raise UnreachableDirectiveError(unreachable)

        emitted = [
            self.types[qname]
            for qname in sorted(self.types)
            if self._is_emitted(self.types[qname])
        ]

        names: Dict[str, List[str]] = defaultdict(list)
        for node in emitted:
            names[self.target_name(node.qname)].append(str(node.qname))
        for name in sorted(names):
            if len(names[name]) > 1:
                raise NameCollisionError(name, names[name])

        labels = self._compute_labels(emitted)

        warnings: List[CatalogWarning] = []
        entries = [self._build_entry(node, labels.get(node.qname), warnings) for node in emitted]

        roots: Dict[str, Optional[str]] = {}
        for element in self.graph.elements:
            if element.name in roots:
                raise DuplicateElementError(element.name)
            roots[element.name] = self.resolve_reference(
                element.type_qname, referrer=f"element '{element.name}'"
            )

        self._catalog = ResolvedCatalog(
            model=self.options.model,
            entries=entries,
            roots=roots,
            warnings=warnings,
        )
        return self._catalog

    def _is_erased_restriction(self, node: SchemaTypeNode, directive: Optional[MappingDirective]) -> bool:
        return (
            directive is None
            and node.is_simple_restriction
            and self.options.restriction_policy == RestrictionPolicy.USE_BASETYPE
        )

    def _is_emitted(self, node: SchemaTypeNode) -> bool:
        directive = self.options.get_directive(node.qname)
        if directive is not None and directive.relationship == Relationship.RETYPE:
            return False
        return not self._is_erased_restriction(node, directive)

    def _compute_labels(self, emitted: List[SchemaTypeNode]) -> Dict[QualifiedName, str]:
        """Strip normalize_prefix from target names.

        A label must not be shared with another entry's label or target name,
        since consumers look types up by either.
        """
        prefix = self.options.normalize_prefix
        if not prefix:
            return {}

        owners: Dict[str, List[str]] = defaultdict(list)
        for node in emitted:
            owners[self.target_name(node.qname)].append(str(node.qname))

        labels: Dict[QualifiedName, str] = {}
        for node in emitted:
            name = self.target_name(node.qname)
            if not name.startswith(prefix) or len(name) == len(prefix):
                continue
            label = name[len(prefix):]
            labels[node.qname] = label
            owners[label].append(str(node.qname))

        for label in sorted(owners):
            if len(owners[label]) > 1:
                raise LabelCollisionError(label, owners[label])
        return labels

    def _build_entry(
        self,
        node: SchemaTypeNode,
        label: Optional[str],
        warnings: List[CatalogWarning],
    ) -> CatalogEntry:
        identifier = str(node.qname)
        directive = self.options.get_directive(node.qname)

        if directive is not None:
            base_type = directive.target_system_type
        elif node.is_simple_restriction:
            if self.options.restriction_policy == RestrictionPolicy.EXTEND_BASETYPE:
                base_type = self.resolve_reference(
                    QualifiedName.parse(node.restriction_base), referrer=identifier
                )
            else:
                base_type = None
        elif node.base_type is not None:
            base_type = self.resolve_reference(QualifiedName.parse(node.base_type), referrer=identifier)
        else:
            base_type = None

        properties = []
        for element in node.elements:
            name = directive.mapped_name(element.name) if directive is not None else element.name
            properties.append(ResolvedProperty(
                name=name,
                type=self.resolve_reference(element.type_qname, referrer=identifier),
                min_occurs=element.min_occurs,
                max_occurs=element.max_occurs,
            ))

        if directive is not None:
            declared = {e.name for e in node.elements}
            for element in sorted(set(directive.element_map) - declared):
                warnings.append(CatalogWarning(
                    code=ValidationCode.UNKNOWN_MAPPED_ELEMENT.value,
                    message=f"Element mapping '{element}' does not match any element declared by {identifier}",
                    identifier=identifier,
                ))

        seen = set()
        for prop in properties:
            if prop.name in seen:
                warnings.append(CatalogWarning(
                    code=ValidationCode.DUPLICATE_PROPERTY_NAME.value,
                    message=f"Property '{prop.name}' appears more than once on {identifier}",
                    identifier=identifier,
                ))
            seen.add(prop.name)

        return CatalogEntry(
            identifier=identifier,
            name=self.target_name(node.qname),
            kind=node.kind,
            label=label,
            base_type=base_type,
            properties=tuple(properties),
        )

    def _base_of(self, node: SchemaTypeNode) -> Optional[QualifiedName]:
        reference = node.restriction_base if node.kind == "simple" else node.base_type
        if reference is None:
            return None
        qname = QualifiedName.parse(reference)
        return qname if qname in self.types else None

    def _detect_cycles(self) -> List[List[QualifiedName]]:
        """Detect cycles along base-type / restriction-base edges.

        Each type has at most one base, so walking the chain from every
        unvisited type finds every cycle.
        """
        WHITE, GRAY, BLACK = 0, 1, 2
        color = {qname: WHITE for qname in self.types}

        for start in sorted(self.types):
            if color[start] != WHITE:
                continue
            path: List[QualifiedName] = []
            current: Optional[QualifiedName] = start
            while current is not None and color[current] == WHITE:
                color[current] = GRAY
                path.append(current)
                current = self._base_of(self.types[current])
            if current is not None and color[current] == GRAY:
                return [path[path.index(current):]]
            for qname in path:
                color[qname] = BLACK

        return []
