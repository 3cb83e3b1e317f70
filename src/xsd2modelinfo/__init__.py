"""xsd2modelinfo: resolve XSD type graphs into model info catalogs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("xsd2modelinfo")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from xsd2modelinfo.api import (
    export_options,
    import_model,
    load_options,
    load_schema_graph,
    validate,
    ValidationIssue,
    ValidationResult,
)
from xsd2modelinfo.codes import ValidationCode
from xsd2modelinfo.kernel.catalog import CatalogEntry, ResolvedCatalog, ResolvedProperty
from xsd2modelinfo.kernel.errors import ConfigurationError, ModelImportError, SchemaError
from xsd2modelinfo.kernel.options import ImportOptions, RestrictionPolicy
from xsd2modelinfo.kernel.qname import QualifiedName

__all__ = [
    "__version__",
    "import_model",
    "validate",
    "load_options",
    "load_schema_graph",
    "export_options",
    "ValidationIssue",
    "ValidationResult",
    "ValidationCode",
    "CatalogEntry",
    "ResolvedCatalog",
    "ResolvedProperty",
    "ModelImportError",
    "ConfigurationError",
    "SchemaError",
    "ImportOptions",
    "RestrictionPolicy",
    "QualifiedName",
]
