"""Public API for xsd2modelinfo.

High-level functions that accept paths or in-memory objects and return
complete, structured results. Callers should use these instead of importing
from _internal.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel

from xsd2modelinfo._internal.io import properties as properties_io
from xsd2modelinfo._internal.io.artifacts import (
    load_options_from_path,
    load_schema_graph_from_dict,
    load_schema_graph_from_path,
    options_dict_to_properties,
)
from xsd2modelinfo.codes import ValidationCode
from xsd2modelinfo.kernel.catalog import ResolvedCatalog
from xsd2modelinfo.kernel.errors import ModelImportError, SchemaError
from xsd2modelinfo.kernel.options import ImportOptions
from xsd2modelinfo.kernel.resolver import ModelResolver
from xsd2modelinfo.kernel.schema import SchemaGraph


logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike, Path]
OptionsSource = Union[PathLike, Dict[str, str], ImportOptions]
SchemaSource = Union[PathLike, Dict, SchemaGraph]


class ValidationIssue(BaseModel):
    """A single validation issue (error or warning)."""
    code: str  # a ValidationCode value
    message: str
    identifier: Optional[str] = None  # offending qualified name, when known
    rule: Optional[str] = None  # "configuration" | "schema" for errors


class ValidationResult(BaseModel):
    """Result of a preflight check."""
    ok: bool  # True if no errors (warnings don't block)
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]


def _normalize_path(path: PathLike) -> Path:
    return Path(path) if not isinstance(path, Path) else path


def load_options(source: OptionsSource) -> ImportOptions:
    """Load frozen import options from a file path, a key/value dict, or an ImportOptions.

    Frozen options pass through; unfrozen ones are copied, so the caller's
    object stays mutable.
    """
    if isinstance(source, ImportOptions):
        return source if source.frozen else ImportOptions().merge(source).freeze()
    if isinstance(source, dict):
        return ImportOptions.from_properties(options_dict_to_properties(source))
    return load_options_from_path(_normalize_path(source))


def load_schema_graph(source: SchemaSource) -> SchemaGraph:
    """Load a schema graph from a JSON path or dict."""
    if isinstance(source, SchemaGraph):
        return source
    if isinstance(source, dict):
        return load_schema_graph_from_dict(source)
    return load_schema_graph_from_path(_normalize_path(source))


def export_options(options: ImportOptions) -> str:
    """Serialize options back to properties text (stable order)."""
    return properties_io.dumps(options.export_properties())


def import_model(
    schema: SchemaSource,
    options: Optional[OptionsSource] = None,
    model: Optional[str] = None,
) -> ResolvedCatalog:
    """
    Resolve a schema graph into a catalog.

    Args:
        schema: Schema graph (path to JSON, dict, or SchemaGraph)
        options: Import options (path to .properties/.json, dict, or ImportOptions);
            defaults to empty options
        model: Optional model name overriding the configured one

    Returns:
        ResolvedCatalog

    Raises:
        ConfigurationError, SchemaError: the import fails as a whole; no partial catalog
    """
    graph = load_schema_graph(schema)
    import_options = load_options(options if options is not None else ImportOptions())

    if model is not None:
        import_options = ImportOptions().merge(import_options).with_model(model).freeze()

    catalog = ModelResolver(graph, import_options).resolve()
    logger.info("Resolved %d of %d schema types into catalog entries", len(catalog.entries), len(graph.types))
    for warning in catalog.warnings:
        logger.warning("%s: %s", warning.code, warning.message)
    return catalog


def _issue_from_error(error: ModelImportError) -> ValidationIssue:
    return ValidationIssue(
        code=error.rule.value,
        message=str(error),
        identifier=error.identifier,
        rule="schema" if isinstance(error, SchemaError) else "configuration",
    )


def validate(schema: SchemaSource, options: Optional[OptionsSource] = None) -> ValidationResult:
    """
    Preflight an import without raising for bad input.

    Loads both artifacts and runs the full resolution. Any import failure is
    reported as an error issue; catalog warnings become warning issues.

    This is READ-ONLY - no side effects, no file writes.
    """
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    try:
        import_options = load_options(options if options is not None else ImportOptions())
    except ModelImportError as e:
        errors.append(_issue_from_error(e))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)
    except OSError as e:
        errors.append(ValidationIssue(
            code=ValidationCode.INVALID_CONFIGURATION.value,
            message=f"Failed to read configuration: {e}",
            rule="configuration",
        ))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    try:
        graph = load_schema_graph(schema)
    except ModelImportError as e:
        errors.append(_issue_from_error(e))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)
    except OSError as e:
        errors.append(ValidationIssue(
            code=ValidationCode.INVALID_SCHEMA.value,
            message=f"Failed to read schema graph: {e}",
            rule="schema",
        ))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    try:
        catalog = ModelResolver(graph, import_options).resolve()
    except ModelImportError as e:
        errors.append(_issue_from_error(e))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    for warning in catalog.warnings:
        warnings.append(ValidationIssue(
            code=warning.code,
            message=warning.message,
            identifier=warning.identifier,
        ))

    return ValidationResult(ok=True, errors=errors, warnings=warnings)
