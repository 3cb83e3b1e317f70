"""Load configuration and schema graph artifacts from disk; write catalogs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from xsd2modelinfo._internal.canonical_json import canonical_dumps
from xsd2modelinfo._internal.io import properties as properties_io
from xsd2modelinfo.kernel.catalog import ResolvedCatalog
from xsd2modelinfo.kernel.errors import ConfigurationError, SchemaError
from xsd2modelinfo.kernel.options import ImportOptions
from xsd2modelinfo.kernel.schema import SchemaGraph


logger = logging.getLogger(__name__)


def read_properties(path: Path) -> Dict[str, str]:
    """Read raw key/value pairs from a .properties or flat .json file.

    .properties files are ISO-8859-1, like java.util.Properties; other
    characters arrive as \\uXXXX escapes.
    """
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Invalid JSON configuration {path}: {e}") from e
        return options_dict_to_properties(data)

    try:
        return properties_io.loads(path.read_text(encoding="latin-1"))
    except properties_io.PropertiesSyntaxError as e:
        raise ConfigurationError(f"Invalid properties file {path}: {e}") from e


def options_dict_to_properties(data: Any) -> Dict[str, str]:
    """Validate a flat JSON configuration object."""
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a flat object of string keys to string values")
    bad_keys = sorted(k for k, v in data.items() if not isinstance(v, str))
    if bad_keys:
        raise ConfigurationError(f"Configuration values must be strings: {bad_keys}")
    return dict(data)


def load_options_from_path(path: Path) -> ImportOptions:
    """Load and freeze import options from a configuration file."""
    raw = read_properties(path)
    logger.debug("Read %d configuration keys from %s", len(raw), path)
    options = ImportOptions.from_properties(raw)
    logger.info(
        "Loaded %d type directives (policy=%s, model=%s)",
        len(options.directives),
        options.restriction_policy.value,
        options.model,
    )
    return options


def load_schema_graph_from_dict(data: Dict[str, Any]) -> SchemaGraph:
    try:
        return SchemaGraph(**data)
    except ValidationError as e:
        raise SchemaError(f"Invalid schema graph structure: {e}") from e
    except TypeError as e:
        raise SchemaError(f"Invalid schema graph structure: {e}") from e


def load_schema_graph_from_path(path: Path) -> SchemaGraph:
    """Load a schema graph JSON document produced by the XSD parser."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SchemaError(f"Invalid schema graph JSON {path}: {e}") from e
    if not isinstance(data, dict):
        raise SchemaError(f"Schema graph {path} must be a JSON object")
    graph = load_schema_graph_from_dict(data)
    logger.debug("Loaded schema graph %s: %d types, %d elements", path, len(graph.types), len(graph.elements))
    return graph


def dump_catalog(catalog: ResolvedCatalog) -> str:
    return canonical_dumps(catalog.model_dump(mode="json"), indent=2) + "\n"


def write_catalog(catalog: ResolvedCatalog, path: Path) -> Path:
    """Write the catalog as canonical JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_catalog(catalog), encoding="utf-8")
    logger.info("Wrote %d catalog entries to %s", len(catalog.entries), path)
    return path
