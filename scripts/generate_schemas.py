"""Generate JSON schemas for the schema graph input and catalog output."""

import json
import sys
from pathlib import Path
from typing import Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xsd2modelinfo.kernel.catalog import ResolvedCatalog
from xsd2modelinfo.kernel.schema import SchemaGraph


def generate_schemas(schemas_dir: Optional[Path] = None):
    """Generate JSON schemas for all artifact models."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, model in (
        ("schema_graph.schema.json", SchemaGraph),
        ("resolved_catalog.schema.json", ResolvedCatalog),
    ):
        path = schemas_dir / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model.model_json_schema(mode="serialization"), f, indent=2, ensure_ascii=False)
        print(f"Generated: {path}")
        written.append(path)

    print("\nSchema generation complete!")
    return written


if __name__ == "__main__":
    generate_schemas()
