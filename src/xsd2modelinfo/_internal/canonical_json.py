"""Centralized canonical JSON serialization.

Catalog files go through this function so that identical imports produce
byte-identical output.
"""

import json
from typing import Any


def canonical_dumps(obj: Any, indent: int | None = None) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Stable separators (",", ":") when not indented
    - Lists keep their order (callers sort them first)

    Args:
        obj: Python object to serialize
        indent: Optional indent for human-readable output

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        indent=indent,
        separators=(",", ":") if indent is None else (",", ": "),
        ensure_ascii=False,
    )
