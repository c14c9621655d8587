"""Load route metadata, generator config and template files.

Metadata is the JSON document produced by the controller scanner:
controllers with their methods and parameters, plus the reference types
they use.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import anyio


def load_metadata(path: Path) -> dict[str, Any]:
    """Load controller metadata from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_config(path: Path) -> dict[str, Any]:
    """Load generator options (camelCase keys) from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def get_controllers(metadata: dict[str, Any]) -> list[dict[str, Any]]:
    """Extract controllers from the metadata."""
    return metadata.get("controllers", [])


def get_reference_types(metadata: dict[str, Any]) -> dict[str, Any]:
    """Extract the reference type map from the metadata."""
    return metadata.get("referenceTypeMap", {})


async def read_template(location: str) -> str:
    """Read a template file as UTF-8 text."""
    return await anyio.Path(location).read_text(encoding="utf-8")
