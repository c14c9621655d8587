"""Shared fixtures for routegen tests.

Metadata mirrors what the controller scanner emits for a small users API:
one controller, a secured POST and an unsecured GET with a path parameter.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from routegen.options import GenerationOptions


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

SAMPLE_METADATA: dict[str, Any] = {
    "controllers": [
        {
            "name": "UsersController",
            "location": "src/controllers/usersController.ts",
            "path": "users",
            "methods": [
                {
                    "name": "getUser",
                    "method": "get",
                    "path": "{userId}",
                    "successStatus": 200,
                    "security": [],
                    "parameters": [
                        {
                            "parameterName": "userId",
                            "name": "userId",
                            "in": "path",
                            "required": True,
                            "type": {"dataType": "double"},
                        },
                        {
                            "parameterName": "name",
                            "name": "name",
                            "in": "query",
                            "required": False,
                            "type": {"dataType": "string"},
                        },
                    ],
                },
                {
                    "name": "createUser",
                    "method": "POST",
                    "path": "",
                    "successStatus": 201,
                    "security": [{"api_key": []}],
                    "parameters": [
                        {
                            "parameterName": "requestBody",
                            "name": "requestBody",
                            "in": "body",
                            "required": True,
                            "type": {"dataType": "refObject", "refName": "UserCreationParams"},
                        },
                    ],
                },
            ],
        },
    ],
    "referenceTypeMap": {
        "UserCreationParams": {
            "dataType": "refObject",
            "refName": "UserCreationParams",
            "properties": [
                {"name": "email", "required": True, "type": {"dataType": "string"}},
                {
                    "name": "phoneNumbers",
                    "required": False,
                    "type": {"dataType": "array", "elementType": {"dataType": "string"}},
                },
                {
                    "name": "status",
                    "required": False,
                    "type": {"dataType": "refEnum", "refName": "Status"},
                },
            ],
        },
        "Status": {"dataType": "refEnum", "refName": "Status", "enums": ["Happy", "Sad"]},
        "UserId": {
            "dataType": "refAlias",
            "refName": "UserId",
            "type": {"dataType": "string"},
            "validators": {"pattern": {"value": "^[0-9a-f]+$"}},
        },
    },
}

# Single controller, single GET: the smallest useful routes file
GET_ONLY_METADATA: dict[str, Any] = {
    "controllers": [
        {
            "name": "UsersController",
            "location": "src/controllers/usersController.ts",
            "path": "users",
            "methods": [SAMPLE_METADATA["controllers"][0]["methods"][0]],
        },
    ],
    "referenceTypeMap": {},
}


@pytest.fixture
def metadata() -> dict[str, Any]:
    """A fresh copy of the sample metadata."""
    return copy.deepcopy(SAMPLE_METADATA)


@pytest.fixture
def get_only_metadata() -> dict[str, Any]:
    return copy.deepcopy(GET_ONLY_METADATA)


# ---------------------------------------------------------------------------
# Output location
# ---------------------------------------------------------------------------

@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    """An existing, empty directory for generated routes."""
    path = tmp_path / "routes"
    path.mkdir()
    return path


@pytest.fixture
def options(routes_dir: Path) -> GenerationOptions:
    """Default options writing into ``routes_dir``."""
    return GenerationOptions(routes_dir=str(routes_dir))
