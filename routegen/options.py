"""Generation options for a single routes file.

Built once per invocation from a JSON config (camelCase keys, see
``from_dict``) or directly in Python, and frozen afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_ROUTES_FILE_NAME = "routes.ts"


class ConfigurationError(ValueError):
    """Raised when options or the output location are unusable."""


class Middleware(str, Enum):
    """Frameworks with a bundled routes template."""

    EXPRESS = "express"
    KOA = "koa"
    HAPI = "hapi"


class NoImplicitAdditionalProperties(str, Enum):
    """How generated validation treats properties a model does not declare."""

    SILENTLY_REMOVE_EXTRAS = "silently-remove-extras"
    THROW_ON_EXTRAS = "throw-on-extras"
    IGNORE = "ignore"


# JSON config key -> dataclass field
_CONFIG_KEYS: dict[str, str] = {
    "routesDir": "routes_dir",
    "routesFileName": "routes_file_name",
    "middleware": "middleware",
    "middlewareTemplate": "middleware_template",
    "noImplicitAdditionalProperties": "no_implicit_additional_properties",
    "esm": "esm",
    "basePath": "base_path",
    "iocModule": "ioc_module",
    "authenticationModule": "authentication_module",
}


@dataclass(frozen=True)
class GenerationOptions:
    """Options recognised by the route generator.

    Attributes:
        routes_dir: Directory the routes file is written to; must already exist
        routes_file_name: Output file name, ``routes.ts`` when unset
        middleware: Target framework name; unknown names fall back to express
        middleware_template: Path of a custom template, overrides ``middleware``
        no_implicit_additional_properties: Policy for models without an
            explicit ``additionalProperties``
        esm: Emit ES module imports and allow ``.mts``/``.cts`` output
        base_path: Prefix for every route path
        ioc_module: Module exporting ``iocContainer``
        authentication_module: Module exporting the authentication function
    """

    routes_dir: str
    routes_file_name: str | None = None
    middleware: str = Middleware.EXPRESS.value
    middleware_template: str | None = None
    no_implicit_additional_properties: NoImplicitAdditionalProperties = (
        NoImplicitAdditionalProperties.IGNORE
    )
    esm: bool = False
    base_path: str = "/"
    ioc_module: str | None = None
    authentication_module: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.esm, bool):
            raise ConfigurationError(f"esm should be true or false, got {self.esm!r}")
        policy = self.no_implicit_additional_properties
        if not isinstance(policy, NoImplicitAdditionalProperties):
            try:
                policy = NoImplicitAdditionalProperties(policy)
            except ValueError:
                allowed = ", ".join(p.value for p in NoImplicitAdditionalProperties)
                raise ConfigurationError(
                    f"noImplicitAdditionalProperties should be one of {allowed},"
                    f" got {policy!r}"
                ) from None
            # frozen dataclass: bypass __setattr__ for the normalised value
            object.__setattr__(self, "no_implicit_additional_properties", policy)

    @property
    def allowed_extensions(self) -> tuple[str, ...]:
        """Extensions accepted for ``routes_file_name`` in the current module mode."""
        return (".ts", ".mts", ".cts") if self.esm else (".ts",)

    @property
    def file_name(self) -> str:
        return self.routes_file_name or DEFAULT_ROUTES_FILE_NAME

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> GenerationOptions:
        """Build options from a config dict using camelCase keys.

        Unknown keys are ignored so the same file can carry settings for
        other tools.
        """
        if not config.get("routesDir"):
            raise ConfigurationError("routesDir is required")
        kwargs = {
            field: config[key]
            for key, field in _CONFIG_KEYS.items()
            if config.get(key) is not None
        }
        return cls(**kwargs)
