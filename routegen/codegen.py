"""Render routes templates and write the generated routes file.

Takes the context from context_builder and produces
``{routes_dir}/{routes_file_name}``, leaving the file alone when its
content would not change so watch-mode tooling is not retriggered.
"""

from __future__ import annotations

import json
import logging
from functools import partial
from pathlib import Path
from typing import Any, Callable, assert_never

import anyio
import jinja2

from .context_builder import build_context
from .loader import get_controllers, read_template
from .options import ConfigurationError, GenerationOptions, NoImplicitAdditionalProperties
from .resolver import resolve_strategy

logger = logging.getLogger(__name__)


def json_helper(value: Any) -> str:
    """Serialize a value as compact JSON for embedding in generated code."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def additional_props_policy(
    additional_properties: Any, policy: NoImplicitAdditionalProperties,
) -> str:
    """Serialized ``additionalProperties`` flag for a model.

    A schema declared on the model wins over the global policy.
    """
    if isinstance(additional_properties, (dict, list)) or additional_properties:
        return json_helper(additional_properties)
    if policy is NoImplicitAdditionalProperties.SILENTLY_REMOVE_EXTRAS:
        return json_helper(False)
    elif policy is NoImplicitAdditionalProperties.THROW_ON_EXTRAS:
        return json_helper(False)
    elif policy is NoImplicitAdditionalProperties.IGNORE:
        return json_helper(True)
    else:
        assert_never(policy)


def render(
    template_source: str,
    context: dict[str, Any],
    helpers: dict[str, Callable[..., str]],
) -> str:
    """Compile and render a template with helpers scoped to this call.

    Autoescaping stays off: the output is source code, not HTML.
    """
    env = jinja2.Environment(
        autoescape=False,  # noqa: S701 - generating TypeScript
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(helpers)
    return env.from_string(template_source).render(**context)


class RouteGenerator:
    """Generate one routes file for the configured middleware."""

    def __init__(self, metadata: dict[str, Any], options: GenerationOptions) -> None:
        self.metadata = metadata
        self.options = options
        self.strategy = resolve_strategy(options.middleware, options.middleware_template)

    @property
    def template(self) -> str:
        return self.strategy.template

    def path_transformer(self, path: str) -> str:
        return self.strategy.path_transformer(path)

    def build_context(self) -> dict[str, Any]:
        return build_context(self.metadata, self.options, self.path_transformer)

    def build_content(self, template_source: str) -> str:
        """Render ``template_source`` against this generator's metadata."""
        helpers = {
            "json": json_helper,
            "additional_props": partial(
                additional_props_policy,
                policy=self.options.no_implicit_additional_properties,
            ),
        }
        return render(template_source, self.build_context(), helpers)

    def routes_file(self) -> Path:
        """Validate the output location and return the target path."""
        routes_dir = Path(self.options.routes_dir)
        if not routes_dir.is_dir():
            raise ConfigurationError(
                f"routesDir should be an existing directory: {routes_dir}"
            )
        if self.options.routes_file_name is not None:
            ext = Path(self.options.routes_file_name).suffix
            allowed = self.options.allowed_extensions
            if ext not in allowed:
                raise ConfigurationError(
                    f"routesFileName should be a valid typescript file"
                    f" ({', '.join(allowed)}): {self.options.routes_file_name}"
                )
        return routes_dir / self.options.file_name

    async def should_write_file(self, file_path: Path, content: str) -> bool:
        """Return False when ``file_path`` already holds exactly ``content``."""
        try:
            current = await anyio.Path(file_path).read_bytes()
        except FileNotFoundError:
            return True
        return current != content.encode("utf-8")

    async def generate_routes(self, template_source: str) -> bool:
        """Render ``template_source`` and write it if it changed.

        Returns True when the routes file was written.
        """
        file_path = self.routes_file()
        content = self.build_content(template_source)

        if not await self.should_write_file(file_path, content):
            logger.debug("%s is up to date, skipping write", file_path)
            return False

        await anyio.Path(file_path).write_bytes(content.encode("utf-8"))
        logger.info("Generated %s (%d controllers)", file_path,
                    len(get_controllers(self.metadata)))
        return True

    async def generate_custom_routes(self) -> bool:
        """Read the resolved template from disk and generate routes with it."""
        self.routes_file()  # config errors before any template I/O
        template_source = await read_template(self.template)
        return await self.generate_routes(template_source)
