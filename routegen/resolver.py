"""Select the routes template and path convention for a framework.

Each supported framework maps to a TemplateStrategy: the bundled template
plus the function applied to controller and method paths. Hapi routes on
``{param}`` natively, so its paths are left untouched; everything else gets
colon-style parameters.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .options import Middleware
from .paths import convert_braces_path_params, keep_path

TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class TemplateStrategy:
    """Template location and path transform used for one generation."""

    middleware: str
    template: str
    path_transformer: Callable[[str], str] = convert_braces_path_params


def _bundled(middleware: Middleware) -> str:
    name = middleware.value
    return str(TEMPLATE_DIR / name / f"{name}.ts.j2")


STRATEGIES: dict[str, TemplateStrategy] = {
    Middleware.EXPRESS.value: TemplateStrategy(
        Middleware.EXPRESS.value, _bundled(Middleware.EXPRESS)
    ),
    Middleware.KOA.value: TemplateStrategy(
        Middleware.KOA.value, _bundled(Middleware.KOA)
    ),
    Middleware.HAPI.value: TemplateStrategy(
        Middleware.HAPI.value, _bundled(Middleware.HAPI), keep_path
    ),
}

DEFAULT_STRATEGY = STRATEGIES[Middleware.EXPRESS.value]


def resolve_strategy(
    middleware: str | None, middleware_template: str | None = None,
) -> TemplateStrategy:
    """Return the strategy for ``middleware``, applying a template override.

    Unknown framework names get the express strategy. An override replaces
    the template only; the framework's path convention still applies.
    """
    strategy = STRATEGIES.get(middleware or "", DEFAULT_STRATEGY)
    if middleware_template:
        strategy = dataclasses.replace(strategy, template=middleware_template)
    return strategy
