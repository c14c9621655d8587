"""Route path helpers.

Handles:
- Brace placeholders ({id}) -> colon placeholders (:id)
- Leading/trailing slash normalisation
- Import paths from the routes file to controller modules
"""

from __future__ import annotations

import os
import re

_BRACE_PARAM = re.compile(r"\{(\w*)\}")
_EDGE_SEPARATORS = re.compile(r"^[/\\\s]+|[/\\\s]+$")
_TS_EXTENSION = re.compile(r"\.(ts|mts|cts)$")

# Source extension -> extension of the compiled module an ES import points at
_ESM_IMPORT_EXTENSIONS: dict[str, str] = {
    ".ts": ".js",
    ".mts": ".mjs",
    ".cts": ".cjs",
}


def convert_braces_path_params(path: str) -> str:
    """Rewrite ``{name}`` placeholders as ``:name``.

    Only word characters are matched, so unbalanced or otherwise malformed
    braces are left as they are.
    """
    return _BRACE_PARAM.sub(r":\1", path)


def keep_path(path: str) -> str:
    """Identity transform for frameworks that route on brace placeholders."""
    return path


def normalise_path(
    path: str | None,
    with_prefix: str | None = None,
    with_suffix: str | None = None,
    skip_prefix_and_suffix_if_empty: bool = True,
) -> str:
    """Strip surrounding separators and optionally add a prefix/suffix."""
    if (not path or path == "/") and skip_prefix_and_suffix_if_empty:
        return ""
    normalised = _EDGE_SEPARATORS.sub("", path or "")
    if with_prefix:
        normalised = with_prefix + normalised
    if with_suffix:
        normalised = normalised + with_suffix
    return normalised


def relative_import_path(location: str, routes_dir: str, esm: bool = False) -> str:
    """Import specifier for ``location`` as seen from a file in ``routes_dir``."""
    ext = os.path.splitext(location)[1]
    new_extension = _ESM_IMPORT_EXTENSIONS.get(ext, ".js") if esm else ""
    stripped = _TS_EXTENSION.sub("", location)
    relative = os.path.relpath(stripped, routes_dir).replace("\\", "/")
    return f"./{relative}{new_extension}"
