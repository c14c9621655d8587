"""Tests for the loader module."""

import json

from routegen.loader import (
    get_controllers,
    get_reference_types,
    load_config,
    load_metadata,
    read_template,
)


class TestLoader:
    """Reading metadata, config and templates from disk."""

    def test_load_metadata(self, tmp_path, metadata):
        path = tmp_path / "metadata.json"
        path.write_text(json.dumps(metadata), encoding="utf-8")
        loaded = load_metadata(path)
        assert get_controllers(loaded)[0]["name"] == "UsersController"
        assert set(get_reference_types(loaded)) == {"UserCreationParams", "Status", "UserId"}

    def test_load_config(self, tmp_path):
        path = tmp_path / "routegen.json"
        path.write_text('{"routesDir": "build", "esm": true}', encoding="utf-8")
        assert load_config(path) == {"routesDir": "build", "esm": True}

    def test_missing_sections(self):
        assert get_controllers({}) == []
        assert get_reference_types({}) == {}

    async def test_read_template_utf8(self, tmp_path):
        path = tmp_path / "t.j2"
        path.write_text("// héllo {{ x }}", encoding="utf-8")
        assert await read_template(str(path)) == "// héllo {{ x }}"
