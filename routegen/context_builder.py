"""Build the Jinja2 template context from controller metadata.

Turns controllers into route actions with framework-ready paths, turns
reference types into validation models, and assembles the full context
dict consumed by the routes templates.
"""

from __future__ import annotations

from typing import Any, Callable

from .loader import get_controllers, get_reference_types
from .options import GenerationOptions
from .paths import normalise_path, relative_import_path

# Types rendered as a reference to a named model instead of inline
_REF_TYPES = {"refEnum", "refObject", "refAlias"}


def _compact(schema: dict[str, Any]) -> dict[str, Any]:
    """Drop unset keys so they do not show up in the serialized schema."""
    return {k: v for k, v in schema.items() if v is not None}


def build_property(source: dict[str, Any]) -> dict[str, Any]:
    """Build the validation schema for a single type."""
    data_type = source["dataType"]
    if data_type in _REF_TYPES:
        return {"ref": source["refName"]}

    schema: dict[str, Any] = {"dataType": data_type}
    if data_type == "array":
        schema["array"] = build_property(source["elementType"])
    elif data_type == "enum":
        schema["enums"] = source["enums"]
    elif data_type in ("union", "intersection"):
        schema["subSchemas"] = [build_property(t) for t in source["types"]]
    elif data_type == "nestedObjectLiteral":
        schema["nestedProperties"] = {
            prop["name"]: _build_model_property(prop)
            for prop in source.get("properties", [])
        }
        schema["additionalProperties"] = _build_additional_properties(
            source.get("additionalProperties")
        )
    return _compact(schema)


def _build_additional_properties(value: Any) -> Any:
    """Schema for declared extra properties, or None when the type has none."""
    if isinstance(value, dict):
        # an empty schema still declares that extras are allowed
        return build_property(value) if value else {}
    return value or None


def _build_model_property(prop: dict[str, Any]) -> dict[str, Any]:
    schema = build_property(prop["type"])
    schema.update({
        "required": True if prop.get("required") else None,
        "validators": prop.get("validators") or None,
        "default": prop.get("default"),
    })
    return _compact(schema)


def build_parameter_schema(parameter: dict[str, Any]) -> dict[str, Any]:
    """Build the validation schema for a method parameter."""
    schema: dict[str, Any] = {
        "in": parameter["in"],
        "name": parameter["name"],
        "required": True if parameter.get("required") else None,
        "validators": parameter.get("validators") or None,
        "default": parameter.get("default"),
    }
    schema.update(build_property(parameter["type"]))
    return _compact(schema)


def build_models(metadata: dict[str, Any]) -> dict[str, Any]:
    """Build validation models keyed by reference type name."""
    models: dict[str, Any] = {}
    for name, ref_type in get_reference_types(metadata).items():
        data_type = ref_type["dataType"]
        if data_type == "refEnum":
            model = {"dataType": data_type, "enums": ref_type["enums"]}
        elif data_type == "refObject":
            model = {
                "dataType": data_type,
                "properties": {
                    prop["name"]: _build_model_property(prop)
                    for prop in ref_type.get("properties", [])
                },
                "additionalProperties": _build_additional_properties(
                    ref_type.get("additionalProperties")
                ),
            }
        elif data_type == "refAlias":
            alias_type = build_property(ref_type["type"])
            alias_type.update(_compact({
                "validators": ref_type.get("validators") or None,
                "default": ref_type.get("default"),
            }))
            model = {"dataType": data_type, "type": alias_type}
        else:
            raise ValueError(f"Unsupported reference type {name!r}: {data_type}")
        models[name] = model
    return models


def _build_action(
    method: dict[str, Any],
    base_path: str,
    controller_path: str,
    path_transformer: Callable[[str], str],
) -> dict[str, Any]:
    method_path = path_transformer(normalise_path(method.get("path", ""), "/"))
    full_path = normalise_path(
        f"{base_path}{controller_path}{method_path}", "/", "", False,
    )
    return {
        "name": method["name"],
        "method": method["method"].lower(),
        "path": method_path,
        "fullPath": full_path,
        "parameters": {
            p["parameterName"]: build_parameter_schema(p)
            for p in method.get("parameters", [])
        },
        "security": method.get("security", []),
        "successStatus": method.get("successStatus") or "undefined",
    }


def build_context(
    metadata: dict[str, Any],
    options: GenerationOptions,
    path_transformer: Callable[[str], str],
) -> dict[str, Any]:
    """Build the full template context for a routes file."""
    base_path = normalise_path(options.base_path, "/")
    controllers: list[dict[str, Any]] = []

    for controller in get_controllers(metadata):
        controller_path = path_transformer(normalise_path(controller.get("path", ""), "/"))
        actions = [
            _build_action(method, base_path, controller_path, path_transformer)
            for method in controller.get("methods", [])
        ]
        controllers.append({
            "name": controller["name"],
            "modulePath": relative_import_path(
                controller["location"], options.routes_dir, options.esm,
            ),
            "path": controller_path,
            "actions": actions,
        })

    use_security = any(
        action["security"] for c in controllers for action in c["actions"]
    )

    def _import(module: str | None) -> str | None:
        if not module:
            return None
        return relative_import_path(module, options.routes_dir, options.esm)

    return {
        "basePath": base_path,
        "controllers": controllers,
        "models": build_models(metadata),
        "minimalSwaggerConfig": {
            "noImplicitAdditionalProperties": options.no_implicit_additional_properties.value,
        },
        "useSecurity": use_security,
        "authenticationModule": _import(options.authentication_module),
        "iocModule": _import(options.ioc_module),
        "esm": options.esm,
    }
