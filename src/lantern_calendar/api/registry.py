from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

JsonSchema = Dict[str, Any]

_SCALAR_TYPES: Dict[Any, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
    date: "string",
}


def _schema_type(hint: Any) -> str:
    """JSON schema type of a resolved type hint; optionals collapse to their inner type."""

    origin = typing.get_origin(hint)
    if origin in (Union, types.UnionType):
        inner = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _schema_type(inner[0]) if len(inner) == 1 else "string"
    return _SCALAR_TYPES.get(origin or hint, "string")


def _build_schema(signature: inspect.Signature, hints: Dict[str, Any]) -> JsonSchema:
    properties: Dict[str, JsonSchema] = {}
    required: List[str] = []
    for param in signature.parameters.values():
        entry: JsonSchema = {"type": _schema_type(hints.get(param.name, str))}
        if param.default is inspect.Parameter.empty:
            required.append(param.name)
        elif isinstance(param.default, (str, int, float, bool)):
            entry["default"] = param.default
        properties[param.name] = entry
    schema: JsonSchema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    signature: inspect.Signature = field(repr=False)
    parameter_schema: JsonSchema = field(repr=False)
    tags: tuple[str, ...] = ()

    @classmethod
    def wrap(
        cls,
        name: str,
        func: Callable[..., Any],
        *,
        description: str,
        category: str,
        tags: Iterable[str],
    ) -> "ApiFunction":
        signature = inspect.signature(func)
        return cls(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags),
            signature=signature,
            parameter_schema=_build_schema(signature, typing.get_type_hints(func)),
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "parameters": self.parameter_schema,
        }

    def __call__(self, **kwargs: Any) -> Any:
        try:
            bound = self.signature.bind(**kwargs)
        except TypeError as exc:
            raise ValueError(f"Invalid arguments for '{self.name}': {exc}") from exc
        return self.func(*bound.args, **bound.kwargs)


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Expose ``func`` to the CLI and the HTTP server under ``name``."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        REGISTRY[name] = ApiFunction.wrap(name, func, description=description, category=category, tags=tags or ())
        return func

    return decorator


def get_api_functions(category: Optional[str] = None) -> List[ApiFunction]:
    return [
        REGISTRY[name]
        for name in sorted(REGISTRY)
        if category is None or REGISTRY[name].category == category
    ]


def call_api(name: str, **kwargs: Any) -> Any:
    """Invoke a registered function; unknown names raise ``KeyError``, bad arguments ``ValueError``."""

    try:
        api_function = REGISTRY[name]
    except KeyError:
        raise KeyError(f"API function '{name}' is not registered.") from None
    return api_function(**kwargs)
