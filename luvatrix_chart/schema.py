from __future__ import annotations

import math
from typing import Any, Collection

from .errors import ChartDocumentError


def field_path(parent: str, key: str | int) -> str:
    if isinstance(key, int):
        return f"{parent}[{key}]"
    return f"{parent}.{key}" if parent else key


def expect_obj(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ChartDocumentError("must be an object", path=path)
    return value


def expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise ChartDocumentError("must be a list", path=path)
    return value


def require(doc: dict[str, Any], key: str, parent: str) -> Any:
    if key not in doc:
        raise ChartDocumentError("missing required field", path=field_path(parent, key))
    return doc[key]


def require_obj(doc: dict[str, Any], key: str, parent: str) -> dict[str, Any]:
    return expect_obj(require(doc, key, parent), field_path(parent, key))


def require_list(doc: dict[str, Any], key: str, parent: str) -> list[Any]:
    return expect_list(require(doc, key, parent), field_path(parent, key))


def require_str(doc: dict[str, Any], key: str, parent: str, *, choices: Collection[str] | None = None) -> str:
    value = require(doc, key, parent)
    if not isinstance(value, str):
        raise ChartDocumentError("must be a string", path=field_path(parent, key))
    if choices is not None and value not in choices:
        allowed = ", ".join(sorted(choices))
        raise ChartDocumentError(f"must be one of: {allowed} (got `{value}`)", path=field_path(parent, key))
    return value


def require_bool(doc: dict[str, Any], key: str, parent: str) -> bool:
    value = require(doc, key, parent)
    if not isinstance(value, bool):
        raise ChartDocumentError("must be a boolean", path=field_path(parent, key))
    return value


def require_int(doc: dict[str, Any], key: str, parent: str) -> int:
    value = require(doc, key, parent)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ChartDocumentError("must be an integer", path=field_path(parent, key))
    return value


def require_float(doc: dict[str, Any], key: str, parent: str) -> float:
    value = require(doc, key, parent)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ChartDocumentError("must be a finite number", path=field_path(parent, key))
    return float(value)


def optional_float(doc: dict[str, Any], key: str, parent: str) -> float | None:
    if doc.get(key) is None:
        return None
    return require_float(doc, key, parent)


def optional_int(doc: dict[str, Any], key: str, parent: str) -> int | None:
    if doc.get(key) is None:
        return None
    return require_int(doc, key, parent)


def require_float_list(doc: dict[str, Any], key: str, parent: str) -> list[float]:
    items = require_list(doc, key, parent)
    out: list[float] = []
    for i, value in enumerate(items):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ChartDocumentError("must be a number", path=field_path(field_path(parent, key), i))
        out.append(float(value))
    return out
