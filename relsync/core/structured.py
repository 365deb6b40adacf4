"""Helpers for narrowing untyped JSON coming back from the GitHub API.

Use these at the boundary where payloads are decoded; everything past the
boundary works with the typed models in ``relsync.github.model``.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value, stripped.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str:
    """Get a string value verbatim, or "" when missing or null.

    Release names and bodies are compared exactly, so they are not stripped.
    """
    value = table.get(key)
    if isinstance(value, str):
        return value
    return ""


def get_int(table: Mapping[str, object], key: str) -> int | None:
    value = table.get(key)
    # bool is an int subclass; ids are never booleans
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_bool(table: Mapping[str, object], key: str, default: bool = False) -> bool:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return default


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested object from a mapping."""
    return as_str_dict(table.get(key))
