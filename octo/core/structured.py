"""Helpers for reading untyped JSON/TOML payloads.

Octopus resources arrive as ``dict[str, object]``; these helpers validate
shapes at runtime and narrow types for the checker.
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
    """Get a non-empty string value, stripped of surrounding whitespace."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value unchanged (names and versions are compared verbatim)."""
    value = table.get(key)
    if isinstance(value, str):
        return value
    return None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_number(table: Mapping[str, object], key: str) -> float | None:
    value = table.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys)."""
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))


def get_dict_list(table: Mapping[str, object], key: str) -> list[StrDict] | None:
    """Get a list of tables; None if the key is missing or any item is not a table."""
    items = get_list(table, key)
    if items is None:
        return None
    out: list[StrDict] = []
    for item in items:
        d = as_str_dict(item)
        if d is None:
            return None
        out.append(d)
    return out
