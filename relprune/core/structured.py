"""Helpers for safely working with dynamic (untyped) structures.

Use these at the boundaries where we ingest API JSON or environment values.
They provide runtime validation and static type narrowing.
"""

from __future__ import annotations

import math
import re
from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


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
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    """Get an int value (bools are rejected even though they subclass int)."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_bool(table: Mapping[str, object], key: str) -> bool:
    """Get a JSON boolean; anything else (missing, null, strings) is False."""
    return table.get(key) is True


def parse_number(text: str) -> float | None:
    """Parse a finite decimal number, or None if the text is not one.

    Only plain decimal notation is accepted (surrounding whitespace is
    ignored): digit separators ("1_0"), hex and the nan/inf words are not.
    """
    if _DECIMAL.fullmatch(text.strip()) is None:
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value
