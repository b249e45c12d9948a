"""Indented text dumps of arbitrary objects for error reports."""

import dataclasses
from collections.abc import Collection, Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from types import (
    BuiltinFunctionType,
    BuiltinMethodType,
    CodeType,
    FrameType,
    FunctionType,
    MethodType,
    ModuleType,
    TracebackType,
)
from typing import Any, Iterable, List, Optional, Set, Tuple
from uuid import UUID

from .constants import DUMP_INDENT, NIL

# Values rendered with str() even when they carry attributes.
_LEAF_TYPES = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    Decimal,
    UUID,
    PurePath,
    Enum,
    BaseException,
    Mapping,
    Collection,
    timedelta,
)

# Values that are never dumped as objects: code, not data.
_RUNTIME_TYPES = (
    ModuleType,
    FunctionType,
    BuiltinFunctionType,
    MethodType,
    BuiltinMethodType,
    type,
    CodeType,
    FrameType,
    TracebackType,
)

_MISSING = object()


def _is_timestamp(value: Any) -> bool:
    # datetime is a subclass of date
    return isinstance(value, (date, time))


def _is_record(value: Any) -> bool:
    # namedtuple and typing.NamedTuple instances
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_aggregate(value: Any) -> bool:
    """
    True for values the dumper recurses into: objects implementing
    __dump_fields__(), dataclass instances, named tuples, and plain objects
    with __dict__ or __slots__.
    """
    if value is None or isinstance(value, _RUNTIME_TYPES):
        return False
    if callable(getattr(value, "__dump_fields__", None)):
        return True
    if _is_record(value):
        return True
    if _is_timestamp(value) or isinstance(value, _LEAF_TYPES):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


def _fields(value: Any) -> Iterable[Tuple[str, Any]]:
    """Ordered (name, value) pairs of an aggregate, private ones included."""
    describe = getattr(value, "__dump_fields__", None)
    if callable(describe):
        return list(describe())

    if _is_record(value):
        return list(zip(type(value)._fields, value))

    if dataclasses.is_dataclass(value):
        pairs = []
        for f in dataclasses.fields(value):
            v = getattr(value, f.name, _MISSING)
            if v is not _MISSING:
                pairs.append((f.name, v))
        return pairs

    pairs = []
    for name in _slot_names(type(value)):
        v = getattr(value, name, _MISSING)
        if v is not _MISSING:
            pairs.append((name, v))
    pairs.extend(getattr(value, "__dict__", {}).items())
    return pairs


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        try:
            return repr(x)
        except Exception:
            return f"<unprintable {type(x).__name__}>"


def dump(
    value: Any,
    indent: str = "",
    *,
    max_depth: int = 8,
    _seen: Optional[Set[int]] = None,
    _depth: int = 0,
) -> str:
    """
    Render the public fields of `value` as "<indent><Name> = <value>" lines.

    Timestamps are rendered inline as "<Name>: <value>". Nested objects get
    a "<Name>:" line followed by their own dump, indented by one more tab.
    Missing values are rendered as "nil". Every level ends with an empty
    line.

    Returns "" for None and "\\n" for values that have no fields to show.
    """
    if value is None:
        return ""
    if not is_aggregate(value):
        return "\n"

    seen = set(_seen or ())
    seen.add(id(value))

    lines = []
    for name, v in _fields(value):
        if name.startswith("_"):
            continue
        if v is None:
            lines.append(f"{indent}{name} = {NIL}\n")
        elif _is_timestamp(v):
            lines.append(f"{indent}{name}: {_safe_str(v)}\n")
        elif is_aggregate(v):
            lines.append(f"{indent}{name}:\n")
            if id(v) in seen:
                lines.append(f"{indent}{DUMP_INDENT}<cycle {type(v).__name__}>\n\n")
            elif _depth + 1 >= max_depth:
                lines.append(
                    f"{indent}{DUMP_INDENT}<max_depth:{max_depth} {type(v).__name__}>\n\n"
                )
            else:
                lines.append(
                    dump(
                        v,
                        indent + DUMP_INDENT,
                        max_depth=max_depth,
                        _seen=seen,
                        _depth=_depth + 1,
                    )
                )
        else:
            lines.append(f"{indent}{name} = {_safe_str(v)}\n")
    lines.append("\n")
    return "".join(lines)
