"""Inline bound parameters into SQL text for display.

The result is for humans reading logs and error reports. It is never meant
to be executed.
"""

from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Sequence

_QUOTES = {"'": "'", '"': '"', "`": "`"}


def _quote(s: str) -> str:
    return "'" + s.replace("'", "''") + "'"


def format_literal(value: Any) -> str:
    """Render a Python value as an SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, Enum):
        return format_literal(value.value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "x'" + bytes(value).hex() + "'"
    if isinstance(value, datetime):
        return _quote(value.isoformat(sep=" "))
    if isinstance(value, (date, time)):
        return _quote(value.isoformat())
    if isinstance(value, timedelta):
        return _quote(str(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(format_literal(v) for v in value)
    return _quote(str(value))


class _Inliner:
    def __init__(self, query: str, params: Sequence[Any]) -> None:
        self.query = query
        self.named: Optional[Mapping] = None
        self.positional: List[Any] = list(params)
        if len(params) == 1 and isinstance(params[0], Mapping):
            self.named = params[0]
            self.positional = []
        self.next_index = 0
        self.out: List[str] = []

    def _next_positional(self, placeholder: str) -> str:
        if self.next_index >= len(self.positional):
            return placeholder
        value = self.positional[self.next_index]
        self.next_index += 1
        return format_literal(value)

    def _numbered(self, n: int, placeholder: str) -> str:
        if 1 <= n <= len(self.positional):
            return format_literal(self.positional[n - 1])
        return placeholder

    def _by_name(self, name: str, placeholder: str) -> str:
        if self.named is None or name not in self.named:
            return placeholder
        return format_literal(self.named[name])

    def run(self) -> str:
        q = self.query
        n = len(q)
        i = 0
        while i < n:
            c = q[i]

            # quoted literals and identifiers are copied verbatim
            if c in _QUOTES:
                end = i + 1
                while end < n:
                    if q[end] == c:
                        if end + 1 < n and q[end + 1] == c:
                            end += 2
                            continue
                        break
                    end += 1
                self.out.append(q[i : end + 1])
                i = end + 1
                continue

            if q.startswith("--", i):
                end = q.find("\n", i)
                end = n if end == -1 else end
                self.out.append(q[i:end])
                i = end
                continue

            if q.startswith("/*", i):
                end = q.find("*/", i + 2)
                end = n if end == -1 else end + 2
                self.out.append(q[i:end])
                i = end
                continue

            if c == "?":
                self.out.append(self._next_positional(c))
                i += 1
                continue

            if c == "$" and i + 1 < n and q[i + 1].isdigit():
                end = i + 1
                while end < n and q[end].isdigit():
                    end += 1
                self.out.append(self._numbered(int(q[i + 1 : end]), q[i:end]))
                i = end
                continue

            if c == "%" and i + 1 < n:
                nxt = q[i + 1]
                if nxt == "s":
                    self.out.append(self._next_positional("%s"))
                    i += 2
                    continue
                if nxt == "%":
                    self.out.append("%")
                    i += 2
                    continue
                if nxt == "(":
                    close = q.find(")s", i + 2)
                    if close != -1:
                        name = q[i + 2 : close]
                        self.out.append(self._by_name(name, q[i : close + 2]))
                        i = close + 2
                        continue

            # ":name", but not a "::type" cast
            if (
                c == ":"
                and i + 1 < n
                and (q[i + 1].isalpha() or q[i + 1] == "_")
                and (i == 0 or q[i - 1] != ":")
            ):
                end = i + 1
                while end < n and (q[end].isalnum() or q[end] == "_"):
                    end += 1
                self.out.append(self._by_name(q[i + 1 : end], q[i:end]))
                i = end
                continue

            self.out.append(c)
            i += 1
        return "".join(self.out)


def inline(query: str, *params: Any) -> str:
    """
    Substitute placeholders in `query` with literal renderings of `params`.

    Supports "?", "%s" and "$1" style positional placeholders, and ":name"
    and "%(name)s" style named ones when a single mapping is passed.
    Placeholders without a matching parameter are left as they are.
    """
    if not params:
        return query
    return _Inliner(query, params).run()
