"""Formatting of report blocks."""

from datetime import datetime
from typing import Any, Optional

from .constants import TIMESTAMP_FORMAT
from .dumper import dump


def timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def format_notice(body: str, *, now: Optional[datetime] = None) -> str:
    """Format a plain timestamped notice."""
    return f"{timestamp(now)}\n{body}\n\n"


def format_sql(location: str, sql: str) -> str:
    """Format the stdout block of a traced SQL statement."""
    return f"\n{location}\n{sql}\n"


def format_message(
    context: Any,
    location: str,
    err: Optional[BaseException],
    sql: str = "",
    *,
    now: Optional[datetime] = None,
) -> str:
    """
    Format the block that is emailed and logged for a reported error.

    Parameters:
        context: object whose public fields are dumped after the error
        location: "<file>:<line>" of the reporting code
        err: the reported error; None leaves an empty error line
        sql: inlined SQL statement, omitted when empty
        now: report time, defaults to the current local time

    Returns:
        The timestamp, location, error text, SQL and context dump, one
        part per line.
    """
    err_str = f"{err}\n" if err is not None else "\n"
    parts = [timestamp(now), location, err_str]
    if sql:
        parts.extend([sql, ""])
    parts.append(dump(context))
    return "\n".join(parts)
