"""
sqlreport - A small library for reporting errors and failed SQL queries.

A Reporter prints a diagnostic block (timestamp, call site, error text,
inlined SQL and a dump of a context object) to stdout, emails it to a fixed
list of recipients and optionally appends it to a rotating log.

Example usage:
    >>> import sqlreport
    >>> reporter = sqlreport.Reporter(
    ...     "myapp",
    ...     sqlreport.SmtpSender("smtp.example.com"),
    ...     "app@example.com",
    ...     ["ops@example.com"],
    ...     error_log=sqlreport.rotating_log_sink("errors.log"),
    ... )
    >>> reporter.sql("SELECT * FROM t WHERE id = ?", 5)
    >>> try:
    ...     db.execute(query, user_id)
    ... except Exception as e:
    ...     reporter.sql_error(request, e, query, user_id)
"""

from .constants import (
    QUERY_TIME_WARNING,
    QUERY_DEADLINE,
    MAX_FRAMES,
    TIMESTAMP_FORMAT,
    SQL_ERROR_SUBJECT,
    ERROR_SUBJECT,
    SEPARATOR,
)
from .errors import (
    ReportError,
    ReportedError,
    NotFoundError,
    ContextCanceledError,
    InternalError,
    ERR_REPORTED,
    ERR_NOT_FOUND,
    ERR_CONTEXT,
    ERR_INTERNAL,
)
from .models import EmailData, EmailConfig, EmailProvider, ReportProvider
from .callsite import locate, locate_all
from .dumper import dump, is_aggregate
from .sqlinline import inline, format_literal
from .formatter import format_message, format_notice, format_sql, timestamp
from .mailer import SendLimiter, SmtpSender
from .logsink import rotating_log_sink, write_entry
from .core import Dispatch, Reporter

__version__ = "0.1.0"
__author__ = "sqlreport"
__email__ = ""
__description__ = "Error and SQL problem reporting to stdout, email and log"

# Main API exports
__all__ = [
    # Reporting
    "Reporter",
    "Dispatch",
    "ReportProvider",
    # Email
    "EmailData",
    "EmailConfig",
    "EmailProvider",
    "SmtpSender",
    "SendLimiter",
    # Log sink
    "rotating_log_sink",
    "write_entry",
    # Building blocks
    "locate",
    "locate_all",
    "dump",
    "is_aggregate",
    "inline",
    "format_literal",
    "format_message",
    "format_notice",
    "format_sql",
    "timestamp",
    # Errors
    "ReportError",
    "ReportedError",
    "NotFoundError",
    "ContextCanceledError",
    "InternalError",
    "ERR_REPORTED",
    "ERR_NOT_FOUND",
    "ERR_CONTEXT",
    "ERR_INTERNAL",
    # Constants
    "QUERY_TIME_WARNING",
    "QUERY_DEADLINE",
    "MAX_FRAMES",
    "TIMESTAMP_FORMAT",
    "SQL_ERROR_SUBJECT",
    "ERROR_SUBJECT",
    "SEPARATOR",
    # Version info
    "__version__",
]


# Example usage function
def demo() -> None:
    """
    Demonstrate the library with an email sender that prints instead of sending.
    """
    from dataclasses import dataclass, field
    from datetime import datetime

    class PrintSender:
        def send(self, data: EmailData) -> None:
            print(f"=== EMAIL to {', '.join(map(str, data.to))}: {data.subject} ===")
            print(data.body)

    @dataclass
    class User:
        id: int
        name: str

    @dataclass
    class Request:
        method: str
        path: str
        user: User
        started: datetime = field(default_factory=datetime.now)
        _token: str = "secret"

    reporter = Reporter(
        "sqlreport", PrintSender(), "app@example.com", ["ops@example.com"]
    )
    request = Request("GET", "/orders", User(42, "alice"))

    reporter.sql("SELECT * FROM orders WHERE user_id = ? AND status = ?", 42, "open")
    try:
        raise LookupError("order 7 not found")
    except LookupError as e:
        reporter.error(request, e).wait()


if __name__ == "__main__":
    demo()
