"""The Reporter: prints, emails and logs errors and SQL problems."""

import logging
import sys
import threading
import time
from email.headerregistry import Address
from typing import Any, Callable, Iterable, List, Optional, Union

from .callsite import locate, locate_all
from .constants import ERROR_SUBJECT, SQL_ERROR_SUBJECT
from .formatter import format_message, format_notice, format_sql
from .logsink import write_entry
from .models import EmailConfig, EmailProvider
from .sqlinline import inline

logger = logging.getLogger(__name__)

_stdout_lock = threading.Lock()


def _emit(text: str) -> None:
    # one write per block so concurrent reports never interleave
    with _stdout_lock:
        sys.stdout.write(text)
        sys.stdout.flush()


def _as_address(addr: Union[Address, str]) -> Address:
    if isinstance(addr, Address):
        return addr
    return Address(addr_spec=addr)


class Dispatch:
    """
    Handle on the background delivery of one report.

    Delivery runs on daemon threads: if the process exits before they
    finish, the email or log entry is lost. Call wait() when that matters.
    """

    def __init__(self, threads: Iterable[threading.Thread] = ()) -> None:
        self._threads = list(threads)

    def done(self) -> bool:
        return not any(t.is_alive() for t in self._threads)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until delivery finishes or `timeout` seconds pass. True if finished."""
        deadline = None if timeout is None else time.monotonic() + timeout
        for t in self._threads:
            if deadline is None:
                t.join()
            else:
                t.join(max(0.0, deadline - time.monotonic()))
        return self.done()


class Reporter:
    """
    Reports errors and SQL problems to stdout, email and an optional log sink.

    Reporting never raises because of a delivery failure: a failed email is
    logged through this module's logger and noted in the log sink.
    """

    def __init__(
        self,
        app_name: str,
        sender: EmailProvider,
        from_addr: Union[Address, str],
        to: Iterable[Union[Address, str]],
        error_log: Optional[logging.Logger] = None,
    ) -> None:
        self.app_name = app_name
        self.email = EmailConfig(
            sender=sender,
            from_addr=_as_address(from_addr),
            to=tuple(_as_address(a) for a in to),
        )
        self.error_log = error_log

    # ---- delivery ------------------------------------------------------------

    def _log_error(self, m: str) -> None:
        write_entry(self.error_log, m)

    def _send(
        self,
        subject: str,
        body: str,
        with_limiter: bool,
        dedupe_key: Optional[str] = None,
    ) -> None:
        try:
            self.email.sender.send(
                self.email.build(subject, body, with_limiter, dedupe_key)
            )
        except Exception as e:
            logger.warning("Report email %r not delivered: %s", subject, e)
            if self.error_log is not None:
                self._log_error(f"email {subject!r} not delivered: {e}")

    def _start(
        self, name: str, target: Callable[..., None], *args: Any
    ) -> threading.Thread:
        t = threading.Thread(
            target=target, args=args, name=f"sqlreport-{name}", daemon=True
        )
        t.start()
        return t

    def _dispatch(
        self,
        subject: str,
        body: str,
        with_limiter: bool,
        dedupe_key: Optional[str] = None,
    ) -> Dispatch:
        threads = [
            self._start("email", self._send, subject, body, with_limiter, dedupe_key)
        ]
        if self.error_log is not None:
            threads.append(self._start("log", self._log_error, body))
        return Dispatch(threads)

    # ---- reporting -----------------------------------------------------------

    def message(self, subject: str, body: str = "") -> Dispatch:
        """Print a timestamped notice and deliver it, waiting for delivery."""
        if not body:
            body = subject
        m = format_notice(body)
        _emit(m)
        dispatch = self._dispatch(subject, m, with_limiter=False)
        dispatch.wait()
        return dispatch

    def sql(self, query: str, *params: Any) -> None:
        """Print the call site and the query with its parameters inlined."""
        location = self.file_with_line_num()
        _emit(format_sql(location, inline(query, *params)))

    def sql_error(
        self, context: Any, err: Optional[BaseException], query: str, *params: Any
    ) -> Optional[Dispatch]:
        """
        Report a failed query. With no error this only prints the query,
        like sql(). Delivery is not awaited; the returned Dispatch can be.
        """
        location = self.file_with_line_num()
        sql = inline(query, *params)
        if err is None:
            _emit(format_sql(location, sql))
            return None
        _emit(f"\n{location}:\n{err}\n{sql}\n")

        m = format_message(context, location, err, sql)
        key = f"{location}\n{err}\n{sql}"
        return self._dispatch(SQL_ERROR_SUBJECT, m, with_limiter=True, dedupe_key=key)

    def error(self, context: Any, err: BaseException) -> Dispatch:
        """Report an error with a dump of `context`. Delivery is not awaited."""
        location = self.file_with_line_num()
        _emit(f"\n{location}\n{err}\n")

        m = format_message(context, location, err)
        key = f"{location}\n{err}"
        return self._dispatch(ERROR_SUBJECT, m, with_limiter=True, dedupe_key=key)

    # ---- call sites ----------------------------------------------------------

    def file_with_line_num(self) -> str:
        """Location of the code that called the reporting method calling this."""
        return locate(2)

    def files_with_line_num(self) -> List[str]:
        """Every frame on the current stack that belongs to the application."""
        return locate_all(self.app_name)
