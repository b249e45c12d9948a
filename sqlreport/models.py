"""Data models and capabilities for reporting."""

from dataclasses import dataclass, field
from email.headerregistry import Address
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable


@dataclass
class EmailData:
    """A single outgoing email."""

    from_addr: Address
    to: List[Address]
    subject: str
    body: str
    with_limiter: bool = False
    # identifies repeats of the same problem; the body carries a timestamp
    dedupe_key: Optional[str] = None


@runtime_checkable
class EmailProvider(Protocol):
    """Anything that can deliver an EmailData. Raises on failure."""

    def send(self, data: EmailData) -> None: ...


@dataclass(frozen=True)
class EmailConfig:
    """Email settings of a Reporter."""

    sender: EmailProvider
    from_addr: Address
    to: Tuple[Address, ...] = field(default_factory=tuple)

    def build(
        self,
        subject: str,
        body: str,
        with_limiter: bool = False,
        dedupe_key: Optional[str] = None,
    ) -> EmailData:
        return EmailData(
            from_addr=self.from_addr,
            to=list(self.to),
            subject=subject,
            body=body,
            with_limiter=with_limiter,
            dedupe_key=dedupe_key,
        )


@runtime_checkable
class ReportProvider(Protocol):
    """The reporting surface application code depends on."""

    def message(self, subject: str, body: str = "") -> Any: ...

    def sql(self, query: str, *params: Any) -> None: ...

    def sql_error(
        self, context: Any, err: Optional[BaseException], query: str, *params: Any
    ) -> Any: ...

    def error(self, context: Any, err: BaseException) -> Any: ...

    def file_with_line_num(self) -> str: ...

    def files_with_line_num(self) -> List[str]: ...
