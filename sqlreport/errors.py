"""Error taxonomy shared by sqlreport and the code that uses it."""


class ReportError(Exception):
    """Base class for sqlreport errors."""

    default_message = "report error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ReportedError(ReportError):
    """The failure has already been reported; callers should not report it again."""

    default_message = "error has been reported"


class NotFoundError(ReportError):
    default_message = "not found"


class ContextCanceledError(ReportError):
    """An upstream operation was canceled or ran past its deadline."""

    default_message = "context canceled"


class InternalError(ReportError):
    default_message = "internal server error"


ERR_REPORTED = ReportedError()
ERR_NOT_FOUND = NotFoundError()
ERR_CONTEXT = ContextCanceledError()
ERR_INTERNAL = InternalError()
