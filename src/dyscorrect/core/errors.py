"""
Exception types raised by the correction engine and its service glue.
"""


class DyscorrectError(Exception):
    """Base class for all dyscorrect errors."""


class PatchError(DyscorrectError, ValueError):
    """Offset corrections violate the non-overlapping, in-bounds precondition."""


class TokenNotFoundError(DyscorrectError, KeyError):
    def __init__(self, token_id: str):
        super().__init__(token_id)
        self.token_id = token_id

    def __str__(self) -> str:
        return f"Unknown token: {self.token_id}"


class ReconstructionMismatchError(DyscorrectError, ValueError):
    """Tokens do not reproduce the base text they were supposed to come from."""


class AnalysisServiceError(DyscorrectError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(DyscorrectError, KeyError):
    kind = "Record"

    def __init__(self, record_id: str):
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"{self.kind} not found: {self.record_id}"


class EssayNotFoundError(NotFoundError):
    kind = "Essay"


class SessionNotFoundError(NotFoundError):
    kind = "Session"


class SessionBusyError(DyscorrectError):
    """Another request holds the session lock. Nothing was applied."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session is busy: {self.session_id}"
