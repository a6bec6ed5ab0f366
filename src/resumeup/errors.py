"""
Error taxonomy for resumeup.

Fatal errors (AuthError, SchemaError, PersistenceError, a TransportError
after the retry) abort a run. Per-resume publish failures and
NotificationError never do.
"""

from typing import Optional


class ResumeUpError(Exception):
    """Base class for all resumeup errors."""
    pass


class TransportError(ResumeUpError):
    """Raised when an outbound HTTP call fails at the network level."""
    pass


class HttpStatusError(ResumeUpError):
    """Raised when the resume API answers with an unexpected status."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"HTTP {status}: {body}")
        self.status = status
        self.body = body


class AuthError(ResumeUpError):
    """Raised when the token endpoint (or the retried listing) rejects us."""

    def __init__(self, status: int, body: str = "", message: Optional[str] = None):
        super().__init__(message or f"Authorization failed with HTTP {status}: {body}")
        self.status = status
        self.body = body


class SchemaError(ResumeUpError):
    """Raised when a payload from hh.ru does not have the expected shape."""
    pass


class NotificationError(ResumeUpError):
    """Raised when a notification could not be delivered."""
    pass


class PersistenceError(ResumeUpError):
    """Raised when a refreshed token pair could not be written to disk."""
    pass
