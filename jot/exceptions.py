"""Library exceptions."""

from typing import Optional


class JotError(Exception):
    """Jot base exception."""


class ConfigError(JotError):
    """Missing or malformed environment configuration."""


class UsageError(JotError):
    """Malformed command-line invocation."""


class NotFoundError(JotError):
    """The addressed note does not exist, or there are no notes at all."""


# ------------------------------- Transport -----------------------------------


class NotesError(JotError):
    """Base pipeline transport error."""


class TransportError(NotesError):
    """Network failure or timeout before a response was received."""


class RemoteError(NotesError):
    """Non-2xx HTTP status, or a statement error embedded in a 2xx response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EncodingError(NotesError):
    """The request payload could not be built."""


class DecodingError(NotesError):
    """The response payload is not valid JSON or not a pipeline envelope."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.payload = payload
