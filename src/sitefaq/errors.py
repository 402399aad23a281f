from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    COMPLETION_NOT_CONFIGURED = "COMPLETION_NOT_CONFIGURED"
    COMPLETION_HTTP_ERROR = "COMPLETION_HTTP_ERROR"
    COMPLETION_NETWORK_ERROR = "COMPLETION_NETWORK_ERROR"
    COMPLETION_BAD_RESPONSE = "COMPLETION_BAD_RESPONSE"


# Provider-reported code for a parameter value the selected model rejects
UNSUPPORTED_VALUE = "unsupported_value"


class SiteFaqError(Exception):
    """Raised by request handlers for expected failure conditions.

    Caught by server.py and turned into the generic apology response; the
    message is logged but never returned to the caller.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class CompletionError(Exception):
    """Raised by the completion client when a chat-completion call fails.

    ``code`` is the provider's own error code when the response carried one
    (e.g. ``unsupported_value``), otherwise one of the local ``ErrorCode``
    values. ``param`` names the offending request parameter, if reported.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        param: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.param = param
        self.status_code = status_code

    @property
    def is_unsupported_value(self) -> bool:
        return self.code == UNSUPPORTED_VALUE and self.param is not None
