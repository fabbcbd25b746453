from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"


class WeatherLookupError(Exception):
    """Base class for every way a lookup can fail.

    ``kind`` is fixed by the subclass at the point the error is raised, so
    callers never have to inspect the message text to classify a failure.
    """

    kind: ErrorKind


class ValidationError(WeatherLookupError):
    kind = ErrorKind.VALIDATION


class NetworkError(WeatherLookupError):
    kind = ErrorKind.NETWORK


class UpstreamTimeout(WeatherLookupError):
    kind = ErrorKind.TIMEOUT


class UpstreamError(WeatherLookupError):
    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
        malformed: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.malformed = malformed


class UserMessage(str, Enum):
    NOT_FOUND = "City not found. Please check the spelling."
    AUTH_FAILED = "Weather service authentication failed."
    TIMED_OUT = "Weather service request timed out. Please try again."
    UNREACHABLE = "Unable to connect to weather service."
    UNAVAILABLE = "Weather service temporarily unavailable. Please try again."


_KIND_MESSAGES: Dict[ErrorKind, UserMessage] = {
    ErrorKind.TIMEOUT: UserMessage.TIMED_OUT,
    ErrorKind.NETWORK: UserMessage.UNREACHABLE,
}

_STATUS_MESSAGES: Dict[int, UserMessage] = {
    401: UserMessage.AUTH_FAILED,
    404: UserMessage.NOT_FOUND,
}


def translate_error(error: BaseException) -> UserMessage:
    if not isinstance(error, WeatherLookupError):
        return UserMessage.UNAVAILABLE
    if isinstance(error, UpstreamError):
        return _STATUS_MESSAGES.get(error.status_code, UserMessage.UNAVAILABLE)
    return _KIND_MESSAGES.get(error.kind, UserMessage.UNAVAILABLE)
