# PURPOSE: Exception taxonomy for the recommendation pipeline and its clients.
# CONTEXT: Only ValidationError crosses the HTTP boundary as a client error; the
#          AI-path errors are recovered by the mock fallback inside the service.

from __future__ import annotations
from typing import Optional


class AdvisorError(Exception):
    """Base class for every error raised by smart_advisor."""


class ValidationError(AdvisorError):
    """User input failed the minimum-length contract (HTTP 400)."""


class ProviderError(AdvisorError):
    """The AI completion call failed or returned nothing usable."""


class ParseError(AdvisorError):
    """The AI reply does not contain a brace-delimited JSON object."""


class DecodeError(ParseError):
    """A brace-delimited span was found but it is not valid JSON."""


class TransportError(AdvisorError):
    """
    Client-side failure talking to the recommendation service.

    attributes:
    - status_code: int | None – HTTP status when the server answered, None for
      network-level failures (unreachable host, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "AdvisorError",
    "ValidationError",
    "ProviderError",
    "ParseError",
    "DecodeError",
    "TransportError",
]
