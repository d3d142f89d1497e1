"""Typed exception hierarchy for CryptoMKT API calls.

Lets callers tell a local bug (bad URL, missing secret) from a transient
network problem, an HTTP status rejection, a broken body stream or a payload
that does not match the expected shape.
"""

from __future__ import annotations
from typing import Optional


class CryptoMktError(RuntimeError):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(f"{operation}: {message}" if operation else message)
        self.operation = operation


class RequestBuildError(CryptoMktError):
    """The request could not be constructed locally (never retried)."""


class CredentialsError(RequestBuildError):
    """An authenticated call was attempted without an API key or secret."""


class TransportError(CryptoMktError):
    """Connection failure or timeout on every attempt."""

    def __init__(self, message: str, *, operation: str = "", attempts: int = 0) -> None:
        super().__init__(message, operation=operation)
        self.attempts = attempts


class StatusError(CryptoMktError):
    """The API answered with a non-success HTTP status on every attempt."""

    def __init__(
        self,
        message: str,
        *,
        operation: str = "",
        status_code: Optional[int] = None,
        reason: str = "",
        attempts: int = 0,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.reason = reason
        self.attempts = attempts


class BodyReadError(CryptoMktError):
    """The body of a successful response could not be read (never retried)."""


class DecodeError(CryptoMktError, ValueError):
    """The response body is not valid JSON or does not match the expected shape."""
