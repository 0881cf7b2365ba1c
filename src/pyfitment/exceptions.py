"""Custom exception hierarchy for pyfitment."""

from __future__ import annotations

from typing import Any


class FitmentError(Exception):
    """Base exception for all pyfitment errors."""


class FitmentConfigError(FitmentError):
    """Invalid or missing configuration (e.g. no Storefront access token)."""


class FitmentTransportError(FitmentError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class FitmentApiError(FitmentError):
    """GraphQL response carried an ``errors`` list."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[Any] | None = None,
        endpoint: str = "",
    ) -> None:
        self.errors = list(errors or [])
        self.endpoint = endpoint
        super().__init__(message)


class FitmentSelectionError(FitmentError, ValueError):
    """A selector field was given a value it cannot accept.

    Raised when the field is locked (no valid upstream selection yet).
    """
