"""
Exception types raised by the relay and its startup path.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for all feed relay errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class FetchError(RelayError):
    """The request to the remote feed could not be executed, or its body could not be read."""


class CredentialError(RelayError):
    """Credentials could not be obtained at startup."""
