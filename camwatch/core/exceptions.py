"""
Exception hierarchy for camwatch.

Every error carries a user-facing message that views render as plain text
near the point of action. API controllers translate these into HTTP errors.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class CamwatchError(Exception):
    """Base exception for all camwatch errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Input validation (recoverable, nothing was mutated)
# -----------------------------------------------------------------------------


class ValidationError(CamwatchError):
    """Raised when user input is rejected before any side effect."""

    def __init__(self, message: str, reason: str, **kwargs):
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)
        self.reason = reason


# -----------------------------------------------------------------------------
# Identity
# -----------------------------------------------------------------------------


class AuthRequiredError(CamwatchError):
    """Raised when an operation needs an authenticated identity and none is held."""

    def __init__(self, message: str = "User not authenticated", **kwargs):
        kwargs.setdefault("user_message", "Please sign in to continue.")
        super().__init__(message, **kwargs)


# -----------------------------------------------------------------------------
# Transport (network / storage / database)
# -----------------------------------------------------------------------------


class TransportError(CamwatchError):
    """Raised when a call against the remote store fails."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)
        self.operation = operation


class NotFoundError(CamwatchError):
    """Raised when a record does not exist or is not visible to the caller."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)


# -----------------------------------------------------------------------------
# Processing service registration (always swallowed by callers)
# -----------------------------------------------------------------------------


class BestEffortNotifyError(CamwatchError):
    """Raised by the registration notifier; callers log it and move on."""

    def __init__(self, message: str, endpoint: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.endpoint = endpoint


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at API/view boundaries so internal details are never exposed.
    """
    if isinstance(exc, CamwatchError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."
