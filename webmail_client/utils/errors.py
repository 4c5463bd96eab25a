"""
Centralized error hierarchy for the webmail client.

This module provides a base exception class and specific error types
for the transport and synchronization layers, along with a helper for
converting technical errors to user-friendly messages.

A gate that refuses a request is not an error and has no exception here:
the caller simply drops the request.
"""
from typing import Optional, Union


class WebmailError(Exception):
    """
    Base exception class for all webmail client errors.

    All application-specific exceptions inherit from this class
    to enable centralized error handling and user-friendly message mapping.
    """
    pass


class ConfigError(WebmailError):
    """Raised when a configuration value is invalid."""
    pass


class ApiError(WebmailError):
    """Base exception for REST API errors."""
    pass


class ApiConnectionError(ApiError):
    """Raised when a request never completed (connection refused, DNS, timeout)."""
    pass


class ApiStatusError(ApiError):
    """Raised when the server answered with a non-success status."""

    def __init__(self, message: str, status_code: int, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AuthenticationError(ApiStatusError):
    """Raised when the server rejects the session's credentials."""
    pass


class ApiResponseError(ApiError):
    """Raised when a response body is not the expected JSON shape."""
    pass


class SyncError(WebmailError):
    """Raised when a synchronization operation is used out of order."""
    pass


def human_friendly_message(exc: Union[WebmailError, Exception]) -> str:
    """
    Convert technical error exceptions to user-friendly messages.

    The core never builds messages itself; this is for the outer UI
    layer, which decides whether to show anything at all.

    Args:
        exc: The exception to convert.

    Returns:
        A user-friendly error message string.
    """
    error_msg = str(exc) if str(exc) else ""

    if isinstance(exc, WebmailError):
        if isinstance(exc, AuthenticationError):
            return (
                "Could not sign in to your email account. Please check that "
                "your email address and password are correct."
            )
        elif isinstance(exc, ApiStatusError):
            if exc.status_code >= 500:
                return (
                    "The mail server could not complete the request. "
                    "Please try again. If the problem continues, the email "
                    "service may be temporarily unavailable."
                )
            return "The mail server rejected the request. Please try again."
        elif isinstance(exc, ApiConnectionError):
            if "timeout" in error_msg.lower() or "timed out" in error_msg.lower():
                return (
                    "The connection to the mail server timed out. This might be "
                    "due to a slow internet connection or server issues. Please try again."
                )
            return (
                "Could not connect to the mail server. Please check:\n\n"
                "• Your internet connection\n"
                "• The server address in your settings\n"
                "• Whether the email service is temporarily unavailable"
            )
        elif isinstance(exc, ApiResponseError):
            return (
                "The mail server sent an unexpected response. "
                "Please try again."
            )
        elif isinstance(exc, SyncError):
            return (
                "The mailbox is out of date. Please reopen the mailbox "
                "and try again."
            )
        elif isinstance(exc, ConfigError):
            return f"Invalid configuration: {error_msg}"
        else:
            if error_msg:
                return f"An error occurred: {error_msg}"
            return "An unexpected error occurred. Please try again."

    # Handle standard Python exceptions
    elif isinstance(exc, ConnectionError):
        return (
            "Could not connect to the server. Please check your internet "
            "connection and try again."
        )
    elif isinstance(exc, TimeoutError):
        return (
            "The operation timed out. This might be due to a slow connection "
            "or server issues. Please try again."
        )
    elif isinstance(exc, ValueError):
        return f"Invalid input: {str(exc)}"

    # Fallback for unknown exceptions
    else:
        error_msg = error_msg or "Unknown error"
        return f"An error occurred: {error_msg}"
