"""Custom exceptions for the Eporner API client"""

from typing import Any, Iterable, Optional

import httpx


class EpornerError(Exception):
    """Base exception for the Eporner API client"""
    pass


class ValidationError(EpornerError):
    """
    Exception raised when a request parameter is outside its value domain.

    Always raised before any network call is made.
    """

    def __init__(self, field: str, value: Any, message: str = ""):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value '{value}' for parameter '{field}'")

    @classmethod
    def _invalid_choice(cls, field: str, value: Any, choices: Iterable[Any]) -> "ValidationError":
        valid = ", ".join(str(choice) for choice in choices)
        return cls(field, value, f"Invalid {field} '{value}'. Valid values are: {valid}")

    @classmethod
    def _invalid_range(cls, field: str, value: Any, maximum: int) -> "ValidationError":
        return cls(field, value, f"Invalid {field} '{value}'. Valid range is: 1-{maximum}")

    @classmethod
    def invalid_thumbsize(cls, value: Any, choices: Iterable[str]) -> "ValidationError":
        return cls._invalid_choice("thumbsize", value, choices)

    @classmethod
    def invalid_order(cls, value: Any, choices: Iterable[str]) -> "ValidationError":
        return cls._invalid_choice("order", value, choices)

    @classmethod
    def invalid_format(cls, value: Any, choices: Iterable[str]) -> "ValidationError":
        return cls._invalid_choice("format", value, choices)

    @classmethod
    def invalid_per_page(cls, value: Any, maximum: int) -> "ValidationError":
        return cls._invalid_range("per_page", value, maximum)

    @classmethod
    def invalid_page(cls, value: Any, maximum: int) -> "ValidationError":
        return cls._invalid_range("page", value, maximum)

    @classmethod
    def invalid_gay(cls, value: Any, choices: Iterable[int]) -> "ValidationError":
        return cls._invalid_choice("gay", value, choices)

    @classmethod
    def invalid_lq(cls, value: Any, choices: Iterable[int]) -> "ValidationError":
        return cls._invalid_choice("lq", value, choices)

    @classmethod
    def missing_required(cls, field: str) -> "ValidationError":
        return cls(field, None, f"Required parameter '{field}' is missing")

    @classmethod
    def empty_id(cls, value: Any) -> "ValidationError":
        return cls("id", value, "Video ID cannot be empty")


class TransportError(EpornerError):
    """Exception raised for network failures and non-2xx API responses"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[bytes] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body

    @classmethod
    def from_http_error(cls, error: httpx.HTTPError) -> "TransportError":
        """Build a transport error from an httpx exception"""
        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            return cls(
                f"API returned status code: {response.status_code}",
                status_code=response.status_code,
                response_body=response.content
            )
        return cls(f"Network error: {error}")


class ParseError(EpornerError):
    """Exception raised when a response body cannot be decoded"""
    pass


class DomainConstructionError(EpornerError):
    """Exception raised when a decoded record lacks a mandatory field"""
    pass


class ConfigurationError(EpornerError):
    """Exception raised for configuration errors"""
    pass
