"""Exceptions for the Berlin Clock service.

This module defines the exception hierarchy used by the codec, the HTTP layer
and the CLI. Every error carries a machine-readable ``error_code`` so callers
can map it onto transport-level responses without inspecting messages.
"""

from typing import Any


class BerlinClockError(Exception):
    """Base exception class for all Berlin Clock exceptions.

    All service-specific exceptions inherit from this class so that the HTTP
    layer and the CLI can handle them in a single place.
    """

    def __init__(self, message: str, *, error_code: str | None = None, context: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Optional machine-readable error code
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}


# Configuration Errors
class ConfigurationError(BerlinClockError):
    """Base class for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Exception raised when configuration values are invalid."""

    def __init__(self, config_key: str, value: Any, expected: str):
        """Initialize the exception.

        Args:
            config_key: The configuration key that is invalid
            value: The invalid value that was provided
            expected: Description of what was expected
        """
        self.config_key = config_key
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid configuration for '{config_key}': got {value!r}, expected {expected}",
            error_code="INVALID_CONFIG",
            context={"config_key": config_key, "value": value, "expected": expected}
        )


# Conversion Errors
class ConversionError(BerlinClockError):
    """Base class for errors raised while converting between time and lamps."""
    pass


class InvalidFormatError(ConversionError):
    """Exception raised for malformed time text or lamp rows.

    Covers wrong row lengths, characters outside a row's alphabet and time
    strings that are not strict ``HH:MM:SS``.
    """

    def __init__(self, field: str, value: Any, expected: str):
        """Initialize the exception.

        Args:
            field: Name of the input that is malformed
            value: The rejected value
            expected: Description of the accepted format
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid {field}: got {value!r}, expected {expected}",
            error_code="INVALID_FORMAT",
            context={"field": field, "value": value, "expected": expected}
        )


class OutOfRangeError(ConversionError):
    """Exception raised when a time component falls outside its legal range."""

    def __init__(self, field: str, value: int, limit: int):
        """Initialize the exception.

        Args:
            field: Name of the time component (``hour``, ``minute``, ``second``)
            value: The rejected value
            limit: Largest value the component may take
        """
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(
            f"{field.capitalize()} value {value} is out of range [0, {limit}]",
            error_code="OUT_OF_RANGE",
            context={"field": field, "value": value, "limit": limit}
        )
