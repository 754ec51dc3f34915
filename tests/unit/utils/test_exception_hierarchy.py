"""Tests for the exception hierarchy."""

import pytest

from berlin_clock.utils.exceptions import (
    BerlinClockError,
    ConfigurationError,
    ConversionError,
    InvalidConfigurationError,
    InvalidFormatError,
    OutOfRangeError,
)

pytestmark = pytest.mark.unit


class TestBerlinClockError:
    """Test the base BerlinClockError class."""

    def test_basic_creation(self):
        error = BerlinClockError("Test error message")
        assert str(error) == "Test error message"
        assert error.error_code is None
        assert error.context == {}

    def test_with_all_params(self):
        context = {"key": "value"}
        error = BerlinClockError("Test error", error_code="TEST_ERROR", context=context)
        assert error.error_code == "TEST_ERROR"
        assert error.context == context


class TestConversionErrors:
    """Test the errors raised by the codec."""

    def test_invalid_format(self):
        error = InvalidFormatError("five_hours_row", "RRRRR", "4 of OR")
        assert isinstance(error, ConversionError)
        assert isinstance(error, BerlinClockError)
        assert error.error_code == "INVALID_FORMAT"
        assert "five_hours_row" in str(error)
        assert "'RRRRR'" in str(error)
        assert error.context == {"field": "five_hours_row", "value": "RRRRR", "expected": "4 of OR"}

    def test_out_of_range(self):
        error = OutOfRangeError("hour", 24, 23)
        assert isinstance(error, ConversionError)
        assert error.error_code == "OUT_OF_RANGE"
        assert str(error) == "Hour value 24 is out of range [0, 23]"
        assert error.context == {"field": "hour", "value": 24, "limit": 23}


def test_invalid_configuration():
    error = InvalidConfigurationError("port", 0, "an integer in [1, 65535]")
    assert isinstance(error, ConfigurationError)
    assert not isinstance(error, ConversionError)
    assert error.error_code == "INVALID_CONFIG"
    assert error.config_key == "port"
