"""Tests for error handling."""

import logging
import pytest
from terse_json.error_handler import ErrorHandler
from terse_json.types import (
    CompressOptions,
    ErrorType,
    FormatError,
    TerseConfig,
    TerseError,
    UnsupportedVersionError,
)


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.handler = ErrorHandler()

    def test_validate_input(self):
        assert self.handler.validate_input('[1, 2]').is_valid
        assert not self.handler.validate_input('[1, 2').is_valid

    def test_unsupported_version_is_recoverable(self):
        response = self.handler.handle_codec_error(UnsupportedVersionError(2, [{"a": 1}]))

        assert response.can_recover
        assert response.partial_results == [{"a": 1}]
        assert "Upgrade" in response.suggested_action

    def test_format_error_is_recoverable(self):
        response = self.handler.handle_codec_error(FormatError("'v' field is missing"))
        assert response.can_recover
        assert response.partial_results is None

    def test_syntax_error_is_not_recoverable(self):
        response = self.handler.handle_codec_error(TerseError("bad", ErrorType.SYNTAX))
        assert not response.can_recover

    def test_other_errors(self):
        response = self.handler.handle_codec_error(TerseError("mismatch", ErrorType.INTEGRITY))
        assert not response.can_recover
        assert "Unknown error type" in response.suggested_action

    def test_errors_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR):
            self.handler.handle_codec_error(UnsupportedVersionError(9))
        assert "version" in caplog.text

    def test_validate_config(self):
        assert self.handler.validate_config(TerseConfig()).is_valid

        result = self.handler.validate_config(TerseConfig(min_array_length=-1, header_name=""))
        assert not result.is_valid
        assert {error.location for error in result.errors} == {"min_array_length", "header_name"}

    def test_validate_config_warns_on_large_min_length(self):
        config = TerseConfig(compress_options=CompressOptions(min_key_length=12))
        result = self.handler.validate_config(config)
        assert result.is_valid
        assert len(result.warnings) == 1


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(FormatError, TerseError)
        assert issubclass(UnsupportedVersionError, TerseError)

    def test_unsupported_version_context(self):
        error = UnsupportedVersionError(3, data=[1])
        assert error.error_type == ErrorType.VERSION
        assert error.context == {"version": 3, "data": [1]}
        assert "3" in str(error)
        assert "supported: 1" in str(error)

    def test_format_error_type(self):
        assert FormatError("x").error_type == ErrorType.FORMAT
