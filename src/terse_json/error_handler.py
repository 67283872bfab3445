"""Error handling for terse-json operations."""

import logging
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    TerseConfig,
    TerseError,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Validation and error handling for codec operations.

    Maps codec errors to recovery suggestions so transport layers can decide
    whether to fall back to plain data.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        return ValidationUtils.validate_json_string(input_data)

    def handle_codec_error(self, error: TerseError) -> ErrorResponse:
        """
        Handle codec errors and provide recovery suggestions.

        Args:
            error: TerseError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Codec error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.VERSION:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Upgrade terse-json to a release that supports this payload version, "
                                 "or use the raw data as is (keys will stay aliased).",
                partial_results=error.context.get("data") if error.context else None
            )
        elif error.error_type == ErrorType.FORMAT:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Treat the body as plain JSON; it is not a well-formed terse payload.",
                partial_results=None
            )
        elif error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Fix the JSON syntax of the input.",
                partial_results=None
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                partial_results=None
            )

    def validate_config(self, config: TerseConfig) -> ValidationResult:
        """
        Validate producer configuration.

        Args:
            config: TerseConfig to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if config.min_array_length < 0:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="min_array_length must be non-negative",
                location="min_array_length"
            ))
        if config.min_payload_bytes < 0:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="min_payload_bytes must be non-negative",
                location="min_payload_bytes"
            ))
        if not config.header_name:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="header_name cannot be empty",
                location="header_name"
            ))
        if config.compress_options.min_key_length > 8:
            warnings.append("min_key_length is large (> 8). Few keys will be aliased.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
