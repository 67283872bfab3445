"""JSON parser with validation and payload detection."""

import json
import logging
from typing import Any, Optional, Tuple
from .error_handler import ErrorHandler
from .engines.shape_detector import is_terse_payload


class JSONParser:
    """
    JSON text parser used by the CLI and client helpers.

    Parses a JSON document and reports whether it is a terse payload so the
    caller can choose between decoding and using the value as is.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Tuple[Any, bool]:
        """
        Parse JSON string and detect terse payloads.

        Args:
            json_string: JSON string to parse

        Returns:
            Tuple of (parsed_data, is_terse)

        Raises:
            ValueError: If JSON is invalid
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ValueError(f"Invalid JSON input: {'; '.join(error_messages)}")

        data = json.loads(json_string)
        is_terse = is_terse_payload(data)

        self.logger.info(f"Parsed JSON document ({'terse payload' if is_terse else 'plain JSON'})")
        return data, is_terse

    def parse_bytes(self, body: bytes, encoding: str = "utf-8") -> Tuple[Any, bool]:
        """Parse a raw response body."""
        return self.parse(body.decode(encoding))
