"""Size calculation utilities for JSON payloads."""

import json
import logging
from typing import Any, Dict, Optional


class SizeCalculator:
    """
    Utility class for calculating serialized sizes of JSON payloads.

    Sizes are UTF-8 byte counts of compact JSON (no whitespace), which is
    what a JSON response body costs on the wire before transport compression.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def calculate_json_size(self, data: Any, ensure_ascii: bool = False) -> int:
        """
        Calculate the size of data when serialized to JSON in UTF-8 bytes.

        Args:
            data: Data to calculate size for
            ensure_ascii: Whether to ensure ASCII encoding

        Returns:
            Size in bytes

        Raises:
            ValueError: If data is not JSON serializable
        """
        try:
            # Fast path for primitives
            if isinstance(data, (str, int, float, bool)) or data is None:
                return self._calculate_primitive_size(data, ensure_ascii)

            json_string = json.dumps(data, ensure_ascii=ensure_ascii, separators=(',', ':'))
            return len(json_string.encode('utf-8'))
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Data is not JSON serializable: {str(e)}")

    def _calculate_primitive_size(self, data: Any, ensure_ascii: bool = False) -> int:
        """Size calculation for primitive types."""
        if data is None:
            return 4  # "null"
        elif isinstance(data, bool):
            return 4 if data else 5  # "true" or "false"
        elif isinstance(data, int):
            return len(str(data))
        else:
            return len(json.dumps(data, ensure_ascii=ensure_ascii).encode('utf-8'))

    def compare_sizes(self, original: Any, compressed: Any) -> Dict[str, Any]:
        """
        Compare the serialized sizes of a plain value and its envelope.

        Args:
            original: Plain JSON value
            compressed: Wire-form envelope

        Returns:
            Dictionary with both sizes, bytes saved, ratio and savings percent
        """
        original_size = self.calculate_json_size(original)
        compressed_size = self.calculate_json_size(compressed)
        ratio = compressed_size / original_size if original_size > 0 else 1.0

        return {
            "original_size": original_size,
            "compressed_size": compressed_size,
            "bytes_saved": original_size - compressed_size,
            "compression_ratio": ratio,
            "savings_percent": (1 - ratio) * 100,
        }

    def format_size(self, size_bytes: int) -> str:
        """
        Format size in human-readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string
        """
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.1f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
