"""Utility functions for terse-json."""

from .size_calculator import SizeCalculator
from .validation import ValidationUtils

__all__ = ["SizeCalculator", "ValidationUtils"]
