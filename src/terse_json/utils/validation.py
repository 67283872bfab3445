"""Validation utilities for terse payloads and round-trip integrity."""

import json
from collections.abc import Mapping, Sequence
from typing import Any, List, Set, Tuple
from ..types import (
    MARKER_FIELD,
    VERSION_FIELD,
    DICTIONARY_FIELD,
    DATA_FIELD,
    ErrorType,
    FormatError,
    FormatVersion,
    ValidationError,
    ValidationResult,
)
from ..tree import deep_equal, is_json_value, iter_keys


class ValidationUtils:
    """Utility class for strict validation of payloads and data."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not is_json_value(data):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="Parsed value contains non-finite numbers",
                location="input"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_payload(value: Any) -> ValidationResult:
        """
        Strictly validate a wire-form terse payload.

        Reports every structural problem instead of stopping at the first,
        and warns about dictionary entries the data never uses.

        Args:
            value: Candidate envelope

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if not isinstance(value, Mapping):
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"Payload must be an object, got {type(value).__name__}",
                location="root"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if value.get(MARKER_FIELD) is not True:
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"'{MARKER_FIELD}' field must be true",
                location=MARKER_FIELD
            ))

        if VERSION_FIELD not in value:
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"'{VERSION_FIELD}' field is missing",
                location=VERSION_FIELD
            ))
        else:
            version = value[VERSION_FIELD]
            if isinstance(version, bool) or not isinstance(version, int):
                errors.append(ValidationError(
                    type=ErrorType.FORMAT,
                    message=f"'{VERSION_FIELD}' must be an integer, got {type(version).__name__}",
                    location=VERSION_FIELD
                ))
            elif not FormatVersion.is_supported(version):
                errors.append(ValidationError(
                    type=ErrorType.VERSION,
                    message=f"Unsupported version {version}",
                    location=VERSION_FIELD
                ))

        dictionary = value.get(DICTIONARY_FIELD)
        dictionary_errors = ValidationUtils._validate_dictionary(dictionary)
        errors.extend(dictionary_errors)

        if DATA_FIELD not in value:
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"'{DATA_FIELD}' field is missing",
                location=DATA_FIELD
            ))
        elif not dictionary_errors:
            used = set(iter_keys(value[DATA_FIELD]))
            unused = [alias for alias in dictionary if alias not in used]
            if unused:
                warnings.append(f"{len(unused)} dictionary entries are never used: {', '.join(unused[:10])}")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_dictionary(dictionary: Any) -> List[ValidationError]:
        """Validate the alias -> original mapping."""
        errors = []

        if dictionary is None:
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"'{DICTIONARY_FIELD}' field is missing",
                location=DICTIONARY_FIELD
            ))
            return errors

        if not isinstance(dictionary, Mapping):
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"'{DICTIONARY_FIELD}' must be an object",
                location=DICTIONARY_FIELD
            ))
            return errors

        originals: Set[str] = set()
        for alias, original in dictionary.items():
            location = f"{DICTIONARY_FIELD}.{alias}"
            if not isinstance(alias, str) or not isinstance(original, str):
                errors.append(ValidationError(
                    type=ErrorType.FORMAT,
                    message="Dictionary entries must map strings to strings",
                    location=location
                ))
                continue
            if len(original) <= 1:
                errors.append(ValidationError(
                    type=ErrorType.FORMAT,
                    message=f"Key '{original}' is too short to be aliased",
                    location=location
                ))
            if original in originals:
                errors.append(ValidationError(
                    type=ErrorType.FORMAT,
                    message=f"Key '{original}' is mapped by more than one alias",
                    location=location
                ))
            originals.add(original)

        return errors

    @staticmethod
    def assert_terse_payload(value: Any) -> None:
        """
        Raise if a value is not a well-formed terse payload.

        Raises:
            FormatError: With every validation message joined
        """
        result = ValidationUtils.validate_payload(value)
        if not result.is_valid:
            messages = "; ".join(error.message for error in result.errors)
            raise FormatError(f"Invalid terse payload: {messages}", context=result.errors)

    @staticmethod
    def verify_round_trip(original: Any, decoded: Any) -> ValidationResult:
        """
        Compare a decoded value against an independently obtained plain value.

        Args:
            original: Plain value (e.g. the response fetched without terse support)
            decoded: Value obtained by expanding or proxying the terse response

        Returns:
            ValidationResult with integrity errors
        """
        errors = []
        warnings = []

        original_count, decoded_count = ValidationUtils._element_counts(original, decoded)
        if original_count != decoded_count:
            errors.append(ValidationError(
                type=ErrorType.INTEGRITY,
                message=f"Element count mismatch: expected {original_count}, got {decoded_count}",
                location="root"
            ))
        elif not deep_equal(original, decoded):
            errors.append(ValidationError(
                type=ErrorType.INTEGRITY,
                message="Decoded value differs from the original",
                location="root"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _element_counts(original: Any, decoded: Any) -> Tuple[int, int]:
        def count(value: Any) -> int:
            if isinstance(value, Mapping) or (
                    isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))):
                return len(value)
            return 1
        return count(original), count(decoded)
