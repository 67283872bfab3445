"""Tests for validation utilities."""

import pytest
from terse_json.codec import TerseCodec
from terse_json.types import ErrorType, FormatError
from terse_json.utils.validation import ValidationUtils


class TestValidateJsonString:
    """Tests for JSON text validation."""

    def test_valid(self):
        result = ValidationUtils.validate_json_string('{"key": [1, 2, 3]}')
        assert result.is_valid
        assert result.errors == []

    def test_empty(self):
        result = ValidationUtils.validate_json_string("   ")
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX

    def test_syntax_error_location(self):
        result = ValidationUtils.validate_json_string('{"key": }')
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX
        assert "line 1" in result.errors[0].location

    def test_non_finite_numbers(self):
        result = ValidationUtils.validate_json_string('{"value": NaN}')
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.STRUCTURE


class TestValidatePayload:
    """Tests for strict envelope validation."""

    def test_valid_envelope(self, users_json):
        envelope = TerseCodec().compress(users_json).to_dict()
        result = ValidationUtils.validate_payload(envelope)
        assert result.is_valid
        assert result.warnings == []

    def test_reports_every_problem(self):
        result = ValidationUtils.validate_payload({"__terse__": False, "v": "1", "k": {"a": "x"}})
        locations = {error.location for error in result.errors}

        assert not result.is_valid
        assert {"__terse__", "v", "k.a", "d"} <= locations

    def test_unsupported_version(self):
        result = ValidationUtils.validate_payload({"__terse__": True, "v": 2, "k": {}, "d": 1})
        assert [error.type for error in result.errors] == [ErrorType.VERSION]

    def test_duplicate_originals(self):
        result = ValidationUtils.validate_payload(
            {"__terse__": True, "v": 1, "k": {"a": "name", "b": "name"}, "d": {}}
        )
        assert any("more than one alias" in error.message for error in result.errors)

    def test_unused_aliases_warn(self):
        result = ValidationUtils.validate_payload(
            {"__terse__": True, "v": 1, "k": {"a": "name", "b": "other"}, "d": [{"a": 1}]}
        )
        assert result.is_valid
        assert "1 dictionary entries are never used" in result.warnings[0]

    def test_not_an_object(self):
        result = ValidationUtils.validate_payload([1, 2])
        assert not result.is_valid
        assert result.errors[0].location == "root"

    def test_assert_terse_payload(self):
        ValidationUtils.assert_terse_payload({"__terse__": True, "v": 1, "k": {}, "d": None})
        with pytest.raises(FormatError, match="Invalid terse payload"):
            ValidationUtils.assert_terse_payload({"__terse__": True})


class TestVerifyRoundTrip:
    """Tests for integrity checks."""

    def test_matching(self, sample_mixed_json):
        codec = TerseCodec()
        decoded = codec.expand(codec.compress(sample_mixed_json))
        assert ValidationUtils.verify_round_trip(sample_mixed_json, decoded).is_valid

    def test_matching_view(self, users_json):
        codec = TerseCodec()
        view = codec.wrap(codec.compress(users_json).to_dict())
        assert ValidationUtils.verify_round_trip(users_json, view).is_valid

    def test_element_count_mismatch(self, users_json):
        result = ValidationUtils.verify_round_trip(users_json, users_json[:1])
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.INTEGRITY
        assert "expected 2, got 1" in result.errors[0].message

    def test_value_mismatch(self):
        result = ValidationUtils.verify_round_trip({"flag": True}, {"flag": 1})
        assert not result.is_valid
        assert result.errors[0].message == "Decoded value differs from the original"
