"""Tests for the JSON parser."""

import pytest
from terse_json.parser import JSONParser


class TestJSONParser:
    """Tests for JSONParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = JSONParser()

    def test_parse_plain_json(self):
        data, is_terse = self.parser.parse('[{"name": "x"}]')
        assert data == [{"name": "x"}]
        assert not is_terse

    def test_parse_terse_payload(self):
        data, is_terse = self.parser.parse('{"__terse__": true, "v": 1, "k": {"a": "name"}, "d": [{"a": 1}]}')
        assert is_terse
        assert data["k"] == {"a": "name"}

    def test_parse_invalid_json(self):
        with pytest.raises(ValueError, match="Invalid JSON input"):
            self.parser.parse('{"name": ')

    def test_parse_empty(self):
        with pytest.raises(ValueError, match="empty"):
            self.parser.parse("")

    def test_parse_bytes(self):
        data, is_terse = self.parser.parse_bytes('{"名前": 1}'.encode("utf-8"))
        assert data == {"名前": 1}
        assert not is_terse
