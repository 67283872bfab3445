"""Tests for structural payload detection."""

import pytest
from collections import OrderedDict
from terse_json.engines.shape_detector import is_terse_payload
from terse_json.models import TersePayload


VALID = {"__terse__": True, "v": 1, "k": {"a": "name"}, "d": [{"a": 1}]}


class TestIsTersePayload:
    """Tests for is_terse_payload."""

    def test_valid_envelope(self):
        assert is_terse_payload(VALID)

    def test_payload_instance(self):
        assert is_terse_payload(TersePayload(version=1, dictionary={}, data=None))

    def test_null_data_is_present(self):
        assert is_terse_payload({"__terse__": True, "v": 1, "k": {}, "d": None})

    def test_unknown_version_is_still_a_payload(self):
        assert is_terse_payload({**VALID, "v": 99})

    def test_other_mapping_types(self):
        assert is_terse_payload(OrderedDict(VALID))

    def test_data_usage_is_not_checked(self):
        assert is_terse_payload({**VALID, "d": {"unknown": 1}})

    @pytest.mark.parametrize("candidate", [
        None,
        "string",
        42,
        [VALID],
        {},
        {"v": 1, "k": {}, "d": 1},
        {**VALID, "__terse__": 1},
        {**VALID, "__terse__": "true"},
        {**VALID, "__terse__": False},
        {**VALID, "v": "1"},
        {**VALID, "v": 1.0},
        {**VALID, "v": True},
        {**VALID, "k": None},
        {**VALID, "k": [["a", "name"]]},
        {**VALID, "k": {"a": 1}},
        {**VALID, "k": {1: "name"}},
        {"__terse__": True, "v": 1, "k": {}},
    ])
    def test_rejects(self, candidate):
        assert not is_terse_payload(candidate)
