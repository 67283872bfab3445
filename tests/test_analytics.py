"""Tests for compression metrics."""

import logging
import pytest
from terse_json.analytics import MetricsEmitter, count_objects, normalize_endpoint
from terse_json.codec import TerseCodec
from terse_json.utils.size_calculator import SizeCalculator


class TestNormalizeEndpoint:
    """Tests for endpoint normalization."""

    @pytest.mark.parametrize("endpoint,expected", [
        ("/users", "/users"),
        ("/users/42", "/users/:id"),
        ("/users/42/posts/7", "/users/:id/posts/:id"),
        ("/users/42?page=2", "/users/:id"),
        ("/orders/550e8400-e29b-41d4-a716-446655440000/items", "/orders/:uuid/items"),
        ("/orders/550E8400-E29B-41D4-A716-446655440000", "/orders/:uuid"),
        ("/v2/items", "/v2/items"),
        ("/files/42abc", "/files/42abc"),
    ])
    def test_normalize(self, endpoint, expected):
        assert normalize_endpoint(endpoint) == expected


class TestCountObjects:
    """Tests for object counting."""

    def test_array_counts_elements(self, users_json):
        assert count_objects(users_json) == 2

    def test_object_counts_every_object(self, sample_mixed_json):
        # root, metadata, two data items, config, settings
        assert count_objects(sample_mixed_json) == 6


class TestMetricsEmitter:
    """Tests for MetricsEmitter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.events = []
        self.emitter = MetricsEmitter(sink=self.events.append)
        self.codec = TerseCodec()

    def test_build_event(self, users_json):
        dictionary = self.codec.build_dictionary(users_json)
        envelope = self.codec.compress(users_json).to_dict()

        event = self.emitter.build_event(users_json, envelope, dictionary, endpoint="/users/1")

        assert event.endpoint == "/users/:id"
        assert event.original_size == SizeCalculator().calculate_json_size(users_json)
        assert event.compressed_size == SizeCalculator().calculate_json_size(envelope)
        assert event.keys_compressed == 2
        assert event.object_count == 2

    def test_build_event_records_savings(self, large_users_json):
        dictionary = self.codec.build_dictionary(large_users_json)
        envelope = self.codec.compress(large_users_json).to_dict()

        event = self.emitter.build_event(large_users_json, envelope, dictionary)

        assert event.original_size > event.compressed_size
        assert event.savings_percent > 0
        assert event.object_count == 250

    def test_build_event_without_endpoint_tracking(self, users_json):
        emitter = MetricsEmitter(track_endpoints=False)
        dictionary = self.codec.build_dictionary(users_json)
        envelope = self.codec.compress(users_json).to_dict()

        assert emitter.build_event(users_json, envelope, dictionary, endpoint="/users").endpoint is None

    def test_emit(self, users_json):
        dictionary = self.codec.build_dictionary(users_json)
        event = self.emitter.build_event(users_json, self.codec.compress(users_json).to_dict(), dictionary)

        self.emitter.emit(event)
        assert self.events == [event]

    def test_emit_without_sink(self, users_json):
        emitter = MetricsEmitter()
        dictionary = self.codec.build_dictionary(users_json)
        emitter.emit(emitter.build_event(users_json, self.codec.compress(users_json).to_dict(), dictionary))

    def test_sink_failure_is_logged(self, users_json, caplog):
        def sink(event):
            raise ValueError("boom")

        emitter = MetricsEmitter(sink=sink)
        dictionary = self.codec.build_dictionary(users_json)
        event = emitter.build_event(users_json, self.codec.compress(users_json).to_dict(), dictionary)

        with caplog.at_level(logging.WARNING):
            emitter.emit(event)
        assert "Metrics sink failed: boom" in caplog.text
