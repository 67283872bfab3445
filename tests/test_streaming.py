"""Tests for batch compression of record streams."""

import pytest
from terse_json.codec import expand
from terse_json.models import TersePayload
from terse_json.streaming import compress_batches, compress_stream
from terse_json.types import CompressOptions


async def agen(items):
    for item in items:
        yield item


class TestCompressStream:
    """Tests for the async stream API."""

    @pytest.mark.asyncio
    async def test_batches(self, large_users_json):
        payloads = [payload async for payload in compress_stream(agen(large_users_json))]

        assert [len(payload.data) for payload in payloads] == [100, 100, 50]
        assert all(isinstance(payload, TersePayload) for payload in payloads)

        restored = []
        for payload in payloads:
            restored.extend(expand(payload))
        assert restored == large_users_json

    @pytest.mark.asyncio
    async def test_custom_batch_size_and_options(self, users_json):
        options = CompressOptions(key_pattern="numeric")
        payloads = [p async for p in compress_stream(agen(users_json * 3), batch_size=4, options=options)]

        assert [len(p.data) for p in payloads] == [4, 2]
        assert dict(payloads[0].dictionary) == {"0": "firstName", "1": "lastName"}

    @pytest.mark.asyncio
    async def test_each_batch_has_its_own_dictionary(self):
        records = [{"alpha": 1}, {"beta": 2}]
        payloads = [p async for p in compress_stream(agen(records), batch_size=1)]

        assert dict(payloads[0].dictionary) == {"a": "alpha"}
        assert dict(payloads[1].dictionary) == {"a": "beta"}

    @pytest.mark.asyncio
    async def test_empty_stream(self):
        payloads = [p async for p in compress_stream(agen([]))]
        assert payloads == []

    @pytest.mark.asyncio
    async def test_invalid_batch_size(self):
        with pytest.raises(ValueError, match="batch_size"):
            async for _ in compress_stream(agen([1]), batch_size=0):
                pass


class TestCompressBatches:
    """Tests for the sync counterpart."""

    def test_batches(self, sample_list_json):
        payloads = list(compress_batches(iter(sample_list_json), batch_size=2))

        assert [len(p.data) for p in payloads] == [2, 1]
        assert expand(payloads[0]) + expand(payloads[1]) == sample_list_json

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            list(compress_batches([], batch_size=True))
