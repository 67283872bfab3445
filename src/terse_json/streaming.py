"""Batch compression for streams of records."""

import asyncio
import logging
from typing import Any, AsyncIterable, AsyncIterator, Iterable, Iterator, List, Optional
from .types import CompressOptions
from .codec import TerseCodec
from .models import TersePayload


def _check_batch_size(batch_size: int) -> None:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")


async def compress_stream(source: AsyncIterable[Any], batch_size: int = 100,
                          options: Optional[CompressOptions] = None,
                          logger: Optional[logging.Logger] = None) -> AsyncIterator[TersePayload]:
    """
    Compress an async stream of records in batches.

    Each batch of up to ``batch_size`` records is encoded as one array
    envelope with its own dictionary. Control is yielded to the event loop
    between batches.

    Args:
        source: Async iterable of JSON values
        batch_size: Records per envelope
        options: Dictionary construction options
        logger: Optional logger instance

    Yields:
        One TersePayload per batch
    """
    _check_batch_size(batch_size)
    logger = logger or logging.getLogger(__name__)
    codec = TerseCodec(options, logger)

    batch: List[Any] = []
    batch_count = 0
    async for record in source:
        batch.append(record)
        if len(batch) >= batch_size:
            batch_count += 1
            yield codec.compress(batch)
            batch = []
            await asyncio.sleep(0)

    if batch:
        batch_count += 1
        yield codec.compress(batch)

    logger.debug(f"Compressed stream into {batch_count} batches")


def compress_batches(source: Iterable[Any], batch_size: int = 100,
                     options: Optional[CompressOptions] = None,
                     logger: Optional[logging.Logger] = None) -> Iterator[TersePayload]:
    """Synchronous counterpart of ``compress_stream``."""
    _check_batch_size(batch_size)
    codec = TerseCodec(options, logger)

    batch: List[Any] = []
    for record in source:
        batch.append(record)
        if len(batch) >= batch_size:
            yield codec.compress(batch)
            batch = []
    if batch:
        yield codec.compress(batch)
