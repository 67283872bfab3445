"""Compression metrics emission.

The codec computes per-payload numbers and hands them to a sink; storage and
aggregation belong to whoever consumes the events.
"""

import logging
import re
from typing import Any, Callable, Optional
from .models import CompressionEvent, KeyDictionary
from .tree import get_structure_statistics
from .utils.size_calculator import SizeCalculator


EventSink = Callable[[CompressionEvent], None]

_NUMERIC_SEGMENT = re.compile(r"/\d+(?=/|$)")
_UUID_SEGMENT = re.compile(
    r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}(?=/|$)", re.IGNORECASE
)


def normalize_endpoint(endpoint: str) -> str:
    """
    Reduce a request path to its route shape.

    Numeric segments become ``/:id``, UUID segments ``/:uuid`` and the query
    string is dropped, so ``/users/42?page=2`` reports as ``/users/:id``.
    """
    path = endpoint.split("?", 1)[0]
    path = _UUID_SEGMENT.sub("/:uuid", path)
    return _NUMERIC_SEGMENT.sub("/:id", path)


def count_objects(data: Any) -> int:
    """Number of elements for array payloads, else number of objects in the tree."""
    if isinstance(data, list):
        return len(data)
    return get_structure_statistics(data)["object_count"]


class MetricsEmitter:
    """
    Builds CompressionEvents and delivers them to a sink.

    A failing sink is logged and ignored; metrics never break a response.
    """

    def __init__(self, sink: Optional[EventSink] = None,
                 track_endpoints: bool = True,
                 size_calculator: Optional[SizeCalculator] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the emitter.

        Args:
            sink: Callable receiving each CompressionEvent
            track_endpoints: Include the normalized endpoint in events
            size_calculator: Optional SizeCalculator instance
            logger: Optional logger instance
        """
        self.sink = sink
        self.track_endpoints = track_endpoints
        self.size_calculator = size_calculator or SizeCalculator()
        self.logger = logger or logging.getLogger(__name__)

    def build_event(self, original: Any, envelope: Any, dictionary: KeyDictionary,
                    endpoint: Optional[str] = None,
                    original_size: Optional[int] = None) -> CompressionEvent:
        """
        Compute the metrics of one encoded payload.

        Args:
            original: Plain value that was encoded
            envelope: Wire-form envelope that will be serialized
            dictionary: Dictionary used for the encoding
            endpoint: Request path, if known
            original_size: Precomputed size of ``original`` in bytes

        Returns:
            CompressionEvent
        """
        if original_size is None:
            original_size = self.size_calculator.calculate_json_size(original)
        compressed_size = self.size_calculator.calculate_json_size(envelope)

        if endpoint is not None and self.track_endpoints:
            endpoint = normalize_endpoint(endpoint)
        else:
            endpoint = None

        return CompressionEvent(
            endpoint=endpoint,
            original_size=original_size,
            compressed_size=compressed_size,
            object_count=count_objects(original),
            keys_compressed=len(dictionary),
            key_pattern=dictionary.key_pattern,
        )

    def emit(self, event: CompressionEvent) -> None:
        """Deliver an event to the sink."""
        self.logger.debug(
            f"Compressed {event.original_size} -> {event.compressed_size} bytes "
            f"({event.savings_percent:.1f}% savings)"
        )
        if self.sink is None:
            return
        try:
            self.sink(event)
        except Exception as e:
            self.logger.warning(f"Metrics sink failed: {e}")
