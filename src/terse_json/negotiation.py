"""Content negotiation helpers and the producer-side response transform hook."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional
from .types import ACCEPT_TERSE_HEADERS, TerseConfig
from .analytics import EventSink, MetricsEmitter
from .engines import KeyDictionaryBuilder, TreeEncoder, is_terse_payload
from .utils.size_calculator import SizeCalculator


def accepts_terse(headers: Optional[Mapping] = None, query: Optional[Mapping] = None,
                  query_param: str = "terse") -> bool:
    """
    Check whether a request signals support for terse payloads.

    Args:
        headers: Request headers (names are matched case-insensitively)
        query: Parsed query parameters
        query_param: Query parameter that can enable terse responses

    Returns:
        True if ``accept-terse`` / ``x-accept-terse`` is ``"true"`` or the
        query parameter is ``"true"``
    """
    if headers:
        for name, value in headers.items():
            if name.lower() in ACCEPT_TERSE_HEADERS and str(value).strip().lower() == "true":
                return True
    if query:
        value = query.get(query_param)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is not None and str(value).lower() == "true":
            return True
    return False


def is_compressible_array(data: Any) -> bool:
    """A non-empty list whose elements are all objects."""
    return isinstance(data, list) and len(data) > 0 and all(isinstance(item, Mapping) for item in data)


def is_homogeneous(data: Any) -> bool:
    """Whether every object of an array has the same key set."""
    if not isinstance(data, list) or not data:
        return True
    first = set(data[0].keys())
    return all(set(item.keys()) == first for item in data[1:])


class TerseResponseTransformer:
    """
    Decides what a handler's return value is serialized as.

    ``transform(value, negotiated)`` is the hook a transport layer calls with
    the pre-serialization value. Without negotiation it returns ``value``
    itself, so old clients see exactly the body they would get without the
    codec. With negotiation and an eligible value it returns the wire-form
    envelope and emits a CompressionEvent. An envelope that is not smaller
    than the plain body is dropped unless ``require_savings`` is off.
    """

    def __init__(self, config: Optional[TerseConfig] = None,
                 on_event: Optional[EventSink] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transformer.

        Args:
            config: Producer configuration
            on_event: Metrics sink receiving a CompressionEvent per envelope
            logger: Optional logger instance
        """
        self.config = config or TerseConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.size_calculator = SizeCalculator(self.logger)
        self.builder = KeyDictionaryBuilder(self.config.compress_options, self.logger)
        self.encoder = TreeEncoder(self.logger)
        self.metrics = MetricsEmitter(
            sink=on_event,
            track_endpoints=self.config.track_endpoints,
            size_calculator=self.size_calculator,
            logger=self.logger,
        )

    def transform(self, value: Any, negotiated: bool, endpoint: Optional[str] = None) -> Any:
        """
        Return the value to serialize for a response.

        Args:
            value: Handler return value (plain JSON tree)
            negotiated: Whether the client signalled terse support
            endpoint: Request path for metrics

        Returns:
            Wire-form envelope dict, or ``value`` unchanged
        """
        if not negotiated:
            return value

        if not self._is_eligible(value):
            return value

        try:
            original_size = self.size_calculator.calculate_json_size(value)
            if original_size < self.config.min_payload_bytes:
                self.logger.debug(
                    f"Payload below min_payload_bytes ({original_size} < {self.config.min_payload_bytes}), sending plain"
                )
                return value

            dictionary = self.builder.build(value)
            if not dictionary:
                self.logger.debug("No keys to alias, sending plain")
                return value

            envelope = self.encoder.encode(value, dictionary).to_dict()
            compressed_size = self.size_calculator.calculate_json_size(envelope)
        except (ValueError, TypeError, RecursionError) as e:
            self.logger.warning(f"Terse encoding failed, sending plain response: {e}")
            return value

        if self.config.require_savings and compressed_size >= original_size:
            self.logger.debug(
                f"Envelope not smaller than plain body ({compressed_size} >= {original_size}), sending plain"
            )
            return value

        try:
            event = self.metrics.build_event(value, envelope, dictionary, endpoint, original_size)
        except ValueError as e:
            self.logger.warning(f"Could not compute compression metrics: {e}")
        else:
            self.logger.info(
                f"Terse response{' for ' + event.endpoint if event.endpoint else ''}: "
                f"{event.original_size} -> {event.compressed_size} bytes "
                f"({event.savings_percent:.1f}% savings)"
            )
            self.metrics.emit(event)

        return envelope

    def response_headers(self, body: Any) -> Dict[str, str]:
        """Headers to add to a response whose body is ``body``."""
        if is_terse_payload(body):
            return {self.config.header_name: "true"}
        return {}

    def _is_eligible(self, value: Any) -> bool:
        """Check the configured eligibility rules."""
        should_compress = self.config.should_compress
        if should_compress is not None and not should_compress(value):
            return False

        if isinstance(value, list):
            if len(value) < self.config.min_array_length or not is_compressible_array(value):
                return False
            if self.config.homogeneous_only and not is_homogeneous(value):
                return False
            return True

        return isinstance(value, Mapping)
