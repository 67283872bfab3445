"""Main codec implementation tying the builder, encoder and decoder together."""

import logging
from typing import Any, Optional
from .types import CompressOptions
from .models import KeyDictionary, TersePayload
from .engines import KeyDictionaryBuilder, TreeEncoder, TreeDecoder, is_terse_payload
from .proxy import wrap_with_proxy


class TerseCodec:
    """
    Producer and consumer entry points of the terse payload protocol.

    A codec is configured once with CompressOptions and holds no per-payload
    state, so one instance can be shared across requests and threads.
    """

    def __init__(self, options: Optional[CompressOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the codec.

        Args:
            options: Dictionary construction options
            logger: Optional logger instance
        """
        self.options = options or CompressOptions()
        self.logger = logger or logging.getLogger(__name__)

        self.builder = KeyDictionaryBuilder(self.options, self.logger)
        self.encoder = TreeEncoder(self.logger)
        self.decoder = TreeDecoder(self.logger)

    def build_dictionary(self, data: Any) -> KeyDictionary:
        return self.builder.build(data)

    def compress(self, data: Any) -> TersePayload:
        """
        Encode a JSON tree into a terse payload.

        Args:
            data: JSON tree

        Returns:
            TersePayload envelope (use ``to_dict()`` for the wire form)
        """
        dictionary = self.builder.build(data)
        return self.encoder.encode(data, dictionary)

    def expand(self, candidate: Any) -> Any:
        """Eagerly decode a terse payload; other values pass through."""
        return self.decoder.expand(candidate)

    def wrap(self, candidate: Any) -> Any:
        """Wrap a terse payload in a lazy view; other values pass through."""
        return wrap_with_proxy(candidate)

    @staticmethod
    def is_terse_payload(value: Any) -> bool:
        return is_terse_payload(value)


def compress(data: Any, options: Optional[CompressOptions] = None) -> TersePayload:
    """Encode a JSON tree into a terse payload with the given options."""
    return TerseCodec(options).compress(data)


def expand(candidate: Any) -> Any:
    """Eagerly decode a terse payload; other values are returned unchanged."""
    return TreeDecoder().expand(candidate)
