"""Data models for terse-json."""

from .key_dictionary import KeyDictionary
from .terse_payload import TersePayload
from .compression_event import CompressionEvent

__all__ = ["KeyDictionary", "TersePayload", "CompressionEvent"]
