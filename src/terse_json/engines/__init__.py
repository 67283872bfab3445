"""Core codec engines."""

from .dictionary_builder import KeyDictionaryBuilder
from .encoder import TreeEncoder
from .decoder import TreeDecoder, open_envelope
from .shape_detector import is_terse_payload

__all__ = ["KeyDictionaryBuilder", "TreeEncoder", "TreeDecoder", "open_envelope", "is_terse_payload"]
