"""
terse-json - Transparent key compression for JSON payloads.

Repetitive object keys are replaced by short aliases and shipped with a
dictionary in a self-describing envelope. Consumers either expand the
envelope eagerly or read it through lazy views that expose the original
key names.
"""

__version__ = "1.0.0"

from .types import (
    CompressOptions,
    TerseConfig,
    NestedHandling,
    PrefixedPattern,
    FormatVersion,
    TerseError,
    FormatError,
    UnsupportedVersionError,
    TERSE_RESPONSE_HEADER,
)
from .models import KeyDictionary, TersePayload, CompressionEvent
from .codec import TerseCodec, compress, expand
from .engines import is_terse_payload
from .proxy import wrap_with_proxy, to_python, json_default
from .client import process, is_terse_response
from .negotiation import accepts_terse, TerseResponseTransformer
from .cache import TerseCache
from .streaming import compress_stream, compress_batches

__all__ = [
    "CompressOptions",
    "TerseConfig",
    "NestedHandling",
    "PrefixedPattern",
    "FormatVersion",
    "TerseError",
    "FormatError",
    "UnsupportedVersionError",
    "TERSE_RESPONSE_HEADER",
    "KeyDictionary",
    "TersePayload",
    "CompressionEvent",
    "TerseCodec",
    "compress",
    "expand",
    "is_terse_payload",
    "wrap_with_proxy",
    "to_python",
    "json_default",
    "process",
    "is_terse_response",
    "accepts_terse",
    "TerseResponseTransformer",
    "TerseCache",
    "compress_stream",
    "compress_batches",
]
