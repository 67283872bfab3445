"""Core type definitions for terse-json."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


# Wire field names. These are part of the compatibility contract.
MARKER_FIELD = "__terse__"
VERSION_FIELD = "v"
DICTIONARY_FIELD = "k"
DATA_FIELD = "d"

TERSE_RESPONSE_HEADER = "x-terse-json"
ACCEPT_TERSE_HEADERS = ("accept-terse", "x-accept-terse")


class FormatVersion(IntEnum):
    """Envelope format versions this build understands."""
    V1 = 1

    @classmethod
    def is_supported(cls, version: Any) -> bool:
        return isinstance(version, int) and not isinstance(version, bool) and \
            version in cls._value2member_map_


CURRENT_VERSION = FormatVersion.V1


class NodeType(Enum):
    """Tags of the JSON tree model."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class NestedHandling(Enum):
    """Which objects of a tree contribute keys to the dictionary."""
    DEEP = "deep"
    SHALLOW = "shallow"
    ARRAYS = "arrays"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    FORMAT = "format"
    VERSION = "version"
    INTEGRITY = "integrity"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of a validation pass."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


@dataclass(frozen=True)
class PrefixedPattern:
    """Aliases made of a fixed prefix and a numeric or alphabetic counter."""
    prefix: str
    style: str = "numeric"


@dataclass(frozen=True)
class CompressOptions:
    """Options controlling dictionary construction."""
    min_key_length: int = 2
    key_pattern: Any = "alpha"
    nested_handling: Union[NestedHandling, str, int] = NestedHandling.DEEP
    exclude_keys: Tuple[str, ...] = ()
    include_keys: Tuple[str, ...] = ()
    require_shorter: bool = True

    def __post_init__(self):
        if self.min_key_length < 2:
            # Single-character keys are never aliased.
            object.__setattr__(self, "min_key_length", 2)
        if isinstance(self.nested_handling, str):
            object.__setattr__(self, "nested_handling", NestedHandling(self.nested_handling))
        elif isinstance(self.nested_handling, bool) or (
                isinstance(self.nested_handling, int) and self.nested_handling < 0):
            raise ValueError(f"Invalid nested_handling: {self.nested_handling!r}")
        object.__setattr__(self, "exclude_keys", tuple(self.exclude_keys))
        object.__setattr__(self, "include_keys", tuple(self.include_keys))


@dataclass(frozen=True)
class TerseConfig:
    """Producer-side configuration for the response transform hook."""
    compress_options: CompressOptions = field(default_factory=CompressOptions)
    min_array_length: int = 2
    min_payload_bytes: int = 0
    homogeneous_only: bool = False
    track_endpoints: bool = True
    should_compress: Optional[Callable[[Any], bool]] = None
    require_savings: bool = True
    header_name: str = TERSE_RESPONSE_HEADER

    @classmethod
    def from_env(cls, prefix: str = "TERSE_JSON_",
                 environ: Optional[Dict[str, str]] = None) -> "TerseConfig":
        """
        Create a configuration with overrides from environment variables.

        Recognized variables (after the prefix): MIN_KEY_LENGTH, KEY_PATTERN,
        NESTED_HANDLING, MIN_ARRAY_LENGTH, MIN_PAYLOAD_BYTES, HOMOGENEOUS_ONLY,
        REQUIRE_SAVINGS.
        """
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(prefix + name)

        options: Dict[str, Any] = {}
        if read("MIN_KEY_LENGTH") is not None:
            options["min_key_length"] = int(read("MIN_KEY_LENGTH"))
        if read("KEY_PATTERN") is not None:
            options["key_pattern"] = read("KEY_PATTERN")
        nested = read("NESTED_HANDLING")
        if nested is not None:
            options["nested_handling"] = int(nested) if nested.isdigit() else nested

        config: Dict[str, Any] = {"compress_options": CompressOptions(**options)}
        if read("MIN_ARRAY_LENGTH") is not None:
            config["min_array_length"] = int(read("MIN_ARRAY_LENGTH"))
        if read("MIN_PAYLOAD_BYTES") is not None:
            config["min_payload_bytes"] = int(read("MIN_PAYLOAD_BYTES"))
        if read("HOMOGENEOUS_ONLY") is not None:
            config["homogeneous_only"] = read("HOMOGENEOUS_ONLY").lower() in ("1", "true", "yes")
        if read("REQUIRE_SAVINGS") is not None:
            config["require_savings"] = read("REQUIRE_SAVINGS").lower() in ("1", "true", "yes")
        return cls(**config)


class TerseError(Exception):
    """Base exception for codec errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class FormatError(TerseError):
    """Raised where strict envelope validation is required."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.FORMAT, context)


class UnsupportedVersionError(TerseError):
    """Raised when a well-formed envelope declares an unknown version."""

    def __init__(self, version: Any, data: Any = None):
        supported = ", ".join(str(v.value) for v in FormatVersion)
        super().__init__(
            f"Unsupported terse payload version {version!r} (supported: {supported})",
            ErrorType.VERSION,
            context={"version": version, "data": data},
        )
        self.version = version
        self.data = data


# Abstract base classes for interfaces

class KeyDictionaryBuilderInterface(ABC):
    """Abstract interface for dictionary construction."""

    @abstractmethod
    def build(self, tree: Any) -> "KeyDictionary":
        """Build a key dictionary for a tree."""
        pass


class EncoderInterface(ABC):
    """Abstract interface for the encoder."""

    @abstractmethod
    def encode(self, tree: Any, dictionary: "KeyDictionary") -> "TersePayload":
        """Rewrite a tree's keys into an envelope."""
        pass


class DecoderInterface(ABC):
    """Abstract interface for the decoder."""

    @abstractmethod
    def expand(self, candidate: Any) -> Any:
        """Reconstruct the original tree from an envelope."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_codec_error(self, error: TerseError) -> ErrorResponse:
        """Handle codec errors."""
        pass

