"""Envelope model for terse payloads."""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict
from types import MappingProxyType
from ..types import (
    MARKER_FIELD,
    VERSION_FIELD,
    DICTIONARY_FIELD,
    DATA_FIELD,
    FormatVersion,
    FormatError,
    UnsupportedVersionError,
)


@dataclass(frozen=True)
class TersePayload:
    """
    Self-describing envelope carrying a key dictionary and the aliased data.

    The wire form produced by ``to_dict`` is::

        {"__terse__": true, "v": 1, "k": {"<alias>": "<original>"}, "d": <data>}
    """

    version: int
    dictionary: Mapping[str, str]
    data: Any

    def __post_init__(self):
        """Validate envelope after initialization."""
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise FormatError("version must be an integer", context={"version": self.version})
        if not isinstance(self.dictionary, Mapping):
            raise FormatError("dictionary must be a mapping")
        for alias, original in self.dictionary.items():
            if not isinstance(alias, str) or not isinstance(original, str):
                raise FormatError("dictionary entries must map strings to strings",
                                  context={"alias": alias, "original": original})
        object.__setattr__(self, "dictionary", MappingProxyType(dict(self.dictionary)))

    @property
    def is_supported(self) -> bool:
        return FormatVersion.is_supported(self.version)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the envelope to its JSON wire form."""
        return {
            MARKER_FIELD: True,
            VERSION_FIELD: int(self.version),
            DICTIONARY_FIELD: dict(self.dictionary),
            DATA_FIELD: self.data,
        }

    def to_json(self, **kwargs) -> str:
        kwargs.setdefault("ensure_ascii", False)
        kwargs.setdefault("separators", (",", ":"))
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, value: Any, require_supported: bool = True) -> "TersePayload":
        """
        Strictly parse a wire-form envelope.

        Args:
            value: Candidate wire value
            require_supported: Raise UnsupportedVersionError for unknown versions

        Returns:
            TersePayload instance

        Raises:
            FormatError: If any envelope field is missing or mistyped
            UnsupportedVersionError: If the version is unknown and
                ``require_supported`` is set
        """
        if isinstance(value, cls):
            payload = value
        else:
            if not isinstance(value, Mapping):
                raise FormatError(f"terse payload must be an object, got {type(value).__name__}")
            if value.get(MARKER_FIELD) is not True:
                raise FormatError(f"'{MARKER_FIELD}' field must be true")
            for name in (VERSION_FIELD, DICTIONARY_FIELD, DATA_FIELD):
                if name not in value:
                    raise FormatError(f"'{name}' field is missing")
            payload = cls(
                version=value[VERSION_FIELD],
                dictionary=value[DICTIONARY_FIELD],
                data=value[DATA_FIELD],
            )

        if require_supported and not payload.is_supported:
            raise UnsupportedVersionError(payload.version, payload.data)
        return payload

    @classmethod
    def from_json(cls, text: str) -> "TersePayload":
        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"Invalid JSON syntax: {e.msg} at line {e.lineno}, column {e.colno}")
        return cls.from_dict(value)

    def get_summary(self) -> str:
        """Get a summary description of the envelope."""
        if isinstance(self.data, list):
            shape = f"list with {len(self.data)} items"
        elif isinstance(self.data, Mapping):
            shape = f"object with {len(self.data)} keys"
        else:
            shape = type(self.data).__name__
        return f"terse payload v{self.version}: {len(self.dictionary)} aliases, {shape}"
