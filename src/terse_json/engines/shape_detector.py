"""Structural detection of terse payloads."""

from collections.abc import Mapping
from typing import Any
from ..types import MARKER_FIELD, VERSION_FIELD, DICTIONARY_FIELD, DATA_FIELD
from ..models import TersePayload


def is_terse_payload(value: Any) -> bool:
    """
    Check whether a value is structurally a terse payload envelope.

    A value qualifies when it is a TersePayload, or a mapping with
    ``__terse__`` set to ``True``, an integer ``v``, a ``k`` mapping of
    strings to strings and a ``d`` field (which may hold ``None``). The
    check does not look at how ``d`` uses the dictionary.

    Args:
        value: Any value, typically a parsed HTTP JSON body

    Returns:
        True if the value is a terse payload
    """
    if isinstance(value, TersePayload):
        return True
    if not isinstance(value, Mapping):
        return False

    if value.get(MARKER_FIELD) is not True:
        return False

    version = value.get(VERSION_FIELD)
    if isinstance(version, bool) or not isinstance(version, int):
        return False

    dictionary = value.get(DICTIONARY_FIELD)
    if not isinstance(dictionary, Mapping):
        return False
    for alias, original in dictionary.items():
        if not isinstance(alias, str) or not isinstance(original, str):
            return False

    return DATA_FIELD in value
