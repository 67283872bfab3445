"""Decoder: eager reconstruction of the original tree."""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple
from ..types import (
    VERSION_FIELD,
    DICTIONARY_FIELD,
    DATA_FIELD,
    DecoderInterface,
    FormatVersion,
    UnsupportedVersionError,
)
from ..models import TersePayload
from .encoder import rename_keys
from .shape_detector import is_terse_payload


def open_envelope(candidate: Any) -> Tuple[Mapping, Any]:
    """
    Unpack a detected envelope into its dictionary and data.

    Args:
        candidate: Value already accepted by ``is_terse_payload``

    Returns:
        Tuple of (alias -> original mapping, aliased data)

    Raises:
        UnsupportedVersionError: If the envelope version is not supported
    """
    if isinstance(candidate, TersePayload):
        version, dictionary, data = candidate.version, candidate.dictionary, candidate.data
    else:
        version = candidate[VERSION_FIELD]
        dictionary = candidate[DICTIONARY_FIELD]
        data = candidate[DATA_FIELD]

    if not FormatVersion.is_supported(version):
        raise UnsupportedVersionError(version, data)
    return dictionary, data


class TreeDecoder(DecoderInterface):
    """
    Reconstructs original trees from terse payloads.

    Anything that is not a terse payload is returned unchanged, so the decoder
    can be applied to every JSON body a client receives.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def expand(self, candidate: Any) -> Any:
        """
        Expand a terse payload back to its original form.

        Args:
            candidate: Any value

        Returns:
            The reconstructed tree, or ``candidate`` itself if it is not a
            terse payload

        Raises:
            UnsupportedVersionError: If the envelope declares an unknown version
        """
        if not is_terse_payload(candidate):
            return candidate

        dictionary, data = open_envelope(candidate)
        self.logger.debug(f"Expanding terse payload with {len(dictionary)} aliases")
        # Keys missing from the dictionary (retained keys) pass through unchanged.
        return rename_keys(data, dictionary)
