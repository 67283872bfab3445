"""Consumer-side helpers for responses that may carry terse payloads."""

import logging
from collections.abc import Mapping
from typing import Any, Optional
from .types import TERSE_RESPONSE_HEADER, UnsupportedVersionError
from .engines import TreeDecoder, is_terse_payload
from .proxy import wrap_with_proxy

RAISE = "raise"
PASSTHROUGH = "passthrough"


def is_terse_response(headers: Optional[Mapping], header_name: str = TERSE_RESPONSE_HEADER) -> bool:
    """Whether response headers mark the body as a terse payload."""
    if not headers:
        return False
    for name, value in headers.items():
        if name.lower() == header_name.lower() and str(value).strip().lower() == "true":
            return True
    return False


def process(data: Any, use_proxy: bool = True, on_unsupported_version: str = RAISE,
            logger: Optional[logging.Logger] = None) -> Any:
    """
    Turn a parsed response body into a value keyed by original names.

    Args:
        data: Parsed JSON body
        use_proxy: Return a lazy view instead of an eagerly decoded tree
        on_unsupported_version: ``"raise"`` to propagate
            UnsupportedVersionError, ``"passthrough"`` to log a warning and
            return ``data`` untouched
        logger: Optional logger instance

    Returns:
        Lazy view, decoded tree, or ``data`` itself when it is not a payload

    Raises:
        UnsupportedVersionError: If the payload version is unknown and
            ``on_unsupported_version`` is ``"raise"``
        ValueError: If ``on_unsupported_version`` is not a known policy
    """
    if on_unsupported_version not in (RAISE, PASSTHROUGH):
        raise ValueError(f"Unknown unsupported-version policy: {on_unsupported_version!r}")
    logger = logger or logging.getLogger(__name__)

    if not is_terse_payload(data):
        return data

    try:
        if use_proxy:
            return wrap_with_proxy(data)
        return TreeDecoder(logger).expand(data)
    except UnsupportedVersionError as e:
        if on_unsupported_version == RAISE:
            raise
        logger.warning(f"{e}; returning raw payload")
        return data
