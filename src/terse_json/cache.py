"""In-memory cache that stores values as terse payloads."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional
from .types import CompressOptions
from .codec import TerseCodec
from .proxy import wrap_with_proxy


@dataclass
class _CacheEntry:
    envelope: Dict[str, Any]
    expires_at: Optional[float]


class TerseCache:
    """
    LRU cache holding compressed copies of JSON values.

    ``get`` returns a lazy view keyed by original names, ``get_raw`` the
    stored wire-form envelope. Entries expire after their TTL (seconds) and
    the least recently used entry is evicted once ``max_size`` is reached.

    Instances are not thread-safe; guard shared caches with a lock.
    """

    def __init__(self, options: Optional[CompressOptions] = None,
                 max_size: Optional[int] = None,
                 default_ttl: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the cache.

        Args:
            options: Options used to compress stored values
            max_size: Maximum number of entries (unbounded if None)
            default_ttl: Default time-to-live in seconds (no expiry if None)
            clock: Monotonic time source
            logger: Optional logger instance
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be at least 1")
        if default_ttl is not None and default_ttl <= 0:
            raise ValueError("default_ttl must be positive")

        self.logger = logger or logging.getLogger(__name__)
        self.codec = TerseCodec(options, self.logger)
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: "OrderedDict[Hashable, _CacheEntry]" = OrderedDict()

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """
        Compress and store a value.

        Args:
            key: Cache key
            value: JSON tree to store
            ttl: Time-to-live override in seconds
        """
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl is not None else None
        envelope = self.codec.compress(value).to_dict()

        if key in self._entries:
            del self._entries[key]
        self._entries[key] = _CacheEntry(envelope, expires_at)

        if self.max_size is not None:
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self.logger.debug(f"Evicted cache entry {evicted!r}")

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return a lazy view of the stored value, or ``default``."""
        entry = self._lookup(key)
        if entry is None:
            return default
        return wrap_with_proxy(entry.envelope)

    def get_raw(self, key: Hashable, default: Any = None) -> Any:
        """Return the stored envelope, or ``default``."""
        entry = self._lookup(key)
        if entry is None:
            return default
        return entry.envelope

    def has(self, key: Hashable) -> bool:
        return self._lookup(key, touch=False) is not None

    def delete(self, key: Hashable) -> bool:
        """Remove an entry. Returns whether a live entry existed."""
        live = self._lookup(key, touch=False) is not None
        self._entries.pop(key, None)
        return live

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def _lookup(self, key: Hashable, touch: bool = True) -> Optional[_CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[key]
            self.logger.debug(f"Cache entry {key!r} expired")
            return None
        if touch:
            self._entries.move_to_end(key)
        return entry

    def _is_expired(self, entry: _CacheEntry) -> bool:
        return entry.expires_at is not None and self._clock() >= entry.expires_at

    def _purge_expired(self) -> None:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]
