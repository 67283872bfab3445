"""Compression event model emitted for every encoded payload."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CompressionEvent:
    """
    Per-payload numbers handed to an external metrics aggregator.

    Sizes are compact UTF-8 JSON byte counts of the plain value and of the
    serialized envelope.
    """

    endpoint: Optional[str]
    original_size: int
    compressed_size: int
    object_count: int
    keys_compressed: int
    key_pattern: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate event after initialization."""
        if self.original_size < 0:
            raise ValueError("original_size must be non-negative")
        if self.compressed_size < 0:
            raise ValueError("compressed_size must be non-negative")
        if self.object_count < 0:
            raise ValueError("object_count must be non-negative")

    @property
    def bytes_saved(self) -> int:
        return self.original_size - self.compressed_size

    @property
    def compression_ratio(self) -> float:
        """Compressed size as a fraction of the original size."""
        return self.compressed_size / self.original_size if self.original_size > 0 else 1.0

    @property
    def savings_percent(self) -> float:
        return (1 - self.compression_ratio) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for JSON serialization."""
        return {
            "endpoint": self.endpoint,
            "originalSize": self.original_size,
            "compressedSize": self.compressed_size,
            "objectCount": self.object_count,
            "keysCompressed": self.keys_compressed,
            "keyPattern": self.key_pattern,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompressionEvent":
        """Create CompressionEvent from dictionary."""
        return cls(
            endpoint=data.get("endpoint"),
            original_size=data["originalSize"],
            compressed_size=data["compressedSize"],
            object_count=data["objectCount"],
            keys_compressed=data.get("keysCompressed", 0),
            key_pattern=data.get("keyPattern", "alpha"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
