"""Key dictionary builder: decides which keys to alias and assigns aliases."""

import logging
from typing import Any, Dict, Optional, Set
from ..types import CompressOptions, KeyDictionaryBuilderInterface, NestedHandling
from ..models import KeyDictionary
from ..key_patterns import KeyGenerator, create_key_generator
from ..tree import iter_key_context


class KeyDictionaryBuilder(KeyDictionaryBuilderInterface):
    """
    Builds the per-payload key dictionary.

    Keys are discovered depth first in first-encounter order. Keys that are
    too short, excluded, or only present outside the region selected by
    ``nested_handling`` are retained as they are; every other key receives the
    next free candidate from the key pattern.
    """

    def __init__(self, options: Optional[CompressOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the dictionary builder.

        Args:
            options: Compression options (defaults to CompressOptions())
            logger: Optional logger instance
        """
        self.options = options or CompressOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.key_generator: KeyGenerator = create_key_generator(self.options.key_pattern)

    def build(self, tree: Any) -> KeyDictionary:
        """
        Build a key dictionary for a tree.

        Args:
            tree: JSON tree to scan

        Returns:
            KeyDictionary with aliases for every eligible key

        Raises:
            ValueError: If the key pattern cannot produce enough distinct aliases
        """
        discovered, eligible = self._discover_keys(tree)
        retained: Set[str] = {key for key in discovered if key not in eligible}

        aliases: Dict[str, str] = {}
        assigned: Set[str] = set()
        index = 0

        for key in discovered:
            if key not in eligible:
                continue

            index, candidate = self._next_candidate(index, retained, assigned)

            if self.options.require_shorter and len(candidate) >= len(key) and key not in assigned:
                # Not worth aliasing; the candidate stays free for the next key.
                retained.add(key)
                continue

            aliases[candidate] = key
            assigned.add(candidate)
            index += 1

        self.logger.debug(
            f"Built key dictionary: {len(aliases)} aliases, {len(retained)} retained keys, "
            f"pattern={self.key_generator.name}"
        )

        return KeyDictionary(
            aliases=aliases,
            retained=frozenset(retained),
            key_pattern=self.key_generator.name,
        )

    def _discover_keys(self, tree: Any):
        """
        Collect distinct keys in first-encounter order and the eligible subset.

        Returns:
            Tuple of (ordered list of keys, set of keys eligible for aliasing)
        """
        discovered: Dict[str, None] = {}
        eligible: Set[str] = set()

        for key, depth, via_arrays in iter_key_context(tree):
            discovered.setdefault(key, None)
            if key in eligible:
                continue
            if self._is_key_eligible(key) and self._is_region_eligible(depth, via_arrays):
                eligible.add(key)

        return list(discovered), eligible

    def _is_key_eligible(self, key: str) -> bool:
        """Check the per-key filters."""
        if len(key) <= 1:
            return False
        if key in self.options.exclude_keys:
            return False
        if key in self.options.include_keys:
            return True
        return len(key) >= self.options.min_key_length

    def _is_region_eligible(self, depth: int, via_arrays: bool) -> bool:
        """Check whether an object at this position contributes keys."""
        handling = self.options.nested_handling
        if handling == NestedHandling.DEEP:
            return True
        if handling == NestedHandling.SHALLOW:
            return depth == 0
        if handling == NestedHandling.ARRAYS:
            return via_arrays
        return depth < handling

    def _next_candidate(self, index: int, retained: Set[str], assigned: Set[str]):
        """
        Find the next candidate alias that is not taken.

        Returns:
            Tuple of (index of the candidate, candidate alias)
        """
        skipped = 0
        limit = len(retained) + len(assigned)
        while True:
            candidate = self.key_generator(index)
            if not isinstance(candidate, str) or not candidate:
                raise ValueError(
                    f"Key pattern '{self.key_generator.name}' produced an invalid alias {candidate!r}"
                )
            if candidate not in retained and candidate not in assigned:
                return index, candidate
            skipped += 1
            if skipped > limit:
                # An injective generator can only hit each taken name once.
                raise ValueError(
                    f"Key pattern '{self.key_generator.name}' does not produce enough distinct aliases"
                )
            index += 1

    def get_statistics(self, dictionary: KeyDictionary) -> Dict[str, Any]:
        """Summarize a built dictionary."""
        original_chars = sum(len(original) for original in dictionary.aliases.values())
        alias_chars = sum(len(alias) for alias in dictionary.aliases)
        return {
            "aliases": len(dictionary),
            "retained": len(dictionary.retained),
            "key_pattern": dictionary.key_pattern,
            "chars_saved_per_occurrence": original_chars - alias_chars,
        }

