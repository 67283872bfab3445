"""Key dictionary model."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional
from ..types import FormatError


@dataclass(frozen=True)
class KeyDictionary:
    """
    Bijective alias <-> original key mapping scoped to a single payload.

    ``aliases`` maps alias -> original (the wire form), ``inverse`` maps
    original -> alias (used by the encoder and the proxy). ``retained`` holds
    the keys the builder left untouched.
    """

    aliases: Mapping[str, str]
    retained: FrozenSet[str] = frozenset()
    key_pattern: str = "alpha"
    inverse: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        aliases = dict(self.aliases)
        self._validate(aliases)
        object.__setattr__(self, "aliases", MappingProxyType(aliases))
        object.__setattr__(self, "retained", frozenset(self.retained))
        object.__setattr__(
            self, "inverse",
            MappingProxyType({original: alias for alias, original in aliases.items()})
        )

    def _validate(self, aliases: Dict[str, str]) -> None:
        """Validate dictionary integrity."""
        seen_originals = set()
        for alias, original in aliases.items():
            if not isinstance(alias, str) or not isinstance(original, str):
                raise FormatError("dictionary entries must map strings to strings",
                                  context={"alias": alias, "original": original})
            if not alias:
                raise FormatError("alias cannot be empty", context={"original": original})
            if len(original) <= 1:
                raise FormatError(f"key '{original}' is too short to be aliased",
                                  context={"alias": alias})
            if original in seen_originals:
                raise FormatError(f"key '{original}' is mapped by more than one alias",
                                  context={"alias": alias})
            seen_originals.add(original)

        clashes = self.retained.intersection(aliases)
        if clashes:
            raise FormatError(
                f"aliases collide with retained keys: {', '.join(sorted(clashes))}",
                context={"clashes": sorted(clashes)}
            )

    @classmethod
    def empty(cls, key_pattern: str = "alpha") -> "KeyDictionary":
        return cls(aliases={}, key_pattern=key_pattern)

    @classmethod
    def from_mapping(cls, aliases: Mapping[str, str], key_pattern: str = "unknown") -> "KeyDictionary":
        """Create a KeyDictionary from a wire-format alias -> original mapping."""
        return cls(aliases=aliases, key_pattern=key_pattern)

    def alias_for(self, original: str) -> Optional[str]:
        return self.inverse.get(original)

    def original_for(self, alias: str) -> Optional[str]:
        return self.aliases.get(alias)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.aliases)

    def __len__(self) -> int:
        return len(self.aliases)

    def __bool__(self) -> bool:
        return bool(self.aliases)

    def __contains__(self, alias: Any) -> bool:
        return alias in self.aliases
