"""Alias generation strategies.

A key pattern is a pure function from an index to a candidate alias. The
dictionary builder asks for candidates in increasing index order and skips the
ones that are already taken, so generators never need to track state.
"""

import string
from dataclasses import dataclass
from typing import Callable, Dict
from .types import PrefixedPattern


LOWERCASE = string.ascii_lowercase
SHORT_ALPHABET = string.ascii_lowercase + string.ascii_uppercase


@dataclass(frozen=True)
class KeyGenerator:
    """A named alias generator."""
    name: str
    generate: Callable[[int], str]

    def __call__(self, index: int) -> str:
        return self.generate(index)


def bijective_base(index: int, alphabet: str) -> str:
    """
    Spell an index in bijective base-N over an alphabet.

    With ``a-z`` this gives a, b, ..., z, aa, ab, ..., zz, aaa, ...

    Args:
        index: Non-negative index
        alphabet: Symbols to use

    Returns:
        Candidate alias
    """
    if index < 0:
        raise ValueError("index must be non-negative")
    base = len(alphabet)
    key = ""
    remaining = index
    while True:
        key = alphabet[remaining % base] + key
        remaining = remaining // base - 1
        if remaining < 0:
            return key


def alpha_key(index: int) -> str:
    return bijective_base(index, LOWERCASE)


def numeric_key(index: int) -> str:
    return str(index)


def alphanumeric_key(index: int) -> str:
    # a0..a9, b0..z9, aa0, ...
    return alpha_key(index // 10) + str(index % 10)


def short_key(index: int) -> str:
    return bijective_base(index, SHORT_ALPHABET)


BUILTIN_PATTERNS: Dict[str, Callable[[int], str]] = {
    "alpha": alpha_key,
    "numeric": numeric_key,
    "alphanumeric": alphanumeric_key,
    "short": short_key,
}


def create_key_generator(pattern=None) -> KeyGenerator:
    """
    Resolve a key pattern to a generator.

    Args:
        pattern: A built-in pattern name, a PrefixedPattern, an existing
            KeyGenerator, a callable ``int -> str`` or None for the default

    Returns:
        KeyGenerator with the pattern name recorded for metrics

    Raises:
        ValueError: If the pattern name or prefixed style is unknown
    """
    if pattern is None:
        pattern = "alpha"

    if isinstance(pattern, KeyGenerator):
        return pattern

    if isinstance(pattern, str):
        if pattern.startswith("prefixed:"):
            return create_key_generator(PrefixedPattern(prefix=pattern[len("prefixed:"):]))
        try:
            return KeyGenerator(name=pattern, generate=BUILTIN_PATTERNS[pattern])
        except KeyError:
            raise ValueError(
                f"Unknown key pattern '{pattern}'. "
                f"Expected one of: {', '.join(sorted(BUILTIN_PATTERNS))}, prefixed:<prefix>"
            ) from None

    if isinstance(pattern, PrefixedPattern):
        if pattern.style == "numeric":
            counter = numeric_key
        elif pattern.style == "alpha":
            counter = alpha_key
        else:
            raise ValueError(f"Unknown prefixed pattern style '{pattern.style}'")
        prefix = pattern.prefix

        def prefixed_key(index: int) -> str:
            return prefix + counter(index)

        return KeyGenerator(name=f"prefixed:{prefix}", generate=prefixed_key)

    if callable(pattern):
        return KeyGenerator(name="custom", generate=pattern)

    raise ValueError(f"Unsupported key pattern: {pattern!r}")
