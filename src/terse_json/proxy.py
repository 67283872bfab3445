"""
Lazy read-through views over terse payloads.

``wrap_with_proxy`` returns views that expose the original key names while
reading straight from the aliased data. Nothing is expanded up front: an
element or field view is only created when that index or field is read, and
nested structures are wrapped on access in the same way.

The views implement the ``collections.abc.Mapping`` and ``Sequence``
protocols, so ``view["firstName"]``, ``"firstName" in view``,
``list(view.keys())``, iteration and ``==`` against plain values all behave
as they would on the decoded tree. Views are read-only.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Mapping as MappingType, Optional
from .engines.decoder import open_envelope
from .engines.encoder import rename_keys
from .engines.shape_detector import is_terse_payload


class _ViewContext:
    """Dictionary lookups shared by every view of one payload."""

    __slots__ = ("aliases", "inverse")

    def __init__(self, aliases: MappingType[str, str]):
        self.aliases = aliases
        self.inverse = {original: alias for alias, original in aliases.items()}

    def resolve(self, key: Any) -> Optional[str]:
        """
        Map an original key name to the key stored in the aliased data.

        Returns None when the name cannot exist in the decoded tree, which is
        the case for an alias name that is not itself an original key.
        """
        alias = self.inverse.get(key)
        if alias is not None:
            return alias
        if key in self.aliases:
            return None
        return key


def _wrap(node: Any, context: _ViewContext) -> Any:
    if isinstance(node, Mapping):
        return TerseObjectView(node, context)
    if isinstance(node, (list, tuple)):
        return TerseArrayView(node, context)
    return node


class TerseObjectView(Mapping):
    """Read-only view of an aliased object, keyed by original names."""

    __slots__ = ("_store", "_context")

    def __init__(self, store: MappingType[str, Any], context: _ViewContext):
        self._store = store
        self._context = context

    def __getitem__(self, key: str) -> Any:
        actual = self._context.resolve(key)
        if actual is None or actual not in self._store:
            raise KeyError(key)
        return _wrap(self._store[actual], self._context)

    def __contains__(self, key: Any) -> bool:
        actual = self._context.resolve(key)
        return actual is not None and actual in self._store

    def __iter__(self) -> Iterator[str]:
        aliases = self._context.aliases
        for stored_key in self._store:
            yield aliases.get(stored_key, stored_key)

    def __len__(self) -> int:
        return len(self._store)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self) != len(other):
            return False
        for key in self:
            if key not in other or self[key] != other[key]:
                return False
        return True

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_python()!r})"

    @property
    def raw(self) -> MappingType[str, Any]:
        """The underlying aliased object."""
        return self._store

    def to_python(self) -> dict:
        """Materialize this subtree as plain JSON values."""
        return rename_keys(self._store, self._context.aliases)


class TerseArrayView(Sequence):
    """Read-only view of an aliased array; elements are wrapped on access."""

    __slots__ = ("_items", "_context")

    def __init__(self, items: Sequence, context: _ViewContext):
        self._items = items
        self._context = context

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TerseArrayView(self._items[index], self._context)
        return _wrap(self._items[index], self._context)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        for item in self._items:
            yield _wrap(item, self._context)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (list, tuple, TerseArrayView)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(mine == theirs for mine, theirs in zip(self, other))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_python()!r})"

    @property
    def raw(self) -> Sequence:
        """The underlying aliased array."""
        return self._items

    def to_python(self) -> list:
        """Materialize this subtree as plain JSON values."""
        return rename_keys(self._items, self._context.aliases)


def wrap_with_proxy(candidate: Any) -> Any:
    """
    Wrap a terse payload in a lazy view exposing the original key names.

    Args:
        candidate: Any value

    Returns:
        A TerseArrayView or TerseObjectView over the payload data, the data
        itself when it is a scalar, or ``candidate`` unchanged when it is not
        a terse payload

    Raises:
        UnsupportedVersionError: If the envelope declares an unknown version
    """
    if not is_terse_payload(candidate):
        return candidate
    dictionary, data = open_envelope(candidate)
    return _wrap(data, _ViewContext(dictionary))


def to_python(value: Any) -> Any:
    """Materialize views (at any depth) into plain JSON values."""
    if isinstance(value, (TerseObjectView, TerseArrayView)):
        return value.to_python()
    if isinstance(value, Mapping):
        return {key: to_python(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_python(item) for item in value]
    return value


def json_default(value: Any) -> Any:
    """``default`` hook for ``json.dumps`` so views serialize like plain values."""
    if isinstance(value, (TerseObjectView, TerseArrayView)):
        return value.to_python()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
