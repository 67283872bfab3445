"""Encoder: rewrites object keys through a key dictionary."""

import logging
from collections.abc import Mapping
from typing import Any, Optional
from ..types import CURRENT_VERSION, EncoderInterface
from ..models import KeyDictionary, TersePayload


class TreeEncoder(EncoderInterface):
    """
    Rewrites every object key that has an alias, at every depth.

    Keys without an alias are copied unchanged; array order, nesting and
    scalar values are preserved. The input tree is never mutated.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def encode(self, tree: Any, dictionary: KeyDictionary) -> TersePayload:
        """
        Encode a tree into an envelope.

        Args:
            tree: JSON tree to encode
            dictionary: Key dictionary built for this tree

        Returns:
            TersePayload with the current format version
        """
        data = self.rewrite(tree, dictionary.inverse) if dictionary else _copy_tree(tree)
        return TersePayload(
            version=CURRENT_VERSION.value,
            dictionary=dictionary.aliases,
            data=data,
        )

    def rewrite(self, tree: Any, key_map: Mapping) -> Any:
        """
        Return a copy of ``tree`` with object keys renamed through ``key_map``.

        Args:
            tree: JSON tree to rewrite
            key_map: Mapping of current key -> new key; other keys are kept

        Returns:
            Rewritten copy of the tree
        """
        return rename_keys(tree, key_map)


def rename_keys(node: Any, key_map: Mapping) -> Any:
    """
    Copy a tree, renaming object keys found in ``key_map``.

    Objects become dicts and arrays become lists; other keys and all scalars
    are kept as they are.
    """
    root = _new_container(node)
    if root is None:
        return node

    # Explicit stack keeps deep trees clear of the recursion limit.
    stack = [(node, root)]
    while stack:
        source, target = stack.pop()
        if isinstance(source, Mapping):
            for key, value in source.items():
                child = _new_container(value)
                if child is not None:
                    stack.append((value, child))
                target[key_map.get(key, key)] = value if child is None else child
        else:
            for item in source:
                child = _new_container(item)
                if child is not None:
                    stack.append((item, child))
                target.append(item if child is None else child)
    return root


def _new_container(node: Any):
    if isinstance(node, Mapping):
        return {}
    if isinstance(node, (list, tuple)):
        return []
    return None


def _copy_tree(node: Any) -> Any:
    return rename_keys(node, {})
