"""JSON tree model helpers.

Trees are plain Python JSON values (``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict`` with string keys). This module tags them,
walks them and compares them.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterator, List, Set, Tuple
from .types import NodeType


def classify(value: Any) -> NodeType:
    """
    Return the node type of a JSON value.

    Args:
        value: Value to classify

    Returns:
        NodeType tag

    Raises:
        TypeError: If the value is not representable as JSON
    """
    if value is None:
        return NodeType.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeType.NUMBER
    if isinstance(value, str):
        return NodeType.STRING
    if isinstance(value, Mapping):
        return NodeType.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return NodeType.ARRAY
    raise TypeError(f"Value of type {type(value).__name__} is not a JSON value")


def is_json_value(value: Any) -> bool:
    """
    Check that a value is an acyclic JSON tree with string keys and finite numbers.

    Args:
        value: Value to check

    Returns:
        True if the value is a well-formed tree
    """
    return _check_json_value(value, set())


def _check_json_value(value: Any, seen: Set[int]) -> bool:
    try:
        node_type = classify(value)
    except TypeError:
        return False

    if node_type == NodeType.NUMBER and isinstance(value, float):
        return math.isfinite(value)

    if node_type not in (NodeType.ARRAY, NodeType.OBJECT):
        return True

    obj_id = id(value)
    if obj_id in seen:
        return False
    seen.add(obj_id)
    try:
        if node_type == NodeType.OBJECT:
            for key, child in value.items():
                if not isinstance(key, str) or not _check_json_value(child, seen):
                    return False
        else:
            for child in value:
                if not _check_json_value(child, seen):
                    return False
    finally:
        seen.remove(obj_id)
    return True


def iter_key_context(tree: Any) -> Iterator[Tuple[str, int, bool]]:
    """
    Walk a tree depth first and yield every object key with its context.

    Arrays are walked in index order and objects in key order; a key is
    yielded before the value it holds is descended into. Each item is
    ``(key, depth, via_arrays)``: ``depth`` counts the objects enclosing the
    key's object, and ``via_arrays`` is true when every step from a root-level
    object down to the key's object passes through an array.

    Args:
        tree: Tree to walk

    Yields:
        Tuples of (key, object depth, reached-through-arrays flag)
    """
    # Explicit stack keeps deep trees clear of the recursion limit.
    # Entries: (is_key, payload, depth, via_arrays, passed_array)
    stack: List[Tuple[bool, Any, int, bool, bool]] = [(False, tree, 0, True, False)]
    while stack:
        is_key, node, depth, via_arrays, passed_array = stack.pop()
        if is_key:
            yield node, depth, via_arrays
            continue
        if isinstance(node, Mapping):
            own_via = via_arrays and (depth == 0 or passed_array)
            for key, value in reversed(list(node.items())):
                if isinstance(value, (Mapping, list, tuple)):
                    stack.append((False, value, depth + 1, own_via, False))
                stack.append((True, key, depth, own_via, False))
        elif isinstance(node, (list, tuple)):
            for item in reversed(node):
                if isinstance(item, (Mapping, list, tuple)):
                    stack.append((False, item, depth, via_arrays, True))


def iter_keys(tree: Any) -> Iterator[str]:
    """Yield every object key in the tree, in depth-first encounter order."""
    for key, _, _ in iter_key_context(tree):
        yield key


def collect_keys(tree: Any) -> List[str]:
    """Return the distinct object keys of a tree in first-encounter order."""
    return list(dict.fromkeys(iter_keys(tree)))


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality for JSON trees.

    Unlike ``==`` this does not treat ``True`` and ``1`` as equal, and it
    compares object key order-insensitively and array order-sensitively.
    Any Mapping or non-string Sequence is accepted, so proxy views compare
    against decoded values directly.
    """
    left_type = classify(left)
    right_type = classify(right)
    if left_type != right_type:
        return False

    if left_type == NodeType.OBJECT:
        if len(left) != len(right):
            return False
        for key in left:
            if key not in right:
                return False
            if not deep_equal(left[key], right[key]):
                return False
        return True

    if left_type == NodeType.ARRAY:
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))

    return left == right


def get_structure_statistics(tree: Any) -> Dict[str, int]:
    """
    Count the nodes of a tree.

    Args:
        tree: Tree to analyze

    Returns:
        Dictionary with object, array, scalar and key counts and max depth
    """
    stats = {
        "object_count": 0,
        "array_count": 0,
        "scalar_count": 0,
        "total_keys": 0,
        "distinct_keys": 0,
        "max_depth": 0,
    }
    distinct: Set[str] = set()

    stack: List[Tuple[Any, int]] = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        stats["max_depth"] = max(stats["max_depth"], depth)
        if isinstance(node, Mapping):
            stats["object_count"] += 1
            stats["total_keys"] += len(node)
            distinct.update(node.keys())
            stack.extend((child, depth + 1) for child in node.values())
        elif isinstance(node, (list, tuple)):
            stats["array_count"] += 1
            stack.extend((child, depth + 1) for child in node)
        else:
            stats["scalar_count"] += 1

    stats["distinct_keys"] = len(distinct)
    return stats
