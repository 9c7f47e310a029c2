"""Shape inspection for nested numeric arrays."""

from typing import Any, List


def is_array(value: Any) -> bool:
    """Lists and tuples count as arrays; strings never do."""
    return isinstance(value, (list, tuple))


def get_array_shape(value: Any) -> List[int]:
    """
    Get the shape of a nested array, numpy style.

    Descends into the first element at each level and stops at the first
    non-array. An empty array contributes a trailing 0, which callers treat
    as invalid. Never raises.

    Example:
        get_array_shape([[[1, 2], [3, 4]]])  # -> [1, 2, 2]
    """
    shape: List[int] = []
    current = value
    while is_array(current):
        shape.append(len(current))
        if not current:
            break
        current = current[0]
    return shape
