"""
Traversal orders and restartable value sequences over a binary tree.

A traversal walks the node graph once, iteratively, and copies the values into
an immutable snapshot. A TreeSequence wraps that snapshot; each call to iter()
hands out a fresh SequenceCursor positioned at the start, so a sequence can be
consumed any number of times. The snapshot is not a live view: mutating the
tree afterwards leaves existing sequences untouched.
"""

from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from tree_errors import EndOfSequenceError, UnsupportedOperationError

T = TypeVar('T')


def pre_order_values(root: Optional[Any]) -> List[Any]:
    result: List[Any] = []
    if root is None:
        return result
    stack = [root]
    while stack:
        node = stack.pop()
        result.append(node.value)
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)
    return result


def in_order_values(root: Optional[Any]) -> List[Any]:
    result: List[Any] = []
    stack: List[Any] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        result.append(node.value)
        node = node.right
    return result


def post_order_values(root: Optional[Any]) -> List[Any]:
    result: List[Any] = []
    if root is None:
        return result
    stack = [root]
    while stack:
        node = stack.pop()
        result.append(node.value)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    # node-right-left reversed is left-right-node
    result.reverse()
    return result


class TraversalOrder(Enum):
    PRE_ORDER = "pre_order"
    IN_ORDER = "in_order"
    POST_ORDER = "post_order"

    def walk(self, root: Optional[Any]) -> List[Any]:
        return _WALKS[self](root)


_WALKS: Dict[TraversalOrder, Callable[[Optional[Any]], List[Any]]] = {
    TraversalOrder.PRE_ORDER: pre_order_values,
    TraversalOrder.IN_ORDER: in_order_values,
    TraversalOrder.POST_ORDER: post_order_values,
}


class SequenceCursor(Generic[T]):
    """Forward-only position over a snapshot. Removal is not supported."""

    def __init__(self, values: Tuple[T, ...]) -> None:
        self._values = values
        self._index = 0

    def has_next(self) -> bool:
        return self._index < len(self._values)

    def next(self) -> T:
        if not self.has_next():
            raise EndOfSequenceError("next past the end of the sequence")
        value = self._values[self._index]
        self._index += 1
        return value

    def remove(self) -> None:
        raise UnsupportedOperationError("remove is not supported by tree sequences")

    def __iter__(self) -> 'SequenceCursor[T]':
        return self

    def __next__(self) -> T:
        return self.next()


class TreeSequence(Generic[T]):
    def __init__(self, root: Optional[Any], order: TraversalOrder = TraversalOrder.IN_ORDER) -> None:
        if not isinstance(order, TraversalOrder):
            raise TypeError("order must be a TraversalOrder")
        self._order = order
        self._values: Tuple[T, ...] = tuple(order.walk(root))

    @property
    def order(self) -> TraversalOrder:
        return self._order

    def cursor(self) -> SequenceCursor[T]:
        return SequenceCursor(self._values)

    def to_list(self) -> List[T]:
        return list(self._values)

    def __iter__(self) -> Iterator[T]:
        return self.cursor()

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeSequence):
            return NotImplemented
        return self._order is other._order and self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        return f"TreeSequence({self._order.name}, {list(self._values)})"
