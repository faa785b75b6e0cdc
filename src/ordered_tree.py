"""
OrderedTree -- an unbalanced binary search tree used as an ordered set.

Every node caches the height and node count of the subtree rooted at it. Both
are refreshed bottom-up along the search path after each insert or remove, which
makes rank queries (element_at) O(height) alongside the usual membership and
neighbour queries. There is no rebalancing, so sorted input degrades the tree
into a linked chain of height N. All walks are iterative for that reason.
"""

import logging
from enum import Enum
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from traversal import TraversalOrder, TreeSequence, in_order_values
from tree_errors import EmptyTreeError, IndexOutOfRangeError, InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar('T')

DIAGRAM_INDENT = "   "
DIAGRAM_BRANCH = "|--"
DIAGRAM_EMPTY = "null"


class _Step(Enum):
    LEFT = "left"
    RIGHT = "right"
    FOUND = "found"


class OrderedTree(Generic[T]):
    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['OrderedTree.Node'] = None
            self.right: Optional['OrderedTree.Node'] = None
            self.height: int = 1
            self.size: int = 1

    def __init__(self, values: Optional[Iterable[T]] = None) -> None:
        self._root: Optional[OrderedTree.Node] = None
        self._size: int = 0
        if values is not None:
            self.add_all(values)

    @classmethod
    def of(cls, value: T) -> 'OrderedTree[T]':
        tree: OrderedTree[T] = cls()
        tree.insert(value)
        return tree

    # -- node bookkeeping ---------------------------------------------------

    @staticmethod
    def _height_of(node: Optional[Node]) -> int:
        if node is None:
            return 0
        return node.height

    @staticmethod
    def _size_of(node: Optional[Node]) -> int:
        if node is None:
            return 0
        return node.size

    def _update(self, node: Node) -> None:
        node.height = 1 + max(self._height_of(node.left), self._height_of(node.right))
        node.size = 1 + self._size_of(node.left) + self._size_of(node.right)

    def _unwind(self, path: List[Node]) -> None:
        for node in reversed(path):
            self._update(node)

    @staticmethod
    def _require(value: Optional[T], operation: str) -> None:
        if value is None:
            raise InvalidArgumentError(f"{operation}: value must not be None")

    # -- descent ------------------------------------------------------------

    @staticmethod
    def _step(node: Node, value: T) -> _Step:
        if value < node.value:
            return _Step.LEFT
        if node.value < value:
            return _Step.RIGHT
        return _Step.FOUND

    def _search_path(self, value: T) -> Tuple[List[Node], bool]:
        """Return the root-to-node path followed by ``value`` and whether it ended on a match.

        On a miss the last node of the path is the parent of the empty slot
        where ``value`` belongs.
        """
        path: List[OrderedTree.Node] = []
        node = self._root
        while node is not None:
            path.append(node)
            step = self._step(node, value)
            if step is _Step.FOUND:
                return path, True
            node = node.left if step is _Step.LEFT else node.right
        return path, False

    def _replace_child(self, parent: Optional[Node], old: Node, new: Optional[Node]) -> None:
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    # -- core operations ----------------------------------------------------

    def insert(self, value: T) -> bool:
        self._require(value, "insert")
        path, found = self._search_path(value)
        if found:
            return False

        leaf = OrderedTree.Node(value)
        if not path:
            self._root = leaf
        else:
            parent = path[-1]
            if value < parent.value:
                parent.left = leaf
            else:
                parent.right = leaf
            self._unwind(path)
        self._size += 1
        logger.debug("insert %r: size=%d height=%d", value, self._size, self.height())
        return True

    def remove(self, value: T) -> bool:
        """Remove ``value`` if present and report whether the tree changed.

        A node with two children keeps its position and takes the value of its
        in-order predecessor, which is then unlinked from the left subtree. The
        predecessor never has a right child, so unlinking it is a single splice.
        """
        self._require(value, "remove")
        path, found = self._search_path(value)
        if not found:
            return False

        target = path[-1]
        if target.left is not None and target.right is not None:
            parent = target
            predecessor = target.left
            while predecessor.right is not None:
                path.append(predecessor)
                parent = predecessor
                predecessor = predecessor.right
            target.value = predecessor.value
            if parent is target:
                parent.left = predecessor.left
            else:
                parent.right = predecessor.left
        else:
            child = target.left if target.left is not None else target.right
            path.pop()
            self._replace_child(path[-1] if path else None, target, child)
        self._unwind(path)
        self._size -= 1
        logger.debug("remove %r: size=%d height=%d", value, self._size, self.height())
        return True

    def contains(self, value: T) -> bool:
        self._require(value, "contains")
        node = self._root
        while node is not None:
            step = self._step(node, value)
            if step is _Step.FOUND:
                return True
            node = node.left if step is _Step.LEFT else node.right
        return False

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def height(self) -> int:
        return self._height_of(self._root)

    def clear(self) -> None:
        self._root = None
        self._size = 0
        logger.debug("clear")

    def clone(self) -> 'OrderedTree[T]':
        copy: OrderedTree[T] = OrderedTree()
        if self._root is None:
            return copy

        copy._root = self._copy_node(self._root)
        stack = [(self._root, copy._root)]
        while stack:
            source, target = stack.pop()
            if source.left is not None:
                target.left = self._copy_node(source.left)
                stack.append((source.left, target.left))
            if source.right is not None:
                target.right = self._copy_node(source.right)
                stack.append((source.right, target.right))
        copy._size = self._size
        logger.debug("clone: size=%d", copy._size)
        return copy

    @staticmethod
    def _copy_node(source: Node) -> Node:
        node = OrderedTree.Node(source.value)
        node.height = source.height
        node.size = source.size
        return node

    # -- order statistics and neighbours ------------------------------------

    def element_at(self, index: int) -> T:
        """Return the value of rank ``index`` (0-based) in ascending order."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("index must be an integer")
        if index < 0 or index >= self._size:
            raise IndexOutOfRangeError(f"element_at: index {index} out of range for size {self._size}")

        node = self._root
        while True:
            assert node is not None
            left_size = self._size_of(node.left)
            if index < left_size:
                node = node.left
            elif index == left_size:
                return node.value
            else:
                index -= left_size + 1
                node = node.right

    def first(self) -> T:
        if self._root is None:
            raise EmptyTreeError("first from empty tree")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.value

    def last(self) -> T:
        if self._root is None:
            raise EmptyTreeError("last from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def floor(self, value: T) -> Optional[T]:
        """Greatest stored value <= ``value``, or None."""
        self._require(value, "floor")
        if self._root is None or value < self.first():
            return None
        if self.contains(value):
            return value

        candidate: Optional[T] = None
        node = self._root
        while node is not None:
            if node.value < value:
                candidate = node.value
                node = node.right
            else:
                node = node.left
        return candidate

    def ceiling(self, value: T) -> Optional[T]:
        """Least stored value >= ``value``, or None."""
        self._require(value, "ceiling")
        if self._root is None or self.last() < value:
            return None
        if self.contains(value):
            return value

        candidate: Optional[T] = None
        node = self._root
        while node is not None:
            if value < node.value:
                candidate = node.value
                node = node.left
            else:
                node = node.right
        return candidate

    def higher(self, value: T) -> Optional[T]:
        self._require(value, "higher")
        if self._root is None or not value < self.last():
            return None

        candidate: Optional[T] = None
        node = self._root
        while node is not None:
            if value < node.value:
                candidate = node.value
                node = node.left
            else:
                node = node.right
        return candidate

    def lower(self, value: T) -> Optional[T]:
        self._require(value, "lower")
        if self._root is None or not self.first() < value:
            return None

        candidate: Optional[T] = None
        node = self._root
        while node is not None:
            if node.value < value:
                candidate = node.value
                node = node.right
            else:
                node = node.left
        return candidate

    def range(self, start: T, end: T) -> List[T]:
        """Values in ``[start, end]`` in ascending order.

        Subtrees lying wholly below ``start`` are never pushed and the walk
        stops at the first value above ``end``.
        """
        self._require(start, "range")
        self._require(end, "range")
        if end < start:
            raise InvalidArgumentError("range: start must not exceed end")

        result: List[T] = []
        stack: List[OrderedTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                if node.value < start:
                    node = node.right
                else:
                    stack.append(node)
                    node = node.left
            if not stack:
                break
            node = stack.pop()
            if end < node.value:
                break
            result.append(node.value)
            node = node.right
        return result

    # -- traversal ----------------------------------------------------------

    def traverse(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> TreeSequence[T]:
        return TreeSequence(self._root, order)

    def in_order(self) -> TreeSequence[T]:
        return self.traverse(TraversalOrder.IN_ORDER)

    def pre_order(self) -> TreeSequence[T]:
        return self.traverse(TraversalOrder.PRE_ORDER)

    def post_order(self) -> TreeSequence[T]:
        return self.traverse(TraversalOrder.POST_ORDER)

    # -- bulk operations ----------------------------------------------------

    def add_all(self, values: Iterable[T]) -> bool:
        items = list(values)
        for item in items:
            self._require(item, "add_all")
        changed = False
        for item in items:
            if self.insert(item):
                changed = True
        return changed

    def contains_all(self, values: Iterable[T]) -> bool:
        # An empty input is reported as False rather than vacuously True.
        items = list(values)
        if not items:
            return False
        for item in items:
            self._require(item, "contains_all")
        for item in items:
            if not self.contains(item):
                return False
        return True

    def to_ordered_array(self) -> List[T]:
        return in_order_values(self._root)

    def to_tree_diagram(self) -> str:
        lines: List[str] = []
        stack: List[Tuple[Optional[OrderedTree.Node], int]] = [(self._root, 0)]
        while stack:
            node, level = stack.pop()
            prefix = "" if level == 0 else DIAGRAM_INDENT * (level - 1) + DIAGRAM_BRANCH
            if node is None:
                lines.append(prefix + DIAGRAM_EMPTY)
                continue
            lines.append(prefix + str(node.value))
            stack.append((node.right, level + 1))
            stack.append((node.left, level + 1))
        return "\n".join(lines)

    # -- diagnostics --------------------------------------------------------

    def is_valid(self) -> bool:
        """Check ordering, cached heights and sizes, and the cached count."""
        if self._size != self._size_of(self._root):
            return False
        stack: List[Tuple[OrderedTree.Node, Optional[T], Optional[T]]] = []
        if self._root is not None:
            stack.append((self._root, None, None))
        while stack:
            node, low, high = stack.pop()
            if low is not None and not low < node.value:
                return False
            if high is not None and not node.value < high:
                return False
            if node.height != 1 + max(self._height_of(node.left), self._height_of(node.right)):
                return False
            if node.size != 1 + self._size_of(node.left) + self._size_of(node.right):
                return False
            if node.left is not None:
                stack.append((node.left, low, node.value))
            if node.right is not None:
                stack.append((node.right, node.value, high))
        return True

    def depths(self) -> List[int]:
        """Depth of every node (root = 1), listed in ascending value order."""
        result: List[int] = []
        stack: List[Tuple[OrderedTree.Node, int]] = []
        node = self._root
        depth = 1
        while stack or node is not None:
            while node is not None:
                stack.append((node, depth))
                node = node.left
                depth += 1
            node, depth = stack.pop()
            result.append(depth)
            node = node.right
            depth += 1
        return result

    # -- python protocols ---------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __getitem__(self, index: int) -> T:
        return self.element_at(index)

    def __copy__(self) -> 'OrderedTree[T]':
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedTree):
            return NotImplemented
        if self is other:
            return True
        if self._size != other._size:
            return False
        for mine, theirs in zip(self, other):
            if mine != theirs:
                return False
        return True

    __hash__ = None

    def __repr__(self) -> str:
        return f"OrderedTree({self.to_ordered_array()})"

    def __str__(self) -> str:
        return "[" + ", ".join(str(value) for value in self.to_ordered_array()) + "]"
