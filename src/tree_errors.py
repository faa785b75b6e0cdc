class TreeError(Exception):
    """Base class for errors raised by OrderedTree and its sequences."""


class InvalidArgumentError(TreeError, ValueError):
    pass


class EmptyTreeError(TreeError, ValueError):
    pass


class IndexOutOfRangeError(TreeError, IndexError):
    pass


class EndOfSequenceError(TreeError, StopIteration):
    pass


class UnsupportedOperationError(TreeError, NotImplementedError):
    pass
