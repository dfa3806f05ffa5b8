from enum import Enum, auto

from resp_validator.data_types import Node


class ErrorKind(Enum):
    UNEXPECTED = auto()
    SIZE = auto()


class RESPError(Exception):
    """Base class for decode failures.

    ``node`` is the grammar production being decoded when the failure was
    detected and ``index`` the byte offset into the original input. The index
    may equal the input length when more bytes were expected.
    """

    kind: ErrorKind
    reason: str = "invalid input"

    def __init__(self, node: Node, index: int) -> None:
        self.node = node
        self.index = index
        super().__init__(f"{self.reason} at byte {index} while decoding {node}")

    def __reduce__(self) -> tuple[type["RESPError"], tuple[Node, int]]:
        return type(self), (self.node, self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RESPError):
            return NotImplemented
        return (type(self), self.node, self.index) == (
            type(other),
            other.node,
            other.index,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.node, self.index))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(node=Node.{self.node.name}, index={self.index})"


class UnexpectedError(RESPError):
    kind = ErrorKind.UNEXPECTED
    reason = "unexpected input"


class SizeError(RESPError):
    kind = ErrorKind.SIZE
    reason = "size mismatch"


class DepthError(UnexpectedError):
    reason = "nesting too deep"
