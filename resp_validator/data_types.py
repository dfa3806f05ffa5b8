from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto


class Node(Enum):
    NIL = auto()
    INTEGER = auto()
    SIMPLE_STRING = auto()
    BULK_STRING = auto()
    ERROR = auto()
    ARRAY = auto()
    SIZE = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


class RESPType(type):
    def __repr__(self) -> str:
        return self.__name__.lower()


@dataclass
class Nil(metaclass=RESPType):
    pass


@dataclass
class Integer(metaclass=RESPType):
    value: int


@dataclass
class String(metaclass=RESPType):
    value: bytes

    def __len__(self) -> int:
        return len(self.value)

    @property
    def text(self) -> str:
        """Payload as UTF-8 text, independent of the decoder encoding."""
        return self.value.decode("utf-8")


@dataclass
class Error(metaclass=RESPType):
    message: str


@dataclass
class Array(metaclass=RESPType):
    values: list[Value] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.values)

    def __getitem__(self, index: int) -> Value:
        return self.values[index]


Value = Nil | Integer | String | Error | Array
