import codecs
import sys
from dataclasses import dataclass

# Each array level costs two interpreter frames; keep headroom for the caller
STACK_HEADROOM = 200


def max_depth_limit() -> int:
    return (sys.getrecursionlimit() - STACK_HEADROOM) // 2


@dataclass(frozen=True)
class DecoderConfig:
    max_depth: int = 128
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.max_depth > max_depth_limit():
            raise ValueError(
                f"max_depth must be at most {max_depth_limit()}, got {self.max_depth}"
            )

        codec = codecs.lookup(self.encoding)
        if not getattr(codec, "_is_text_encoding", True):
            raise LookupError(f"{self.encoding!r} is not a text encoding")
        if b"-ERR\r\n".decode(self.encoding) != "-ERR\r\n":
            raise ValueError(f"{self.encoding!r} is not ASCII-compatible")
