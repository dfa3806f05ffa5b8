import logging

from resp_validator.config import DecoderConfig
from resp_validator.data_types import Array, Error, Integer, Nil, Node, String, Value
from resp_validator.exceptions import (
    DepthError,
    RESPError,
    SizeError,
    UnexpectedError,
)

RESPInput = bytes | bytearray | memoryview | str

CRLF = b"\r\n"
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _expect_crlf(
    data: bytes, index: int, node: Node, error: type[RESPError]
) -> int:
    if data[index : index + 1] != b"\r":
        raise error(node, index)
    if data[index + 1 : index + 2] != b"\n":
        raise error(node, index + 1)
    return index + 2


def _read_integer(
    data: bytes, start: int, node: Node, error: type[RESPError]
) -> tuple[int, int]:
    """Scan ``[+|-]digit+\\r\\n`` from ``start``.

    Returns the parsed value and the offset right after the terminator.
    """
    index = start
    sign = 1
    if data[index : index + 1] in (b"-", b"+"):
        if data[index : index + 1] == b"-":
            sign = -1
        index += 1

    digits_start = index
    value = 0
    while index < len(data) and 0x30 <= data[index] <= 0x39:
        value = value * 10 + (data[index] - 0x30)
        if not INT64_MIN <= sign * value <= INT64_MAX:
            raise error(node, index)
        index += 1

    if index == digits_start:
        raise error(node, index)

    return sign * value, _expect_crlf(data, index, node, error)


class RESPDecoder:
    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()

    def decode(self, data: RESPInput) -> Value:
        """Decode one RESP value spanning the whole of ``data``.

        Raises a ``RESPError`` subclass carrying the node being decoded and
        the byte offset of the first failure.
        """
        buffer = self._to_bytes(data)

        try:
            value, offset = self._decode_value(buffer, 0, 0)
            if offset != len(buffer):
                raise UnexpectedError(Node.UNKNOWN, offset)
        except RESPError as e:
            logging.debug(f"Rejected RESP input ({e.kind.name}): {e}")
            raise

        logging.debug(f"Decoded {type(value)!r} from {len(buffer)} bytes")
        return value

    def decode_prefix(self, data: RESPInput, offset: int = 0) -> tuple[Value, int]:
        """Decode the value starting at ``offset``, ignoring any bytes after it.

        Returns the value and the offset of the first byte after it.
        """
        buffer = self._to_bytes(data)
        if not 0 <= offset <= len(buffer):
            raise ValueError(f"Offset {offset} is outside of the input")

        return self._decode_value(buffer, offset, 0)

    def validate(self, data: RESPInput) -> RESPError | None:
        try:
            self.decode(data)
        except RESPError as e:
            return e
        return None

    def decode_integer(self, data: bytes, offset: int) -> tuple[Integer, int]:
        value, index = _read_integer(data, offset + 1, Node.INTEGER, UnexpectedError)
        return Integer(value), index

    def decode_simple_string(self, data: bytes, offset: int) -> tuple[String, int]:
        payload, index = self._read_line(data, offset, Node.SIMPLE_STRING)
        return String(payload), index

    def decode_error(self, data: bytes, offset: int) -> tuple[Error, int]:
        payload, index = self._read_line(data, offset, Node.ERROR)
        return Error(payload.decode(self.config.encoding, errors="replace")), index

    def decode_bulk_string(
        self, data: bytes, offset: int
    ) -> tuple[String | Nil, int]:
        length, start = self._read_size(data, offset)
        if length == -1:
            return Nil(), start

        end = start + length
        if end > len(data):
            raise SizeError(Node.BULK_STRING, len(data))
        if data[end : end + 2] != CRLF:
            raise SizeError(Node.BULK_STRING, end)

        return String(data[start:end]), end + 2

    def decode_array(
        self, data: bytes, offset: int, depth: int = 1
    ) -> tuple[Array | Nil, int]:
        if depth > self.config.max_depth:
            raise DepthError(Node.ARRAY, offset)

        count, index = self._read_size(data, offset)
        if count == -1:
            return Nil(), index

        values: list[Value] = []
        for _ in range(count):
            if index >= len(data):
                raise SizeError(Node.ARRAY, index)
            value, index = self._decode_value(data, index, depth)
            values.append(value)

        return Array(values), index

    def _decode_value(self, data: bytes, offset: int, depth: int) -> tuple[Value, int]:
        datatype = data[offset : offset + 1]

        if datatype == b"$":
            return self.decode_bulk_string(data, offset)
        elif datatype == b":":
            return self.decode_integer(data, offset)
        elif datatype == b"+":
            return self.decode_simple_string(data, offset)
        elif datatype == b"-":
            return self.decode_error(data, offset)
        elif datatype == b"*":
            return self.decode_array(data, offset, depth + 1)
        else:
            raise UnexpectedError(Node.UNKNOWN, offset)

    def _read_size(self, data: bytes, offset: int) -> tuple[int, int]:
        size, index = _read_integer(data, offset + 1, Node.SIZE, SizeError)
        if size < -1:
            raise SizeError(Node.SIZE, offset + 1)
        return size, index

    def _read_line(self, data: bytes, offset: int, node: Node) -> tuple[bytes, int]:
        start = offset + 1
        end = len(data)
        # CR and LF may only appear as the terminator
        for terminator in (b"\r", b"\n"):
            found = data.find(terminator, start, end)
            if found != -1:
                end = found

        return data[start:end], _expect_crlf(data, end, node, UnexpectedError)

    def _to_bytes(self, data: RESPInput) -> bytes:
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data)


_default_decoder = RESPDecoder()


def decode(data: RESPInput) -> Value:
    return _default_decoder.decode(data)


def validate(data: RESPInput) -> RESPError | None:
    return _default_decoder.validate(data)
