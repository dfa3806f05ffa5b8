from collections.abc import Callable

import pytest
from redis.connection import Connection

from resp_validator.config import DecoderConfig
from resp_validator.resp.decoder import RESPDecoder


@pytest.fixture
def decoder() -> RESPDecoder:
    return RESPDecoder()


@pytest.fixture
def shallow_decoder() -> RESPDecoder:
    return RESPDecoder(DecoderConfig(max_depth=3))


@pytest.fixture(scope="package")
def pack_command() -> Callable[..., bytes]:
    # Never connects; only used for its command serializer
    connection = Connection()

    def pack(*args: str | bytes | int) -> bytes:
        return b"".join(connection.pack_command(*args))

    return pack
