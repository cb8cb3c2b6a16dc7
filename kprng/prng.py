from __future__ import annotations

import abc
from typing import Callable

from .constants import (
    BACKEND_KECCAK256,
    BACKEND_KECCAK256_LEGACY,
    HASH256_SIZE,
    LEGACY_DOMAIN_BYTE,
    MAX_BUFFER_SIZE,
)
from .errors import CapacityExceededError, InvalidArgumentError, InvalidStateError
from .hashutil import counter_block, sha3_256


def _as_bytes(data) -> bytes:
    if data is None:
        raise InvalidArgumentError("inject requires input data, got None")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(f"inject expects a bytes-like object, got {type(data).__name__}")
    return bytes(data)


def _as_length(length) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgumentError(f"extract length must be an integer, got {type(length).__name__}")
    if length < 0:
        raise InvalidArgumentError(f"extract length must be non-negative, got {length}")
    return length


class PRNGBackend(abc.ABC):
    """Common shape of every generator: init, inject, flip, extract.

    Callers only rely on these four operations (plus ``extract_into``), so a
    backend can be swapped without touching the code that consumes its output.
    """

    name = ""
    stream_continuous = True

    @abc.abstractmethod
    def init(self) -> None:
        ...

    @abc.abstractmethod
    def inject(self, data: bytes) -> None:
        ...

    @abc.abstractmethod
    def flip(self) -> None:
        ...

    @abc.abstractmethod
    def extract(self, length: int) -> bytes:
        ...

    def extract_into(self, out) -> None:
        """Fill a writable buffer (bytearray, memoryview, ...) with output bytes."""
        if out is None:
            raise InvalidArgumentError("extract_into requires an output buffer, got None")
        try:
            view = memoryview(out)
        except TypeError:
            raise InvalidArgumentError(f"extract_into expects a writable buffer, got {type(out).__name__}") from None
        if view.readonly:
            raise InvalidArgumentError("extract_into requires a writable buffer")
        try:
            view = view.cast("B")
        except TypeError:
            raise InvalidArgumentError("extract_into requires a C-contiguous buffer") from None
        view[:] = self.extract(view.nbytes)


class Keccak256PRNG(PRNGBackend):
    """Counter-mode pseudo-random byte generator based on SHA3-256.

    All injected bytes are hashed once on flip into a 32-byte state. Output
    block ``i`` is ``H(state || i)`` with ``i`` as a 64-bit big-endian counter.
    The unread tail of the last block is kept between extract calls, so the
    stream depends only on the seed and the total number of bytes requested.

    Args:
        hash256: 32-byte hash used for both flip and block generation.
        capacity: Maximum number of bytes accepted by inject before flip.
    """

    name = BACKEND_KECCAK256

    def __init__(self, hash256: Callable[[bytes], bytes] = sha3_256, capacity: int = MAX_BUFFER_SIZE):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.hash256 = hash256
        self.capacity = capacity
        self.init()

    def init(self) -> None:
        self.buffer = bytearray(self.capacity)
        self.buffer_len = 0
        self.state = bytes(HASH256_SIZE)
        self.counter = 0
        self.finalized = False
        self.out_block = bytes(HASH256_SIZE)
        self.out_pos = 0
        self.out_len = 0

    def _hash(self, data: bytes) -> bytes:
        digest = self.hash256(data)
        if len(digest) != HASH256_SIZE:
            raise ValueError(f"hash256 must return {HASH256_SIZE} bytes, got {len(digest)}")
        return bytes(digest)

    def inject(self, data: bytes) -> None:
        data = _as_bytes(data)
        if self.finalized:
            raise InvalidStateError("inject called after flip")
        end = self.buffer_len + len(data)
        if end > self.capacity:
            raise CapacityExceededError(self.capacity, self.buffer_len, len(data))
        self.buffer[self.buffer_len:end] = data
        self.buffer_len = end

    def _absorbed(self) -> bytes:
        return bytes(self.buffer[: self.buffer_len])

    def flip(self) -> None:
        if self.finalized:
            raise InvalidStateError("flip called twice")
        self.state = self._hash(self._absorbed())
        self.finalized = True
        self.counter = 0
        self.out_pos = 0
        self.out_len = 0

    def _refill(self) -> None:
        self.out_block = self._hash(counter_block(self.state, self.counter))
        self.out_len = HASH256_SIZE
        self.out_pos = 0
        self.counter += 1

    def extract(self, length: int) -> bytes:
        if not self.finalized:
            raise InvalidStateError("extract called before flip")
        length = _as_length(length)
        out = bytearray()
        if self.out_pos < self.out_len:
            take = min(length, self.out_len - self.out_pos)
            out += self.out_block[self.out_pos : self.out_pos + take]
            self.out_pos += take
        while len(out) < length:
            self._refill()
            take = min(length - len(out), HASH256_SIZE)
            out += self.out_block[:take]
            self.out_pos = take
        return bytes(out)


class LegacyKeccak256PRNG(Keccak256PRNG):
    """First revision of the counter construction, kept for bit-exact replay.

    Differs from :class:`Keccak256PRNG` in two ways: flip appends the SHAKE
    domain byte 0x1F before hashing, and each extract starts on a fresh block
    (the unused tail of the previous call is dropped).
    """

    name = BACKEND_KECCAK256_LEGACY
    stream_continuous = False

    def _absorbed(self) -> bytes:
        if self.buffer_len + 1 > self.capacity:
            raise CapacityExceededError(self.capacity, self.buffer_len, 1)
        return bytes(self.buffer[: self.buffer_len]) + bytes([LEGACY_DOMAIN_BYTE])

    def extract(self, length: int) -> bytes:
        data = super().extract(length)
        self.out_pos = self.out_len
        return data
