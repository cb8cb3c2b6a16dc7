from __future__ import annotations

from Cryptodome.Hash import SHA3_256

from .constants import COUNTER_SIZE, COUNTER_MAX


def sha3_256(data: bytes) -> bytes:
    return SHA3_256.new(data).digest()


def counter_bytes(counter: int) -> bytes:
    """Encode a block counter as 8 big-endian bytes.

    The counter is masked to 64 bits; wrap-around is not expected in practice.
    """
    return (counter & COUNTER_MAX).to_bytes(COUNTER_SIZE, "big")


def counter_block(state: bytes, counter: int) -> bytes:
    return state + counter_bytes(counter)
