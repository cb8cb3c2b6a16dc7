from __future__ import annotations

import hashlib
import unittest

from kprng.errors import InvalidArgumentError, InvalidStateError
from kprng.shake import Shake256PRNG


def _seeded(seed: bytes = b"test input") -> Shake256PRNG:
    ctx = Shake256PRNG()
    ctx.inject(seed)
    ctx.flip()
    return ctx


class Shake256PRNGTests(unittest.TestCase):
    def test_matches_shake256(self):
        self.assertEqual(_seeded().extract(64), hashlib.shake_256(b"test input").digest(64))

    def test_split_calls_match_single_call(self):
        ctx = _seeded(b"test sequence")
        parts = ctx.extract(16) + ctx.extract(0) + ctx.extract(16) + ctx.extract(16)
        self.assertEqual(parts, _seeded(b"test sequence").extract(48))

    def test_incremental_injection(self):
        ctx = Shake256PRNG()
        ctx.inject(b"test")
        ctx.inject(b"input")
        ctx.flip()
        self.assertEqual(ctx.extract(32), _seeded(b"testinput").extract(32))

    def test_large_input_has_no_capacity_limit(self):
        data = b"A" * 100_000
        ctx = _seeded(data)
        self.assertEqual(ctx.extract(32), hashlib.shake_256(data).digest(32))

    def test_state_machine(self):
        ctx = Shake256PRNG()
        with self.assertRaises(InvalidStateError):
            ctx.extract(8)
        ctx.flip()
        with self.assertRaises(InvalidStateError):
            ctx.inject(b"late")
        with self.assertRaises(InvalidStateError):
            ctx.flip()
        with self.assertRaises(InvalidArgumentError):
            ctx.extract(-1)

    def test_init_resets(self):
        ctx = _seeded(b"other")
        ctx.extract(10)
        ctx.init()
        self.assertFalse(ctx.finalized)
        ctx.inject(b"test input")
        ctx.flip()
        self.assertEqual(ctx.extract(32), _seeded().extract(32))

    def test_extract_into(self):
        buf = bytearray(33)
        _seeded().extract_into(buf)
        self.assertEqual(bytes(buf), _seeded().extract(33))


if __name__ == "__main__":
    unittest.main()
