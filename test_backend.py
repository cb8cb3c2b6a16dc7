from __future__ import annotations

import unittest
from unittest import mock

import kprng
from kprng import backend
from kprng.constants import (
    BACKEND_KECCAK256,
    BACKEND_KECCAK256_LEGACY,
    BACKEND_SHAKE256,
    DEFAULT_BACKEND,
    SYSTEM_SEED_SIZE,
)
from kprng.errors import InvalidArgumentError, InvalidStateError
from kprng.prng import Keccak256PRNG, LegacyKeccak256PRNG, PRNGBackend
from kprng.shake import Shake256PRNG


class RegistryTests(unittest.TestCase):
    def test_available_backends(self):
        names = backend.available_backends()
        self.assertEqual(set(names), {BACKEND_KECCAK256, BACKEND_SHAKE256, BACKEND_KECCAK256_LEGACY})
        self.assertEqual(DEFAULT_BACKEND, BACKEND_KECCAK256)

    def test_get_backend(self):
        self.assertIs(backend.get_backend(BACKEND_KECCAK256), Keccak256PRNG)
        self.assertIs(backend.get_backend(BACKEND_SHAKE256), Shake256PRNG)
        self.assertIs(backend.get_backend(BACKEND_KECCAK256_LEGACY), LegacyKeccak256PRNG)
        with self.assertRaises(ValueError):
            backend.get_backend("md5")

    def test_new_prng_is_fresh(self):
        for name in backend.available_backends():
            ctx = backend.new_prng(name)
            self.assertIsInstance(ctx, PRNGBackend)
            self.assertFalse(ctx.finalized)
        self.assertIsInstance(backend.new_prng(), Keccak256PRNG)

    def test_backends_share_interface(self):
        for name in backend.available_backends():
            ctx = backend.from_seed(b"test input", backend=name)
            a = ctx.extract(16)
            b = ctx.extract(16)
            self.assertEqual(len(a + b), 32)
            self.assertNotEqual(a, b)

    def test_backends_produce_different_streams(self):
        outputs = {backend.from_seed(b"test input", backend=name).extract(32) for name in backend.available_backends()}
        self.assertEqual(len(outputs), len(backend.available_backends()))


class SeedingTests(unittest.TestCase):
    def test_from_seed(self):
        ctx = backend.from_seed(b"test input")
        self.assertTrue(ctx.finalized)
        manual = Keccak256PRNG()
        manual.inject(b"test input")
        manual.flip()
        self.assertEqual(ctx.extract(64), manual.extract(64))

    def test_from_system_uses_os_entropy(self):
        seed = bytes(range(SYSTEM_SEED_SIZE))
        with mock.patch("kprng.backend.os.urandom", return_value=seed) as urandom:
            ctx = backend.from_system()
        urandom.assert_called_once_with(SYSTEM_SEED_SIZE)
        self.assertEqual(ctx.extract(32), backend.from_seed(seed).extract(32))

    def test_from_system_differs_between_calls(self):
        a = backend.from_system(backend=BACKEND_SHAKE256).extract(32)
        b = backend.from_system(backend=BACKEND_SHAKE256).extract(32)
        self.assertNotEqual(a, b)


class ProceduralAPITests(unittest.TestCase):
    def test_full_cycle(self):
        ctx = Keccak256PRNG()
        kprng.init(ctx)
        kprng.inject(ctx, b"test")
        kprng.inject(ctx, b" input")
        kprng.flip(ctx)
        out = kprng.extract(ctx, 16) + kprng.extract(ctx, 16)
        self.assertEqual(out, kprng.from_seed(b"test input").extract(32))

    def test_none_context(self):
        with self.assertRaises(InvalidArgumentError):
            backend.init(None)
        with self.assertRaises(InvalidArgumentError):
            backend.inject(None, b"x")
        with self.assertRaises(InvalidArgumentError):
            backend.flip(None)
        with self.assertRaises(InvalidArgumentError):
            backend.extract(None, 1)

    def test_non_context_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            backend.init(object())

    def test_init_reopens_finalized_context(self):
        ctx = backend.from_seed(b"first")
        with self.assertRaises(InvalidStateError):
            backend.inject(ctx, b"more")
        backend.init(ctx)
        backend.inject(ctx, b"test input")
        backend.flip(ctx)
        self.assertEqual(backend.extract(ctx, 32), backend.from_seed(b"test input").extract(32))


if __name__ == "__main__":
    unittest.main()
