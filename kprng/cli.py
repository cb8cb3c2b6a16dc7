from __future__ import annotations

import sys
import argparse
import binascii

from typing import Callable, List, Optional, Tuple

from kprng.backend import available_backends, from_seed, from_system, get_backend, new_prng
from kprng.backend import init as prng_init
from kprng.constants import DEFAULT_BACKEND
from kprng.errors import CapacityExceededError, InvalidArgumentError, InvalidStateError, PRNGError


def _parse_split(text: str) -> List[int]:
    """Parse a comma-separated list of extract lengths (e.g. "16,16,16")."""
    try:
        parts = [int(p) for p in text.split(",") if p.strip()]
    except ValueError:
        raise ValueError(f"Invalid --split value: {text!r}") from None
    if not parts:
        raise ValueError("--split requires at least one length")
    return parts


def _seed_from_args(seed: Optional[str], seed_hex: Optional[str]) -> bytes:
    if seed_hex is not None:
        try:
            return binascii.unhexlify(seed_hex)
        except (binascii.Error, ValueError):
            raise ValueError(f"Invalid hex seed: {seed_hex!r}") from None
    return (seed or "").encode("utf-8")


# -------- extract --------

def cmd_extract(
    *,
    seed: Optional[str] = None,
    seed_hex: Optional[str] = None,
    system: bool = False,
    length: int = 32,
    split: Optional[str] = None,
    backend: str = DEFAULT_BACKEND,
    raw: bool = False,
) -> List[bytes]:
    """Seed a generator and print its output stream.

    Args:
        seed: UTF-8 seed text.
        seed_hex: Hex-encoded seed; takes precedence over ``seed``.
        system: Seed from OS entropy instead of a caller seed.
        length: Number of bytes for a single extract call.
        split: Comma-separated lengths; one extract call per entry.
        backend: Registered backend name.
        raw: Write raw bytes to stdout instead of hex lines.

    Returns:
        The extracted chunks, in call order.
    """
    if system:
        ctx = from_system(backend=backend)
    else:
        ctx = from_seed(_seed_from_args(seed, seed_hex), backend=backend)
    lengths = _parse_split(split) if split else [length]
    chunks = [ctx.extract(n) for n in lengths]
    if raw:
        sys.stdout.buffer.write(b"".join(chunks))
        sys.stdout.buffer.flush()
    else:
        for chunk in chunks:
            print(chunk.hex())
    return chunks


# -------- selftest --------

_SELFTEST_SEED = b"test input"


def _seeded(backend: str, seed: bytes = _SELFTEST_SEED):
    return from_seed(seed, backend=backend)


def _check(ok: bool, what: str) -> None:
    if not ok:
        raise AssertionError(what)


def _check_determinism(backend: str) -> str:
    a = _seeded(backend).extract(32)
    b = _seeded(backend).extract(32)
    _check(a == b, "identically seeded contexts diverged")
    return "Same input generates same output"


def _check_prefix(backend: str) -> str:
    short = _seeded(backend).extract(32)
    ctx = _seeded(backend)
    long = ctx.extract(64)
    _check(long[:32] == short, "32-byte output is not a prefix of 64-byte output")
    nxt = ctx.extract(64)
    _check(nxt != long, "successive extracts repeated")
    return "Longer output extends shorter output"


def _check_sequence(backend: str) -> str:
    ctx = _seeded(backend, b"test sequence")
    o1, o2, o3 = ctx.extract(16), ctx.extract(16), ctx.extract(16)
    _check(o1 != o2 and o2 != o3 and o1 != o3, "sequential outputs repeated")
    return "Sequential outputs are unique"


def _check_split(backend: str) -> Optional[str]:
    if not get_backend(backend).stream_continuous:
        return None
    ctx = _seeded(backend, b"test sequence")
    parts = ctx.extract(16) + ctx.extract(16) + ctx.extract(16)
    whole = _seeded(backend, b"test sequence").extract(48)
    _check(parts == whole, "split extracts differ from a single extract")
    return "Split extracts match a single extract"


def _check_incremental(backend: str) -> str:
    one = _seeded(backend, b"testinput").extract(32)
    ctx = new_prng(backend)
    ctx.inject(b"test")
    ctx.inject(b"input")
    ctx.flip()
    _check(ctx.extract(32) == one, "incremental injection differs from single injection")
    return "Incremental injection matches single injection"


def _expect(exc_type, fn: Callable[[], object], what: str) -> None:
    try:
        fn()
    except exc_type:
        return
    raise AssertionError(f"{what} did not raise {exc_type.__name__}")


def _check_state_machine(backend: str) -> str:
    ctx = _seeded(backend)
    _expect(InvalidStateError, lambda: ctx.inject(b"test"), "inject after flip")
    _expect(InvalidStateError, ctx.flip, "second flip")
    fresh = new_prng(backend)
    _expect(InvalidStateError, lambda: fresh.extract(32), "extract before flip")
    _expect(InvalidArgumentError, lambda: prng_init(None), "init(None)")
    return "Error conditions properly handled"


def _check_capacity(backend: str) -> Optional[str]:
    ctx = new_prng(backend)
    capacity = getattr(ctx, "capacity", None)
    if capacity is None:
        return None
    _expect(CapacityExceededError, lambda: ctx.inject(b"A" * (capacity + 1)), "oversized inject")
    ctx.inject(_SELFTEST_SEED)
    ctx.flip()
    _check(ctx.extract(32) == _seeded(backend).extract(32), "rejected inject modified the buffer")
    return "Buffer overflow protection works"


_CHECKS: Tuple[Callable[[str], Optional[str]], ...] = (
    _check_determinism,
    _check_prefix,
    _check_sequence,
    _check_split,
    _check_incremental,
    _check_state_machine,
    _check_capacity,
)


def cmd_selftest(backend: str = DEFAULT_BACKEND, *, quiet: bool = False) -> bool:
    """Run the generator property checks against one backend.

    Returns:
        True when every check passed.
    """
    get_backend(backend)
    if not quiet:
        print(f"Running PRNG self-test ({backend})")
    failed = 0
    for check in _CHECKS:
        try:
            label = check(backend)
        except AssertionError as exc:
            failed += 1
            print(f"FAILED: {check.__name__[len('_check_'):]}: {exc}", file=sys.stderr)
            continue
        if label is not None and not quiet:
            print(f"PASSED: {label}")
    if failed:
        print(f"Summary: failed={failed}", file=sys.stderr)
        return False
    if not quiet:
        print("All PRNG tests passed successfully!")
    return True


def cmd_backends() -> None:
    for name in available_backends():
        marker = " (default)" if name == DEFAULT_BACKEND else ""
        print(f"{name}{marker}")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="kprng", description="Keccak-based deterministic PRNG")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_extract = sub.add_parser("extract", help="Seed a generator and print its output stream")
    seed_group = ap_extract.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", help="Seed text (UTF-8)")
    seed_group.add_argument("--seed-hex", help="Seed as hex")
    seed_group.add_argument("--system", action="store_true", help="Seed from OS entropy")
    ap_extract.add_argument("--length", "-n", type=int, default=32, help="Bytes to extract (default 32)")
    ap_extract.add_argument(
        "--split",
        help="Comma-separated lengths; performs one extract per entry and prints each on its own line",
    )
    ap_extract.add_argument("--backend", choices=available_backends(), default=DEFAULT_BACKEND)
    ap_extract.add_argument("--raw", action="store_true", help="Write raw bytes instead of hex")

    ap_selftest = sub.add_parser("selftest", help="Run generator property checks")
    ap_selftest.add_argument("--backend", choices=available_backends(), default=DEFAULT_BACKEND)
    ap_selftest.add_argument("--quiet", help="only report failures", action="store_true")

    sub.add_parser("backends", help="List available backends")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "extract":
            cmd_extract(
                seed=args.seed,
                seed_hex=args.seed_hex,
                system=args.system,
                length=args.length,
                split=args.split,
                backend=args.backend,
                raw=args.raw,
            )
        elif args.cmd == "selftest":
            success = cmd_selftest(args.backend, quiet=args.quiet)
            sys.exit(0 if success else 1)
        elif args.cmd == "backends":
            cmd_backends()
        else:
            raise RuntimeError("Unknown command")
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (PRNGError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
