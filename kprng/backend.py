from __future__ import annotations

import os
from typing import Dict, List, Optional, Type

from .constants import DEFAULT_BACKEND, SYSTEM_SEED_SIZE
from .errors import InvalidArgumentError
from .prng import Keccak256PRNG, LegacyKeccak256PRNG, PRNGBackend
from .shake import Shake256PRNG


_BACKENDS: Dict[str, Type[PRNGBackend]] = {
    cls.name: cls for cls in (Keccak256PRNG, Shake256PRNG, LegacyKeccak256PRNG)
}


def available_backends() -> List[str]:
    return list(_BACKENDS)


def get_backend(name: str) -> Type[PRNGBackend]:
    try:
        return _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown PRNG backend {name!r} (choose from: {', '.join(_BACKENDS)})"
        ) from None


def new_prng(backend: str = DEFAULT_BACKEND) -> PRNGBackend:
    """Return a fresh generator of the named backend, ready for inject."""
    return get_backend(backend)()


def from_seed(seed: bytes, backend: str = DEFAULT_BACKEND) -> PRNGBackend:
    """Return a generator seeded with ``seed`` and already flipped."""
    ctx = new_prng(backend)
    ctx.inject(seed)
    ctx.flip()
    return ctx


def from_system(backend: str = DEFAULT_BACKEND, seed_size: int = SYSTEM_SEED_SIZE) -> PRNGBackend:
    """Return a generator seeded from OS entropy and already flipped."""
    return from_seed(os.urandom(seed_size), backend=backend)


# -------- Procedural context API --------

def _require(ctx: Optional[PRNGBackend]) -> PRNGBackend:
    if ctx is None:
        raise InvalidArgumentError("PRNG context is None")
    if not isinstance(ctx, PRNGBackend):
        raise InvalidArgumentError(f"Not a PRNG context: {type(ctx).__name__}")
    return ctx


def init(ctx: Optional[PRNGBackend]) -> None:
    _require(ctx).init()


def inject(ctx: Optional[PRNGBackend], data: bytes) -> None:
    _require(ctx).inject(data)


def flip(ctx: Optional[PRNGBackend]) -> None:
    _require(ctx).flip()


def extract(ctx: Optional[PRNGBackend], length: int) -> bytes:
    return _require(ctx).extract(length)
