"""
kprng — deterministic expandable-output PRNG built on Keccak (SHA3-256).

Features:

- Counter-mode generator: all injected input is hashed once on flip into a
  32-byte state, then output block i is SHA3-256(state || i).
- Leftover-byte cache so any split of extract calls yields the same stream.
- Drop-in SHAKE256 sponge backend and the legacy (pre-cache) revision,
  selectable by name via kprng.backend.
- Explicit state machine: init -> inject* -> flip -> extract*, with errors
  from kprng.errors on out-of-order use or buffer overflow.
"""

from kprng.backend import (
    available_backends,
    extract,
    flip,
    from_seed,
    from_system,
    get_backend,
    init,
    inject,
    new_prng,
)
from kprng.prng import Keccak256PRNG, LegacyKeccak256PRNG, PRNGBackend
from kprng.shake import Shake256PRNG

__version__ = "0.1"

__all__ = [
    "Keccak256PRNG",
    "LegacyKeccak256PRNG",
    "PRNGBackend",
    "Shake256PRNG",
    "available_backends",
    "extract",
    "flip",
    "from_seed",
    "from_system",
    "get_backend",
    "init",
    "inject",
    "new_prng",
]
