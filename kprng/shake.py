from __future__ import annotations

from Cryptodome.Hash import SHAKE256

from .constants import BACKEND_SHAKE256
from .errors import InvalidStateError
from .prng import PRNGBackend, _as_bytes, _as_length


class Shake256PRNG(PRNGBackend):
    """SHAKE256 sponge used directly as a PRNG.

    inject absorbs, flip pads and switches the sponge to squeezing, extract
    squeezes. The sponge streams its input, so there is no capacity limit.
    """

    name = BACKEND_SHAKE256

    def __init__(self):
        self.init()

    def init(self) -> None:
        self._xof = SHAKE256.new()
        self.finalized = False

    def inject(self, data: bytes) -> None:
        data = _as_bytes(data)
        if self.finalized:
            raise InvalidStateError("inject called after flip")
        self._xof.update(data)

    def flip(self) -> None:
        if self.finalized:
            raise InvalidStateError("flip called twice")
        self.finalized = True

    def extract(self, length: int) -> bytes:
        if not self.finalized:
            raise InvalidStateError("extract called before flip")
        length = _as_length(length)
        if length == 0:
            return b""
        return self._xof.read(length)
