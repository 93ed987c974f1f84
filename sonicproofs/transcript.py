"""Fiat-Shamir transcripts built on a rolling hash."""

from __future__ import annotations

import hashlib
from typing import Callable, Protocol, Type

from Crypto.Hash import keccak

from .field import Fr

_MAX_NONCE = 0xFFFFFFFF


class Hasher(Protocol):
    def update(self, data: bytes) -> None: ...

    def finalize(self) -> bytes: ...


class BlakeHasher:
    """BLAKE2s with a 32-byte digest, primed with a personalization prefix."""

    def __init__(self, personalization: bytes = b"") -> None:
        self._state = hashlib.blake2s(digest_size=32)
        self._state.update(personalization)

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        """Return the digest and start over with an empty state."""
        digest = self._state.digest()
        self._state = hashlib.blake2s(digest_size=32)
        return digest


class Keccak256Hasher:
    """Keccak-256, primed with a personalization prefix."""

    def __init__(self, personalization: bytes = b"") -> None:
        self._state = keccak.new(digest_bits=256)
        self._state.update(personalization)

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        """Return the digest and start over with an empty state."""
        digest = self._state.digest()
        self._state = keccak.new(digest_bits=256)
        return digest


class RollingHashTranscript:
    """A transcript whose state is the hash of everything committed so far."""

    def __init__(
        self,
        personalization: bytes = b"",
        hasher: Callable[[bytes], Hasher] = Keccak256Hasher,
    ) -> None:
        self._hasher = hasher
        self._buffer = hasher(personalization).finalize()

    @property
    def state(self) -> bytes:
        return self._buffer

    def commit_bytes(self, personalization: bytes, data: bytes) -> None:
        h = self._hasher(b"")
        h.update(self._buffer)
        h.update(personalization)
        h.update(data)
        self._buffer = h.finalize()

    def get_challenge_bytes(self, nonce: bytes) -> bytes:
        """Derive challenge bytes for nonce without changing the transcript."""
        h = self._hasher(b"")
        h.update(self._buffer)
        h.update(nonce)
        return h.finalize()

    def commit_point(self, point: Fr) -> None:
        self.commit_bytes(b"point", point.to_bytes())

    def commit_scalar(self, scalar: Fr) -> None:
        self.commit_bytes(b"scalar", scalar.to_bytes())

    def get_challenge_scalar(self, field: Type[Fr] = Fr) -> Fr:
        """Sample a field element by rejection over 32-bit big-endian nonces.

        Each attempt reads as many leading challenge bytes as the field's bit
        width needs and keeps the first value that lies in the field.
        """
        width = (field.NUM_BITS + 7) // 8
        nonce = 0
        while True:
            challenge = self.get_challenge_bytes(nonce.to_bytes(4, "big"))
            candidate = int.from_bytes(challenge[:width], "big")
            try:
                return field.from_repr(candidate)
            except ValueError:
                pass
            if nonce == _MAX_NONCE:
                raise RuntimeError("can not make challenge scalar")
            nonce += 1


class Transcript(RollingHashTranscript):
    """The default transcript, hashing with Keccak-256."""

    def __init__(self, personalization: bytes = b"") -> None:
        super().__init__(personalization, Keccak256Hasher)