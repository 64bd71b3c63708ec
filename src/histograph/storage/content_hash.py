"""SHA-256 content hashes used as object keys."""

import hashlib

from .errors import MalformedObject


class ContentHash:
    """
    A 256-bit SHA-256 digest.

    Equality and hashing use the raw bytes. The canonical key string is the
    lowercase hex of the digest.
    """

    SIZE = 32

    __slots__ = ("_digest",)

    def __init__(self, digest: bytes):
        digest = bytes(digest)
        if len(digest) != self.SIZE:
            raise MalformedObject("hash", f"expected {self.SIZE} bytes, got {len(digest)}")
        self._digest = digest

    @classmethod
    def compute(cls, content: bytes) -> "ContentHash":
        """Hash content. Pure; a fresh digest context is used per call."""
        return cls(hashlib.sha256(content).digest())

    @classmethod
    def from_key_string(cls, key: str) -> "ContentHash":
        """Parse the canonical hex form produced by to_key_string()."""
        if len(key) != cls.SIZE * 2 or key != key.lower():
            raise MalformedObject("hash", f"not a canonical key string: {key!r}")
        try:
            return cls(bytes.fromhex(key))
        except ValueError as e:
            raise MalformedObject("hash", f"not a canonical key string: {key!r}") from e

    @property
    def digest(self) -> bytes:
        return self._digest

    def to_key_string(self) -> str:
        return self._digest.hex()

    def __bytes__(self) -> bytes:
        return self._digest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentHash):
            return NotImplemented
        return self._digest == other._digest

    def __hash__(self) -> int:
        return hash(self._digest)

    def __str__(self) -> str:
        return self.to_key_string()

    def __repr__(self) -> str:
        return f"ContentHash({self.to_key_string()})"
