"""Digest computation over canonical bytes.

The hash primitive is SHA3-256 (FIPS 202). The published AGIRAILS type
hashes are SHA3-256 digests of their type signatures; any change here
breaks agreement with every other implementation.
"""

import hashlib
from dataclasses import dataclass

from .canonical import StructuredValue, canonical_bytes

DIGEST_SIZE = 32


@dataclass(frozen=True)
class Digest:
    """A 32-byte hash value. Equality is byte-wise."""

    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes):
            raise ValueError(f"Digest must be bytes, got {type(self.raw).__name__}")
        if len(self.raw) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(self.raw)}")

    def hex(self) -> str:
        """0x-prefixed lowercase hex (66 characters)."""
        return "0x" + self.raw.hex()

    def __str__(self) -> str:
        return self.hex()

    def __bytes__(self) -> bytes:
        return self.raw

    @classmethod
    def from_hex(cls, text: str) -> "Digest":
        """Parse a reference digest, with or without the 0x prefix."""
        if text.startswith(("0x", "0X")):
            text = text[2:]
        if len(text) != DIGEST_SIZE * 2:
            raise ValueError(
                f"Digest hex must be {DIGEST_SIZE * 2} characters, got {len(text)}"
            )
        return cls(bytes.fromhex(text))


def digest_bytes(data: bytes) -> Digest:
    return Digest(hashlib.sha3_256(data).digest())


def digest_raw_string(s: str) -> Digest:
    """Hash a pre-formatted string (e.g. a type signature) as UTF-8, unnormalized."""
    return digest_bytes(s.encode("utf-8"))


def digest_value(value: StructuredValue) -> Digest:
    """Hash the canonical form of a JSON-like value.

    Raises:
        CanonicalizationError: propagated from canonicalize()
    """
    return digest_bytes(canonical_bytes(value))
