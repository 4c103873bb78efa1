"""Public API for actp_hash.

High-level functions over the kernel: canonical digests of metadata values,
type hash lookups against the process-wide registry, and verification
results for comparing against values computed elsewhere.
"""

import logging
from threading import Lock
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from actp_hash.catalogue import AGIRAILS_CATALOGUE, Catalogue
from actp_hash.codes import ErrorCode
from actp_hash.kernel.canonical import StructuredValue, canonical_bytes, canonicalize
from actp_hash.kernel.digest import Digest, digest_bytes, digest_raw_string, digest_value
from actp_hash.kernel.type_registry import TypeHashEntry, TypeHashRegistry

LOGGER = logging.getLogger(__name__)

_registry: Optional[TypeHashRegistry] = None
_registry_lock = Lock()


class DigestCheck(BaseModel):
    """Result of comparing a value's digest with an expected digest."""
    ok: bool
    code: Optional[ErrorCode] = None  # DIGEST_MISMATCH when not ok
    expected: str
    actual: str
    canonical: str  # what was hashed, for diffing against the other side


class TypeHashCheck(BaseModel):
    """Derived vs. pinned type hash for one message type."""
    message_type: str
    label: str
    type_string: str
    expected: Optional[str] = None  # None when the catalogue pins no hash
    actual: str
    ok: bool


class CatalogueCheck(BaseModel):
    """Result of recomputing every type hash in a catalogue."""
    ok: bool
    checks: List[TypeHashCheck] = Field(default_factory=list)
    mismatched: List[str] = Field(default_factory=list)  # message types, catalogue order
    code: Optional[ErrorCode] = None  # TYPE_HASH_MISMATCH when not ok


def get_registry() -> TypeHashRegistry:
    """Process-wide registry built from AGIRAILS_CATALOGUE.

    Built on first use, exactly once, then frozen. Every caller gets the
    same read-only instance.
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = TypeHashRegistry.from_catalogue(AGIRAILS_CATALOGUE)
                LOGGER.info("Type hash registry initialized (%d message types)", len(_registry))
    return _registry


def lookup(message_type: str) -> TypeHashEntry:
    """Registry entry for a message type identifier.

    Raises:
        UnknownMessageTypeError: If the identifier is not registered
    """
    return get_registry().lookup(message_type)


def get_type_hash(message_type: str) -> str:
    """0x-prefixed type hash for a message type identifier."""
    return lookup(message_type).type_hash.hex()


def get_message_types(message_type: str) -> Dict[str, List[Dict[str, str]]]:
    """EIP-712 `types` mapping for a message type identifier."""
    return lookup(message_type).definition.to_eip712_types()


def hash_metadata(value: StructuredValue) -> str:
    """0x-prefixed digest of the canonical form of `value`."""
    return digest_value(value).hex()


def verify_digest(value: StructuredValue, expected: str) -> DigestCheck:
    """Recompute the digest of `value` and compare it with `expected`.

    A mismatch is reported in the result, not raised. Malformed input
    still raises (CanonicalizationError), and so does a malformed
    `expected` (ValueError).
    """
    expected_digest = Digest.from_hex(expected)
    canonical = canonicalize(value)
    actual = digest_bytes(canonical.encode("utf-8"))
    ok = actual == expected_digest
    return DigestCheck(
        ok=ok,
        code=None if ok else ErrorCode.DIGEST_MISMATCH,
        expected=expected_digest.hex(),
        actual=actual.hex(),
        canonical=canonical,
    )


def verify_catalogue(catalogue: Optional[Catalogue] = None) -> CatalogueCheck:
    """Recompute every type hash of `catalogue` (default: AGIRAILS) against its pinned hashes.

    Raises:
        DuplicateSchemaRegistrationError: Propagated if the catalogue repeats an identifier
    """
    catalogue = catalogue if catalogue is not None else AGIRAILS_CATALOGUE
    registry = TypeHashRegistry.from_catalogue(catalogue)

    checks = []
    for item in catalogue.entries:
        entry = registry.lookup(item.message_type)
        actual = entry.type_hash.hex()
        expected = item.expected_type_hash
        checks.append(
            TypeHashCheck(
                message_type=item.message_type,
                label=item.label,
                type_string=entry.type_string,
                expected=expected,
                actual=actual,
                ok=expected is None or expected == actual,
            )
        )

    mismatched = [check.message_type for check in checks if not check.ok]
    for message_type in mismatched:
        LOGGER.warning("Type hash mismatch for %s", message_type)
    return CatalogueCheck(
        ok=not mismatched,
        checks=checks,
        mismatched=mismatched,
        code=ErrorCode.TYPE_HASH_MISMATCH if mismatched else None,
    )


__all__ = [
    "DigestCheck",
    "TypeHashCheck",
    "CatalogueCheck",
    "get_registry",
    "lookup",
    "get_type_hash",
    "get_message_types",
    "hash_metadata",
    "verify_digest",
    "verify_catalogue",
    "canonicalize",
    "canonical_bytes",
    "digest_value",
    "digest_raw_string",
]
