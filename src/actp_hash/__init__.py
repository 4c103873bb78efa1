"""actp_hash: canonical metadata digests and EIP-712 type hashes for AGIRAILS messages."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("actp-hash")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from actp_hash.api import (
    get_registry,
    lookup,
    get_type_hash,
    get_message_types,
    hash_metadata,
    verify_digest,
    verify_catalogue,
    DigestCheck,
    CatalogueCheck,
)
from actp_hash.codes import ErrorCode
from actp_hash.kernel.canonical import (
    canonicalize,
    canonical_bytes,
    CanonicalizationError,
    UnsupportedTypeError,
    NonFiniteNumberError,
    DuplicateKeyError,
)
from actp_hash.kernel.digest import Digest, digest_value, digest_raw_string
from actp_hash.kernel.type_registry import (
    FieldSpec,
    SchemaDefinition,
    TypeHashEntry,
    TypeHashRegistry,
    UnknownMessageTypeError,
    DuplicateSchemaRegistrationError,
    InvalidMessageTypeError,
    RegistryFrozenError,
)

__all__ = [
    "__version__",
    # Canonical digests
    "canonicalize",
    "canonical_bytes",
    "digest_value",
    "digest_raw_string",
    "hash_metadata",
    "verify_digest",
    "Digest",
    "DigestCheck",
    # Type hashes
    "FieldSpec",
    "SchemaDefinition",
    "TypeHashEntry",
    "TypeHashRegistry",
    "get_registry",
    "lookup",
    "get_type_hash",
    "get_message_types",
    "verify_catalogue",
    "CatalogueCheck",
    # Errors
    "ErrorCode",
    "CanonicalizationError",
    "UnsupportedTypeError",
    "NonFiniteNumberError",
    "DuplicateKeyError",
    "UnknownMessageTypeError",
    "InvalidMessageTypeError",
    "DuplicateSchemaRegistrationError",
    "RegistryFrozenError",
]
