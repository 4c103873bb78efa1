"""Error code constants for actp_hash.

These constants prevent stringly-typed error codes and let callers
branch on the failure kind without parsing messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error and mismatch codes."""

    # Canonicalization (fatal)
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    NON_FINITE_NUMBER = "NON_FINITE_NUMBER"
    DUPLICATE_KEY = "DUPLICATE_KEY"

    # Registry (fatal)
    UNKNOWN_MESSAGE_TYPE = "UNKNOWN_MESSAGE_TYPE"
    INVALID_MESSAGE_TYPE = "INVALID_MESSAGE_TYPE"
    DUPLICATE_SCHEMA_REGISTRATION = "DUPLICATE_SCHEMA_REGISTRATION"
    REGISTRY_FROZEN = "REGISTRY_FROZEN"

    # Verification results (reported, not raised)
    TYPE_HASH_MISMATCH = "TYPE_HASH_MISMATCH"
    DIGEST_MISMATCH = "DIGEST_MISMATCH"
