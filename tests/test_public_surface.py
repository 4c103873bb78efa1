"""Test public API surface - ensure imports work correctly and no side effects.

This test verifies:
- actp_hash.api exposes the hashing and lookup functions
- Root package re-exports match the api module
- Importing the package does not build the registry
"""

import types


def test_api_exports_core_functions():
    from actp_hash.api import (
        get_type_hash,
        hash_metadata,
        lookup,
        verify_catalogue,
        verify_digest,
    )

    for func in (get_type_hash, hash_metadata, lookup, verify_catalogue, verify_digest):
        assert isinstance(func, types.FunctionType)


def test_root_reexports_are_the_api_functions():
    import actp_hash
    import actp_hash.api

    assert actp_hash.hash_metadata is actp_hash.api.hash_metadata
    assert actp_hash.get_type_hash is actp_hash.api.get_type_hash
    assert actp_hash.canonicalize is actp_hash.api.canonicalize


def test_all_names_resolve():
    import actp_hash
    import actp_hash.api

    for name in actp_hash.__all__:
        assert hasattr(actp_hash, name), name
    for name in actp_hash.api.__all__:
        assert hasattr(actp_hash.api, name), name


def test_internal_modules_not_exported():
    import actp_hash

    assert "REFERENCE_VECTORS" not in actp_hash.__all__
    assert "cli" not in actp_hash.__all__
    assert "AGIRAILS_CATALOGUE" not in actp_hash.__all__


def test_version_string():
    import actp_hash

    assert actp_hash.__version__ in ("1.0.0", "dev")


def test_root_hash_metadata_works():
    import actp_hash

    assert actp_hash.hash_metadata({"b": 2, "a": 1}) == actp_hash.digest_value({"a": 1, "b": 2}).hex()
