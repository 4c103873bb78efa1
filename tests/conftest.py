"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed actp_hash package.
"""

import pytest


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def notification_schema():
    from actp_hash.kernel.type_registry import FieldSpec, SchemaDefinition

    fields = [
        ("type", "string"),
        ("version", "string"),
        ("txId", "bytes32"),
        ("cid", "string"),
        ("consumer", "string"),
        ("provider", "string"),
        ("chainId", "uint256"),
        ("timestamp", "uint256"),
        ("nonce", "uint256"),
    ]
    return SchemaDefinition(
        name="Notification",
        field_specs=tuple(FieldSpec(name=name, type=t) for name, t in fields),
    )
