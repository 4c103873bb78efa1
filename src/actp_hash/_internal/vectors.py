"""Reference vectors for cross-implementation digest agreement.

Every implementation of the canonical form must reproduce these canonical
strings and digests byte for byte. Digests are SHA3-256, 0x-prefixed.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict

from actp_hash.kernel.canonical import canonicalize
from actp_hash.kernel.digest import digest_bytes


class ReferenceVector(BaseModel):
    """An input value with its expected canonical form and digest."""
    name: str
    description: str
    value: Any
    canonical: str
    digest: str

    model_config = ConfigDict(frozen=True)


class VectorCheck(BaseModel):
    """Result of recomputing one reference vector."""
    name: str
    canonical_ok: bool
    digest_ok: bool
    expected_digest: str
    actual_digest: str
    actual_canonical: str

    @property
    def ok(self) -> bool:
        return self.canonical_ok and self.digest_ok


REFERENCE_VECTORS: List[ReferenceVector] = [
    ReferenceVector(
        name="key_sorting",
        description="Keys sorted recursively; insertion order ignored",
        value={"z": 1, "a": 2, "m": {"y": 3, "x": 4}},
        canonical='{"a":2,"m":{"x":4,"y":3},"z":1}',
        digest="0xb848ad1ba24cced1a1b835adfd3164d77b3fcb4e11eacc18d313d529aca02e81",
    ),
    ReferenceVector(
        name="number_formatting",
        description="Integer stays integral; float cut to 18 fractional digits",
        value={"integer": 42, "float": 3.14159265358979323846},
        canonical='{"float":3.141592653589793116,"integer":42}',
        digest="0xcfb6b25ad4c7d62a3d1c3c2f252e075146eed757a57985205ab15053558d330b",
    ),
    ReferenceVector(
        name="rounding_tie",
        description="2**-19 = 0.0000019073486328125 rounds half away from zero at digit 18",
        value={"tie": 2.0 ** -19},
        canonical='{"tie":0.000001907348632813}',
        digest="0x7df22e4f1f6d5b33d4c980b2260d0a0eefe11b10d756350a5448e396bbac6081",
    ),
    ReferenceVector(
        name="unicode_escaping",
        description="Minimal escaping; non-ASCII emitted as literal UTF-8",
        value={"name": "caf\u00e9", "emoji": "\U0001F600", "ctl": "a\u0001b\n\t\"\\"},
        canonical='{"ctl":"a\\u0001b\\n\\t\\"\\\\","emoji":"\U0001F600","name":"caf\u00e9"}',
        digest="0xd861f7937098c27c3cb0465571f5390658628fae9945d7318c2edbcfd8be039e",
    ),
    ReferenceVector(
        name="nfc_normalization",
        description="Decomposed 'e' + U+0301 hashes as precomposed U+00E9",
        value={"name": "cafe\u0301"},
        canonical='{"name":"caf\u00e9"}',
        digest="0x21de7aca15ad99c81235a3afa6c80875bc8583ced5d534cd771c84e4c98802a9",
    ),
    ReferenceVector(
        name="mixed_list",
        description="Lists keep order; every scalar kind",
        value={"b": {}, "a": [1, 2.5, -3, None, True, False, "x"]},
        canonical='{"a":[1,2.5,-3,null,true,false,"x"],"b":{}}',
        digest="0x3626bc1016e159619014eaf774c0dbe0830847ab3ef53500aeded5184345cd7d",
    ),
    ReferenceVector(
        name="empty_object",
        description="Empty mapping",
        value={},
        canonical="{}",
        digest="0x840eb7aa2a9935de63366bacbe9d97e978a859e93dc792a0334de60ed52f8e99",
    ),
    ReferenceVector(
        name="empty_list",
        description="Empty list",
        value=[],
        canonical="[]",
        digest="0xca4510738395af1429224dd785675309c344b2b549632e20275c69b15ed1d210",
    ),
    ReferenceVector(
        name="null",
        description="Top-level null",
        value=None,
        canonical="null",
        digest="0x3ea445410f608e6453cdcb7dbe42d57a89aca018993d7e87da85993cbccc6308",
    ),
    ReferenceVector(
        name="minimal_request",
        description="AIP-1 minimal valid request metadata",
        value={
            "version": "1.0.0",
            "serviceType": "text-generation",
            "requestId": "req_min_001",
            "consumer": "did:ethr:84532:0x1234567890123456789012345678901234567890",
            "provider": "did:ethr:84532:0x0987654321098765432109876543210987654321",
            "chainId": 84532,
            "inputData": {"prompt": "Hello world"},
            "paymentTerms": {
                "amount": "50000",
                "currency": "USDC",
                "decimals": 6,
                "deadline": 1732000000,
                "disputeWindow": 3600,
            },
            "timestamp": 1731700000,
        },
        canonical=(
            '{"chainId":84532,'
            '"consumer":"did:ethr:84532:0x1234567890123456789012345678901234567890",'
            '"inputData":{"prompt":"Hello world"},'
            '"paymentTerms":{"amount":"50000","currency":"USDC","deadline":1732000000,'
            '"decimals":6,"disputeWindow":3600},'
            '"provider":"did:ethr:84532:0x0987654321098765432109876543210987654321",'
            '"requestId":"req_min_001","serviceType":"text-generation",'
            '"timestamp":1731700000,"version":"1.0.0"}'
        ),
        digest="0x4969f2a08b14d7895599e137a17caed80b28c777e3f23d7ca47c83ad3bf5ec69",
    ),
    ReferenceVector(
        name="cross_language_request",
        description="Request metadata shared by the TypeScript, Python, Go, Rust and Java suites",
        value={
            "version": "1.0.0",
            "serviceType": "text-generation",
            "requestId": "req_cross_lang_001",
            "consumer": "did:ethr:84532:0x1234567890123456789012345678901234567890",
            "provider": "did:ethr:84532:0x0987654321098765432109876543210987654321",
            "chainId": 84532,
            "inputData": {"prompt": "Hello"},
            "paymentTerms": {
                "amount": "1000000",
                "currency": "USDC",
                "decimals": 6,
                "deadline": 1732000000,
                "disputeWindow": 3600,
            },
            "timestamp": 1731700000,
        },
        canonical=(
            '{"chainId":84532,'
            '"consumer":"did:ethr:84532:0x1234567890123456789012345678901234567890",'
            '"inputData":{"prompt":"Hello"},'
            '"paymentTerms":{"amount":"1000000","currency":"USDC","deadline":1732000000,'
            '"decimals":6,"disputeWindow":3600},'
            '"provider":"did:ethr:84532:0x0987654321098765432109876543210987654321",'
            '"requestId":"req_cross_lang_001","serviceType":"text-generation",'
            '"timestamp":1731700000,"version":"1.0.0"}'
        ),
        digest="0xf769c6c0e3c3c914e1a2b192e853170e250861328c39dbe96b254affd75c1b46",
    ),
]


def check_vectors(vectors: List[ReferenceVector] = REFERENCE_VECTORS) -> List[VectorCheck]:
    """Recompute canonical form and digest for each vector."""
    results = []
    for vector in vectors:
        canonical = canonicalize(vector.value)
        actual = digest_bytes(canonical.encode("utf-8")).hex()
        results.append(
            VectorCheck(
                name=vector.name,
                canonical_ok=canonical == vector.canonical,
                digest_ok=actual == vector.digest,
                expected_digest=vector.digest,
                actual_digest=actual,
                actual_canonical=canonical,
            )
        )
    return results
