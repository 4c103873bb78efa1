"""Message schema catalogue: the configuration data the type hash registry is built from.

AGIRAILS_CATALOGUE is the AIP-0 §5.2 message type registry. Each entry pins
the published type hash so drift between this table and other
implementations shows up in verify_catalogue().
"""

import json
import re
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from actp_hash.kernel.type_registry import FieldSpec, SchemaDefinition

_HEX_DIGEST = re.compile(r"^0x[0-9a-f]{64}\Z")


class CatalogueEntry(BaseModel):
    """One supported message type."""

    message_type: str  # e.g. "agirails.request.v1"
    label: str = ""  # e.g. "AIP-1"; opaque, not hashed
    definition: SchemaDefinition
    expected_type_hash: Optional[str] = Field(
        None,
        description="Published type hash (0x + 64 lowercase hex), or null if none is pinned",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("expected_type_hash")
    @classmethod
    def validate_expected_type_hash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not _HEX_DIGEST.match(v):
            raise ValueError(
                f"expected_type_hash must be '0x' + 64 lowercase hex characters, got '{v}'"
            )
        return v


class Catalogue(BaseModel):
    """Ordered list of message types."""

    format: str = "actp.catalogue"
    version: str = "1"
    entries: List[CatalogueEntry]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_unique_message_types(self):
        ids = [entry.message_type for entry in self.entries]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(
                f"Duplicate message types found: {duplicates}. "
                f"Message type identifiers must be unique within a catalogue."
            )
        return self

    def get_entry(self, message_type: str) -> Optional[CatalogueEntry]:
        for entry in self.entries:
            if entry.message_type == message_type:
                return entry
        return None

    @classmethod
    def from_json_bytes(cls, data: bytes) -> "Catalogue":
        """Load a catalogue from JSON bytes (pure, no I/O)."""
        payload = json.loads(data)
        return cls(**payload)


def load_catalogue_from_path(path: Union[str, Path]) -> Catalogue:
    """Load a catalogue from a JSON file path."""
    return Catalogue.from_json_bytes(Path(path).read_bytes())


def _schema(name: str, *fields: str) -> SchemaDefinition:
    """Build a schema from 'type name' pairs."""
    specs = []
    for item in fields:
        field_type, field_name = item.split(" ")
        specs.append(FieldSpec(name=field_name, type=field_type))
    return SchemaDefinition(name=name, field_specs=tuple(specs))


AGIRAILS_CATALOGUE = Catalogue(
    format="actp.catalogue",
    version="1",
    entries=[
        CatalogueEntry(
            message_type="agirails.notification.v1",
            label="AIP-0.1",
            definition=_schema(
                "Notification",
                "string type",
                "string version",
                "bytes32 txId",
                "string cid",
                "string consumer",
                "string provider",
                "uint256 chainId",
                "uint256 timestamp",
                "uint256 nonce",
            ),
            expected_type_hash="0xa02f2574276a8ca75bfdad3fc381f36324358b535685db9f507708ee9490c8e9",
        ),
        CatalogueEntry(
            message_type="agirails.request.v1",
            label="AIP-1",
            definition=_schema(
                "Request",
                "string version",
                "string serviceType",
                "string requestId",
                "string consumer",
                "string provider",
                "uint256 chainId",
                "bytes32 inputDataHash",
                "uint256 amount",
                "uint256 deadline",
                "uint256 disputeWindow",
                "uint256 timestamp",
                "uint256 nonce",
            ),
            expected_type_hash="0x445f1b6560f0d4302d32fa3677ce3a4130fcd347b333c333f78e2725d42b12c7",
        ),
        CatalogueEntry(
            message_type="agirails.quote.v1",
            label="AIP-2",
            definition=_schema(
                "QuoteRequest",
                "string from",
                "string to",
                "uint256 timestamp",
                "bytes32 nonce",
                "string serviceType",
                "string requirements",
                "uint256 deadline",
                "uint256 disputeWindow",
            ),
            expected_type_hash="0x3a250619f2f54b815ae7a1b3219f8a958f9cde40186233bee134b4b9d7095407",
        ),
        CatalogueEntry(
            message_type="agirails.discovery.v1",
            label="AIP-3",
            definition=_schema(
                "Discovery",
                "string from",
                "string serviceType",
                "uint256 minReputation",
                "uint256 maxPrice",
                "string requiredCapabilities",
                "uint256 chainId",
                "uint256 timestamp",
                "uint256 nonce",
            ),
            expected_type_hash="0x34e59475223edfc59d786cb2f8c921a61f2bf4cf7f64bc28b847f9448d16e7a2",
        ),
        CatalogueEntry(
            message_type="agirails.delivery.v1",
            label="AIP-4",
            definition=_schema(
                "DeliveryProof",
                "bytes32 txId",
                "string provider",
                "string consumer",
                "string resultCID",
                "bytes32 resultHash",
                "bytes32 easAttestationUID",
                "uint256 deliveredAt",
                "uint256 chainId",
                "uint256 nonce",
            ),
            expected_type_hash="0x7974f677eb16e762b690ee2ec91d75e28a770e2a1ea6fea824eddff6ea9a855b",
        ),
        CatalogueEntry(
            message_type="agirails.dispute.v1",
            label="AIP-5",
            definition=_schema(
                "Dispute",
                "bytes32 txId",
                "string consumer",
                "string provider",
                "string reason",
                "string evidenceCID",
                "bytes32 evidenceHash",
                "uint256 chainId",
                "uint256 timestamp",
                "uint256 nonce",
            ),
            expected_type_hash="0x118a9fe5aef5b766734aa976f70c90a40c4c1144c599a0405a60c18199f9ee66",
        ),
        CatalogueEntry(
            message_type="agirails.resolution.v1",
            label="AIP-6",
            definition=_schema(
                "Resolution",
                "bytes32 txId",
                "string mediator",
                "string consumer",
                "string provider",
                "string ruling",
                "uint256 consumerShare",
                "uint256 providerShare",
                "string reasoning",
                "uint256 chainId",
                "uint256 timestamp",
                "uint256 nonce",
            ),
            expected_type_hash="0x4312d59902c52428cc3c348e24d4b7b3922b50e0e2c9f8a16ee504f5ec6d1fc2",
        ),
    ],
)
