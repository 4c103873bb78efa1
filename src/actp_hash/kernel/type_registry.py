"""Type hash registry: EIP-712-style schemas with stable type hashes."""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from actp_hash.codes import ErrorCode
from .digest import Digest, digest_raw_string

if TYPE_CHECKING:
    from actp_hash.catalogue import Catalogue

LOGGER = logging.getLogger(__name__)

ABI_PRIMITIVE_TYPES = frozenset(
    ["string", "bytes", "bool", "address"]
    + [f"bytes{n}" for n in range(1, 33)]
    + [f"uint{n}" for n in range(8, 257, 8)]
    + [f"int{n}" for n in range(8, 257, 8)]
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*\Z")


class UnknownMessageTypeError(LookupError):
    """Raised when a message type identifier is not registered."""

    code = ErrorCode.UNKNOWN_MESSAGE_TYPE

    def __init__(self, message_type: str):
        super().__init__(f"Unknown message type: {message_type}")
        self.message_type = message_type


class DuplicateSchemaRegistrationError(ValueError):
    """Raised when a message type identifier is registered twice."""

    code = ErrorCode.DUPLICATE_SCHEMA_REGISTRATION


class InvalidMessageTypeError(ValueError):
    """Raised when a message type identifier is empty or not a string."""

    code = ErrorCode.INVALID_MESSAGE_TYPE


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""

    code = ErrorCode.REGISTRY_FROZEN


class FieldSpec(BaseModel):
    """One typed field of a schema. Position in the schema is part of its identity."""

    name: str
    type: str = Field(..., description="ABI primitive type, e.g. 'string', 'bytes32', 'uint256'")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Field name '{v}' must be an identifier (letters, digits, '_')")
        return v

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Only ABI primitives; struct references and arrays are not supported."""
        if v not in ABI_PRIMITIVE_TYPES:
            raise ValueError(
                f"Field type '{v}' is not an ABI primitive "
                f"(string, bytes, bool, address, bytesN, uintN, intN)"
            )
        return v


class SchemaDefinition(BaseModel):
    """A named, ordered list of typed fields."""

    name: str
    field_specs: Tuple[FieldSpec, ...]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Schema name '{v}' must be an identifier (letters, digits, '_')")
        return v

    @field_validator("field_specs")
    @classmethod
    def validate_unique_fields(cls, v: Tuple[FieldSpec, ...]) -> Tuple[FieldSpec, ...]:
        seen = set()
        duplicates = set()
        for spec in v:
            if spec.name in seen:
                duplicates.add(spec.name)
            seen.add(spec.name)
        if duplicates:
            raise ValueError(f"Duplicate field names not allowed: {sorted(duplicates)}")
        return v

    def encode_type(self) -> str:
        return encode_type(self)

    def to_eip712_types(self) -> Dict[str, List[Dict[str, str]]]:
        """EIP-712 `types` mapping, as consumed by typed-data signers."""
        return {
            self.name: [{"name": spec.name, "type": spec.type} for spec in self.field_specs]
        }


@dataclass(frozen=True)
class TypeHashEntry:
    """A registered schema with its derived type hash.

    `label` is an opaque version/registry label (e.g. "AIP-1"); it does
    not take part in hashing.
    """

    message_type: str
    definition: SchemaDefinition
    type_hash: Digest
    label: str = ""

    @property
    def type_string(self) -> str:
        return encode_type(self.definition)


def encode_type(definition: SchemaDefinition) -> str:
    """Render the type signature: Name(type1 name1,type2 name2,...)."""
    fields = ",".join(f"{spec.type} {spec.name}" for spec in definition.field_specs)
    return f"{definition.name}({fields})"


def hash_type(definition: SchemaDefinition) -> Digest:
    """Type hash: digest of the UTF-8 type signature (not canonical JSON)."""
    return digest_raw_string(encode_type(definition))


class TypeHashRegistry:
    """Message type identifier -> TypeHashEntry.

    Populated once, then frozen. A frozen registry is a read-only mapping
    and may be shared between threads without locking.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, TypeHashEntry] = {}
        self._view: Mapping[str, TypeHashEntry] = MappingProxyType(self._entries)
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register_schema(
        self, message_type: str, definition: SchemaDefinition, label: str = ""
    ) -> TypeHashEntry:
        """Derive the type hash for `definition` and store it under `message_type`.

        Args:
            message_type: External identifier, e.g. "agirails.request.v1"
            definition: Schema to register
            label: Opaque version/registry label, passed through

        Returns:
            The new TypeHashEntry

        Raises:
            RegistryFrozenError: If freeze() has been called
            InvalidMessageTypeError: If message_type is empty or not a string
            DuplicateSchemaRegistrationError: If message_type is already registered
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{message_type}': registry is frozen"
            )
        if not isinstance(message_type, str) or not message_type:
            raise InvalidMessageTypeError("message_type must be a non-empty string")
        if message_type in self._entries:
            raise DuplicateSchemaRegistrationError(
                f"Message type '{message_type}' is already registered "
                f"(as {self._entries[message_type].definition.name})"
            )

        entry = TypeHashEntry(
            message_type=message_type,
            definition=definition,
            type_hash=hash_type(definition),
            label=label,
        )
        self._entries[message_type] = entry
        LOGGER.debug("Registered %s -> %s %s", message_type, entry.type_string, entry.type_hash)
        return entry

    def freeze(self) -> "TypeHashRegistry":
        """Stop accepting registrations. Returns self."""
        if not self._frozen:
            self._frozen = True
            LOGGER.debug("Registry frozen with %d message types", len(self._view))
        return self

    def lookup(self, message_type: str) -> TypeHashEntry:
        """Get the entry for a message type identifier.

        Raises:
            UnknownMessageTypeError: If message_type is not registered
        """
        try:
            return self._view[message_type]
        except KeyError:
            raise UnknownMessageTypeError(message_type) from None

    def message_types(self) -> List[str]:
        """Registered identifiers, in registration order."""
        return list(self._view)

    def entries(self) -> List[TypeHashEntry]:
        return list(self._view.values())

    def mapping(self) -> Mapping[str, TypeHashEntry]:
        """Read-only live view of identifier -> entry."""
        return self._view

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._view

    def __len__(self) -> int:
        return len(self._view)

    @classmethod
    def from_catalogue(cls, catalogue: "Catalogue") -> "TypeHashRegistry":
        """Register every catalogue entry in order and return the frozen registry."""
        registry = cls()
        for item in catalogue.entries:
            registry.register_schema(item.message_type, item.definition, item.label)
        return registry.freeze()
