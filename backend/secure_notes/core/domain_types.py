"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - Address is always exactly ADDRESS_LENGTH (20) raw bytes
    - Note ids and note counts stay within the uint256 range [0, 2**256)
    - Absent values are represented by zero values (ZERO_ADDRESS, 0, b"", "")
    - All valid event kinds and storage fields encoded as Enums

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Address as bytes, hex only at the boundary (parse_address / address_to_hex)
    - CallContext is the single carrier of host-supplied identity; no operation
      reads the caller from payload data
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NewType

from secure_notes.core.errors import InvalidAddressError, InvalidArgumentError


# ─── Sizes ───────────────────────────────────────────────────────

ADDRESS_LENGTH = 20
WORD_SIZE = 32
UINT256_MAX = 2**256 - 1


# ─── Identity Types ──────────────────────────────────────────────

Address = NewType("Address", bytes)

ZERO_ADDRESS = Address(bytes(ADDRESS_LENGTH))

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def parse_address(value: str) -> Address:
    """Parse a 0x-prefixed 40-hex-digit string into an Address."""
    if not isinstance(value, str) or not _ADDRESS_PATTERN.match(value):
        raise InvalidAddressError(str(value))
    return Address(bytes.fromhex(value[2:]))


def address_to_hex(address: bytes) -> str:
    return "0x" + address.hex()


def as_uint256(value: int, name: str = "value") -> int:
    """Check that an int fits in uint256. Returns it unchanged."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer", name)
    if value < 0 or value > UINT256_MAX:
        raise InvalidArgumentError(f"{name} out of uint256 range", name)
    return value


# ─── Enums ───────────────────────────────────────────────────────

class EventKind(str, Enum):
    """The four state transitions recorded in the event log."""
    USER_REGISTERED = "UserRegistered"
    NOTE_CREATED = "NoteCreated"
    NOTE_UPDATED = "NoteUpdated"
    NOTE_DELETED = "NoteDeleted"


class StorageField(str, Enum):
    """Logical tables of the key-value store.

    Note fields are keyed by (owner, note id); account fields by the account.
    """
    NOTE_ID = "note_id"
    NOTE_OWNER = "note_owner"
    NOTE_CONTENT = "note_content"
    NOTE_TIMESTAMP = "note_timestamp"
    NOTE_TITLE = "note_title"
    NOTE_COUNT = "note_count"
    ENCRYPTION_KEY = "encryption_key"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CallContext:
    """Host-supplied context for one invocation."""
    caller: Address
    block_timestamp: int
    contract_address: Address


@dataclass
class Note:
    """A stored note. encrypted_content carries the owner prefix."""
    id: int
    owner: Address
    encrypted_content: bytes
    timestamp: int
    title: str


@dataclass(frozen=True)
class NoteView:
    """A decrypted note as returned to its owner."""
    id: int
    title: str
    content: str
    timestamp: int


NOT_FOUND_VIEW = NoteView(id=0, title="", content="Note does not exist", timestamp=0)
