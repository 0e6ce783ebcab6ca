"""Storage Adapter: typed per-field accessors over the compound-key store.

Invariants:
    - Absent slots read as zero values (0, b"", "", ZERO_ADDRESS)
    - Note fields keyed by owner (20 bytes) ++ note id (32 bytes big-endian)
    - Account fields keyed by the 20-byte account
    - No validation here; the repository enforces every invariant

Design Decisions:
    - uint256 values stored as 32-byte big-endian words, strings as UTF-8
    - has_encryption_key() distinguishes "never written" from "written empty";
      auto-registration depends on it
"""

from secure_notes.core.domain_types import (
    ADDRESS_LENGTH, WORD_SIZE, ZERO_ADDRESS, Address, StorageField,
)
from secure_notes.core.repository_protocols import KeyValueStore


def note_key(owner: Address, note_id: int) -> bytes:
    return bytes(owner) + note_id.to_bytes(WORD_SIZE, "big")


def _encode_uint(value: int) -> bytes:
    return value.to_bytes(WORD_SIZE, "big")


def _decode_uint(raw: bytes | None) -> int:
    return int.from_bytes(raw, "big") if raw else 0


class NoteStorage:
    """Typed get/set for note and account fields."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    # ─── Note fields ─────────────────────────────────────────────

    async def get_note_id(self, owner: Address, note_id: int) -> int:
        return _decode_uint(await self._store.get(
            StorageField.NOTE_ID, note_key(owner, note_id),
        ))

    async def set_note_id(self, owner: Address, note_id: int, value: int) -> None:
        await self._store.set(
            StorageField.NOTE_ID, note_key(owner, note_id), _encode_uint(value),
        )

    async def get_owner(self, owner: Address, note_id: int) -> Address:
        raw = await self._store.get(StorageField.NOTE_OWNER, note_key(owner, note_id))
        if not raw or len(raw) != ADDRESS_LENGTH:
            return ZERO_ADDRESS
        return Address(raw)

    async def set_owner(self, owner: Address, note_id: int, value: Address) -> None:
        await self._store.set(
            StorageField.NOTE_OWNER, note_key(owner, note_id), bytes(value),
        )

    async def get_content(self, owner: Address, note_id: int) -> bytes:
        return await self._store.get(
            StorageField.NOTE_CONTENT, note_key(owner, note_id),
        ) or b""

    async def set_content(self, owner: Address, note_id: int, value: bytes) -> None:
        await self._store.set(
            StorageField.NOTE_CONTENT, note_key(owner, note_id), bytes(value),
        )

    async def get_timestamp(self, owner: Address, note_id: int) -> int:
        return _decode_uint(await self._store.get(
            StorageField.NOTE_TIMESTAMP, note_key(owner, note_id),
        ))

    async def set_timestamp(self, owner: Address, note_id: int, value: int) -> None:
        await self._store.set(
            StorageField.NOTE_TIMESTAMP, note_key(owner, note_id), _encode_uint(value),
        )

    async def get_title(self, owner: Address, note_id: int) -> str:
        raw = await self._store.get(StorageField.NOTE_TITLE, note_key(owner, note_id))
        return raw.decode("utf-8") if raw else ""

    async def set_title(self, owner: Address, note_id: int, value: str) -> None:
        await self._store.set(
            StorageField.NOTE_TITLE, note_key(owner, note_id), value.encode("utf-8"),
        )

    # ─── Account fields ──────────────────────────────────────────

    async def get_note_count(self, account: Address) -> int:
        return _decode_uint(await self._store.get(StorageField.NOTE_COUNT, bytes(account)))

    async def set_note_count(self, account: Address, value: int) -> None:
        await self._store.set(StorageField.NOTE_COUNT, bytes(account), _encode_uint(value))

    async def get_encryption_key(self, account: Address) -> bytes:
        return await self._store.get(StorageField.ENCRYPTION_KEY, bytes(account)) or b""

    async def set_encryption_key(self, account: Address, value: bytes) -> None:
        await self._store.set(StorageField.ENCRYPTION_KEY, bytes(account), bytes(value))

    async def has_encryption_key(self, account: Address) -> bool:
        """True once the key slot was written, even with an empty value."""
        return await self._store.get(StorageField.ENCRYPTION_KEY, bytes(account)) is not None

    def locked(self, account: Address):
        """Serialize mutations of one account for the rest of the invocation."""
        return self._store.locked(bytes(account))
