"""Note Repository: per-account CRUD with swap-to-last compaction.

Invariants:
    - Every operation takes the acting caller explicitly; a caller only ever
      addresses notes stored under its own account
    - Live ids are exactly range(count); delete moves at most the last note
    - A note is visible only when id < count AND its stored owner == caller
    - Not-found reads return NOT_FOUND_VIEW; not-found update/delete are no-ops
    - create/update/delete auto-register the caller once (one UserRegistered)
    - Every mutation holds the caller's account lock from first read to last write

Design Decisions:
    - Stateless: all state lives behind NoteStorage, so tests inject in-memory fakes
    - Decrypt failures on read/list become their marker string, never exceptions
    - ensure_registered() and _store() assume the caller already holds the lock
"""

import logging

from secure_notes.core import cipher
from secure_notes.core.domain_types import (
    NOT_FOUND_VIEW, ZERO_ADDRESS, Address, Note, NoteView, address_to_hex,
)
from secure_notes.core.errors import CipherError
from secure_notes.core.note_layout import is_live, plan_removal
from secure_notes.services.event_emitter import EventEmitter
from secure_notes.services.storage_adapter import NoteStorage

logger = logging.getLogger(__name__)


class NoteRepository:
    """Encrypted note CRUD over NoteStorage, emitting through EventEmitter."""

    def __init__(self, storage: NoteStorage, emitter: EventEmitter):
        self._storage = storage
        self._emitter = emitter

    # ─── Registration & keys ─────────────────────────────────────

    async def register(self, caller: Address, key: bytes) -> None:
        """Store key if non-empty. Always emits UserRegistered."""
        async with self._storage.locked(caller):
            if key:
                await self._storage.set_encryption_key(caller, key)
            await self._emitter.user_registered(caller)

    async def ensure_registered(self, caller: Address) -> None:
        """Write the empty key marker and emit once for a never-seen caller."""
        if await self._storage.has_encryption_key(caller):
            return
        await self._storage.set_encryption_key(caller, b"")
        await self._emitter.user_registered(caller)

    async def set_encryption_key(self, caller: Address, key: bytes) -> None:
        async with self._storage.locked(caller):
            await self._storage.set_encryption_key(caller, key)
        logger.info(
            "Encryption key replaced", extra={"caller": address_to_hex(caller)},
        )

    # ─── Cipher with the caller's current key ────────────────────

    async def encrypt_for(self, caller: Address, plaintext: str) -> bytes:
        stored_key = await self._storage.get_encryption_key(caller)
        return cipher.encrypt(caller, stored_key, plaintext)

    async def decrypt_for(self, caller: Address, ciphertext: bytes) -> str:
        """Raises CipherError when the data is malformed, foreign or garbled."""
        stored_key = await self._storage.get_encryption_key(caller)
        return cipher.decrypt(caller, stored_key, ciphertext)

    async def _decrypt_or_marker(self, caller: Address, ciphertext: bytes) -> str:
        try:
            return await self.decrypt_for(caller, ciphertext)
        except CipherError as e:
            logger.warning(
                f"Stored note failed to decrypt: {e.code}",
                extra={"caller": address_to_hex(caller), "error_code": e.code},
            )
            return e.marker

    # ─── Persistence helpers ─────────────────────────────────────

    async def _store(self, slot: int, note: Note) -> None:
        owner = note.owner
        await self._storage.set_note_id(owner, slot, note.id)
        await self._storage.set_owner(owner, slot, note.owner)
        await self._storage.set_content(owner, slot, note.encrypted_content)
        await self._storage.set_timestamp(owner, slot, note.timestamp)
        await self._storage.set_title(owner, slot, note.title)

    async def load(self, caller: Address, note_id: int) -> Note | None:
        """Load a live note owned by caller, or None."""
        count = await self._storage.get_note_count(caller)
        if not is_live(note_id, count):
            return None
        owner = await self._storage.get_owner(caller, note_id)
        if owner == ZERO_ADDRESS or owner != caller:
            return None
        return Note(
            id=note_id,
            owner=owner,
            encrypted_content=await self._storage.get_content(caller, note_id),
            timestamp=await self._storage.get_timestamp(caller, note_id),
            title=await self._storage.get_title(caller, note_id),
        )

    # ─── CRUD ────────────────────────────────────────────────────

    async def count(self, caller: Address) -> int:
        return await self._storage.get_note_count(caller)

    async def create(
        self, caller: Address, title: str, plaintext: str, timestamp: int,
    ) -> int:
        async with self._storage.locked(caller):
            await self.ensure_registered(caller)
            encrypted = await self.encrypt_for(caller, plaintext)
            note_id = await self._storage.get_note_count(caller)
            await self._store(note_id, Note(
                id=note_id, owner=caller, encrypted_content=encrypted,
                timestamp=timestamp, title=title,
            ))
            await self._storage.set_note_count(caller, note_id + 1)
            await self._emitter.note_created(caller, note_id, title)
            return note_id

    async def read(self, caller: Address, note_id: int) -> NoteView:
        note = await self.load(caller, note_id)
        if note is None:
            return NOT_FOUND_VIEW
        return NoteView(
            id=note.id,
            title=note.title,
            content=await self._decrypt_or_marker(caller, note.encrypted_content),
            timestamp=note.timestamp,
        )

    async def update(
        self, caller: Address, note_id: int, title: str, plaintext: str,
        timestamp: int,
    ) -> bool:
        """Returns False (and changes nothing) when the note is absent."""
        async with self._storage.locked(caller):
            await self.ensure_registered(caller)
            note = await self.load(caller, note_id)
            if note is None:
                logger.debug(
                    "Update of absent note ignored",
                    extra={"caller": address_to_hex(caller), "note_id": note_id},
                )
                return False
            note.encrypted_content = await self.encrypt_for(caller, plaintext)
            note.title = title
            note.timestamp = timestamp
            await self._store(note_id, note)
            await self._emitter.note_updated(caller, note_id)
            return True

    async def delete(self, caller: Address, note_id: int) -> bool:
        """Swap-to-last delete. Returns False when the note is absent."""
        async with self._storage.locked(caller):
            await self.ensure_registered(caller)
            count = await self._storage.get_note_count(caller)
            plan = plan_removal(note_id, count)
            if plan is None or await self.load(caller, note_id) is None:
                logger.debug(
                    "Delete of absent note ignored",
                    extra={"caller": address_to_hex(caller), "note_id": note_id},
                )
                return False
            if plan.move_from is not None:
                moved = await self.load(caller, plan.move_from)
                if moved is not None:
                    moved.id = plan.target
                    await self._store(plan.target, moved)
            await self._storage.set_note_count(caller, plan.new_count)
            await self._emitter.note_deleted(caller, note_id)
            return True

    async def list_notes(self, caller: Address) -> list[NoteView]:
        """All live notes in ascending id order. Linear in note count."""
        count = await self._storage.get_note_count(caller)
        views = []
        for note_id in range(count):
            note = await self.load(caller, note_id)
            if note is None:
                continue
            views.append(NoteView(
                id=note.id,
                title=note.title,
                content=await self._decrypt_or_marker(caller, note.encrypted_content),
                timestamp=note.timestamp,
            ))
        return views
