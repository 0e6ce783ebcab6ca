"""Contract Dispatch: the public operation surface and its signature routing.

Invariants:
    - Every signature -> handler mapping is visible; no getattr magic
    - The acting identity always comes from CallContext, never from arguments
    - Unknown signatures raise UnknownFunctionError before any state is touched
    - decryptNote never raises for bad ciphertext; it returns the marker string
    - Emitted logs for the invocation are exposed via `logs`
    - Errors leaving execute() carry the caller and signature in their context

Design Decisions:
    - Explicit dict over getattr: adding an operation requires editing this file
    - SecureNotesContract owns result shapes (tuples matching the ABI outputs);
      ContractDispatch owns argument decoding and JSON encoding
"""

import logging
from typing import Any

from secure_notes.core.abi_values import decode_args, encode_result
from secure_notes.core.domain_types import Address, CallContext, address_to_hex
from secure_notes.core.errors import CipherError, SecureNotesError, UnknownFunctionError
from secure_notes.core.event_encoding import EventLog
from secure_notes.core.repository_protocols import EventSink, KeyValueStore
from secure_notes.services.event_emitter import EventEmitter
from secure_notes.services.note_repository import NoteRepository
from secure_notes.services.storage_adapter import NoteStorage

logger = logging.getLogger(__name__)


class SecureNotesContract:
    """The eleven externally invocable operations, bound to one call context."""

    def __init__(self, ctx: CallContext, repository: NoteRepository):
        self._ctx = ctx
        self._notes = repository

    @property
    def caller(self) -> Address:
        return self._ctx.caller

    async def register_user(self, encryption_key: bytes) -> None:
        await self._notes.register(self.caller, encryption_key)

    async def create_note(self, title: str, content: str) -> int:
        return await self._notes.create(
            self.caller, title, content, self._ctx.block_timestamp,
        )

    async def get_note(self, note_id: int) -> tuple[str, str, int]:
        view = await self._notes.read(self.caller, note_id)
        return view.title, view.content, view.timestamp

    async def update_note(self, note_id: int, title: str, content: str) -> None:
        await self._notes.update(
            self.caller, note_id, title, content, self._ctx.block_timestamp,
        )

    async def delete_note(self, note_id: int) -> None:
        await self._notes.delete(self.caller, note_id)

    async def get_note_count(self) -> int:
        return await self._notes.count(self.caller)

    async def get_notes_list(self) -> tuple[list[int], list[str], list[int]]:
        views = await self._notes.list_notes(self.caller)
        return (
            [v.id for v in views],
            [v.title for v in views],
            [v.timestamp for v in views],
        )

    async def update_encryption_key(self, new_key: bytes) -> None:
        await self._notes.set_encryption_key(self.caller, new_key)

    async def encrypt_note(self, content: str) -> bytes:
        return await self._notes.encrypt_for(self.caller, content)

    async def decrypt_note(self, encrypted_content: bytes) -> str:
        try:
            return await self._notes.decrypt_for(self.caller, encrypted_content)
        except CipherError as e:
            return e.marker

    async def get_encryption_contract_address(self) -> bytes:
        return self._ctx.contract_address


class ContractDispatch:
    """Routes function signatures to SecureNotesContract methods."""

    def __init__(self, ctx: CallContext, store: KeyValueStore, sink: EventSink):
        self._ctx = ctx
        self._emitter = EventEmitter(sink)
        repository = NoteRepository(NoteStorage(store), self._emitter)
        contract = SecureNotesContract(ctx, repository)
        self.contract = contract

        self._handlers = {
            "registerUser(bytes)": contract.register_user,
            "createNote(string,string)": contract.create_note,
            "getNote(uint256)": contract.get_note,
            "updateNote(uint256,string,string)": contract.update_note,
            "deleteNote(uint256)": contract.delete_note,
            "getNoteCount()": contract.get_note_count,
            "getNotesList()": contract.get_notes_list,
            "updateEncryptionKey(bytes)": contract.update_encryption_key,
            "encryptNote(string)": contract.encrypt_note,
            "decryptNote(bytes)": contract.decrypt_note,
            "getEncryptionContractAddress()": contract.get_encryption_contract_address,
        }

    @classmethod
    def functions(cls) -> list[str]:
        return list(_SIGNATURES)

    @property
    def logs(self) -> list[EventLog]:
        return list(self._emitter.emitted)

    async def execute(self, signature: str, args: list[Any]) -> Any:
        """Decode args, invoke, and return the JSON-encoded result.

        SecureNotesError raised anywhere in the call leaves with the caller and
        signature recorded in its context.
        """
        caller = address_to_hex(self._ctx.caller)
        try:
            handler = self._handlers.get(signature)
            if handler is None:
                raise UnknownFunctionError(signature)
            decoded = decode_args(signature, args)
            logger.debug(
                f"Invoking {signature}",
                extra={"function": signature, "caller": caller},
            )
            result = await handler(*decoded)
        except SecureNotesError as e:
            e.context.caller = e.context.caller or caller
            e.context.function = e.context.function or signature
            raise
        return encode_result(result)


_SIGNATURES = (
    "registerUser(bytes)",
    "createNote(string,string)",
    "getNote(uint256)",
    "updateNote(uint256,string,string)",
    "deleteNote(uint256)",
    "getNoteCount()",
    "getNotesList()",
    "updateEncryptionKey(bytes)",
    "encryptNote(string)",
    "decryptNote(bytes)",
    "getEncryptionContractAddress()",
)
