"""SQL Store: KeyValueStore and EventSink implementations over one AsyncSession.

Invariants:
    - Both share the invocation's session, so they commit or roll back together
    - set() flushes immediately; later get() calls in the invocation see the write
    - Nothing here commits; the route owns the transaction boundary
    - locked() holds until the transaction ends; exiting the block releases nothing

Design Decisions:
    - PostgreSQL: pg_advisory_xact_lock keyed by the account, so even an account
      with no rows yet is serialized
    - Other dialects: SELECT ... FOR UPDATE on the account's note-count slot.
      SQLite drops FOR UPDATE, but it admits a single writer per database, so a
      racing writer fails with StorageError instead of losing an update
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from secure_notes.core.domain_types import StorageField, address_to_hex
from secure_notes.core.event_encoding import EventLog, kind_for_signature, topic_to_address
from secure_notes.models.event_log import EventLogRecord
from secure_notes.models.storage_slot import StorageSlot

logger = logging.getLogger(__name__)


def advisory_lock_id(account: bytes) -> int:
    """Signed 64-bit lock id from the account's low 8 bytes."""
    return int.from_bytes(account[-8:], "big", signed=True)


class SqlKeyValueStore:
    """Compound-key slots persisted in the storage_slots table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, field: StorageField, key: bytes) -> bytes | None:
        slot = await self._db.get(StorageSlot, (field.value, key))
        return None if slot is None else slot.value

    async def set(self, field: StorageField, key: bytes, value: bytes) -> None:
        slot = await self._db.get(StorageSlot, (field.value, key))
        if slot is None:
            self._db.add(StorageSlot(field=field.value, slot_key=key, value=value))
        else:
            slot.value = value
        await self._db.flush()

    @asynccontextmanager
    async def locked(self, account: bytes) -> AsyncIterator[None]:
        if self._db.get_bind().dialect.name == "postgresql":
            await self._db.execute(
                select(func.pg_advisory_xact_lock(advisory_lock_id(account)))
            )
        else:
            await self._db.execute(
                select(StorageSlot.value)
                .where(
                    StorageSlot.field == StorageField.NOTE_COUNT.value,
                    StorageSlot.slot_key == bytes(account),
                )
                .with_for_update()
            )
        yield


class SqlEventSink:
    """Appends emitted logs to the event_logs table."""

    def __init__(self, db: AsyncSession, contract_address: bytes):
        self._db = db
        self._contract_address = address_to_hex(contract_address)

    async def emit(self, log: EventLog) -> None:
        kind = kind_for_signature(log.topics[0])
        if kind is None:
            raise ValueError(f"unknown event signature 0x{log.topics[0].hex()}")
        self._db.add(EventLogRecord(
            event=kind.value,
            caller=address_to_hex(topic_to_address(log.topics[1])),
            contract_address=self._contract_address,
            topics=["0x" + t.hex() for t in log.topics],
            data=log.data,
        ))


async def list_event_logs(
    db: AsyncSession,
    caller: str | None = None,
    event: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[EventLogRecord]:
    """Persisted logs, newest first."""
    query = select(EventLogRecord).order_by(EventLogRecord.id.desc())
    if caller:
        query = query.where(EventLogRecord.caller == caller.lower())
    if event:
        query = query.where(EventLogRecord.event == event)
    result = await db.execute(query.limit(limit).offset(offset))
    return list(result.scalars().all())
