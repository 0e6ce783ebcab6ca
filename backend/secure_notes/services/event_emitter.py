"""Event Emitter: formats state-transition logs and hands them to the host sink.

Invariants:
    - One method per event kind; topics always start with the caller
    - NoteCreated carries the raw UTF-8 title as data; other kinds carry none
    - Emitted logs are also kept in `emitted` for the current invocation
"""

import logging

from secure_notes.core.domain_types import Address, EventKind, address_to_hex
from secure_notes.core.event_encoding import (
    EventLog, address_topic, build_log, uint_topic,
)
from secure_notes.core.repository_protocols import EventSink

logger = logging.getLogger(__name__)


class EventEmitter:
    """Builds EventLog values and dispatches them to an EventSink."""

    def __init__(self, sink: EventSink):
        self._sink = sink
        self.emitted: list[EventLog] = []

    async def emit(self, kind: EventKind, data: bytes, topics: list[bytes]) -> EventLog:
        log = build_log(kind, data, topics)
        await self._sink.emit(log)
        self.emitted.append(log)
        return log

    async def user_registered(self, caller: Address) -> EventLog:
        logger.info(
            f"User registered: {address_to_hex(caller)}",
            extra={"event": EventKind.USER_REGISTERED.value, "caller": address_to_hex(caller)},
        )
        return await self.emit(EventKind.USER_REGISTERED, b"", [address_topic(caller)])

    async def note_created(self, caller: Address, note_id: int, title: str) -> EventLog:
        return await self._note_event(
            EventKind.NOTE_CREATED, caller, note_id, title.encode("utf-8"),
        )

    async def note_updated(self, caller: Address, note_id: int) -> EventLog:
        return await self._note_event(EventKind.NOTE_UPDATED, caller, note_id)

    async def note_deleted(self, caller: Address, note_id: int) -> EventLog:
        return await self._note_event(EventKind.NOTE_DELETED, caller, note_id)

    async def _note_event(
        self, kind: EventKind, caller: Address, note_id: int, data: bytes = b"",
    ) -> EventLog:
        logger.info(
            f"{kind.value}: note {note_id}",
            extra={
                "event": kind.value, "caller": address_to_hex(caller),
                "note_id": note_id,
            },
        )
        return await self.emit(kind, data, [address_topic(caller), uint_topic(note_id)])
