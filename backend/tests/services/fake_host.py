"""Fake Host: in-memory KeyValueStore and EventSink for repository tests.

Invariants:
    - InMemoryStore keeps "never written" (missing key) distinct from b""
    - InMemoryStore(interleave=True) yields to the event loop on every get/set,
      so concurrent invocations interleave the way async DB round trips do
    - locked(account) serializes one account; other accounts proceed
    - RecordingSink keeps every emitted log in order
    - Helpers build distinct 20-byte accounts from a single byte
"""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager

from secure_notes.core.domain_types import Address, CallContext, EventKind, StorageField
from secure_notes.core.event_encoding import EventLog


class InMemoryStore:
    """Dict-backed compound-key store."""

    def __init__(self, interleave: bool = False):
        self.slots: dict[tuple[StorageField, bytes], bytes] = {}
        self.writes = 0
        self._interleave = interleave
        self._locks: dict[bytes, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, field: StorageField, key: bytes) -> bytes | None:
        if self._interleave:
            await asyncio.sleep(0)
        return self.slots.get((field, key))

    async def set(self, field: StorageField, key: bytes, value: bytes) -> None:
        if self._interleave:
            await asyncio.sleep(0)
        self.writes += 1
        self.slots[(field, key)] = value

    @asynccontextmanager
    async def locked(self, account: bytes):
        async with self._locks[bytes(account)]:
            yield


class RecordingSink:
    """Collects emitted logs."""

    def __init__(self):
        self.logs: list[EventLog] = []

    async def emit(self, log: EventLog) -> None:
        self.logs.append(log)

    def kinds(self) -> list[EventKind]:
        return [log.kind for log in self.logs]

    def count(self, kind: EventKind) -> int:
        return sum(1 for log in self.logs if log.kind == kind)


def account(n: int) -> Address:
    """A recognisable 20-byte account: 0x1111...11 for n=0x11."""
    return Address(bytes([n]) * 20)


CONTRACT = account(0xC0)


def context(caller: Address, timestamp: int = 1_700_000_000) -> CallContext:
    return CallContext(caller=caller, block_timestamp=timestamp, contract_address=CONTRACT)
