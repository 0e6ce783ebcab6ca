"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Persistent state and log transport accessed only through these Protocols
    - Implementations provided by the shell via dependency injection
    - Mutations of one account run inside locked(account); two invocations for
      the same account never interleave their read-modify-write sequences

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, but within one invocation every
      call completes before the next starts, so reads always see prior writes
    - get() returns None for a slot never written; b"" is a written empty value
    - locked() is a context manager so SQL stores can hold a transaction-scoped
      lock while in-memory stores release on exit
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from secure_notes.core.domain_types import StorageField
from secure_notes.core.event_encoding import EventLog


class KeyValueStore(Protocol):
    """Compound-key byte store: (field, key) -> value."""
    async def get(self, field: StorageField, key: bytes) -> bytes | None: ...
    async def set(self, field: StorageField, key: bytes, value: bytes) -> None: ...
    def locked(self, account: bytes) -> AbstractAsyncContextManager[None]: ...


class EventSink(Protocol):
    """Host log transport."""
    async def emit(self, log: EventLog) -> None: ...
