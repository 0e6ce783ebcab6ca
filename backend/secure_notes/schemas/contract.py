"""Contract Schemas: Pydantic models for the call and event-log endpoints.

Invariants:
    - ContractCall.function is a bare signature "name(type,...)"; args are positional JSON values
    - Responses carry hex strings for all byte values
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from secure_notes.core.domain_types import EventKind
from secure_notes.core.event_encoding import EventLog


class ContractCall(BaseModel):
    """One external invocation."""
    function: str = Field(min_length=3, max_length=128, pattern=r"^[A-Za-z_]\w*\([\w,\[\]]*\)$")
    args: list[Any] = Field(default_factory=list, max_length=16)


class EventLogResponse(BaseModel):
    event: EventKind
    topics: list[str]
    data: str

    @classmethod
    def from_log(cls, log: EventLog) -> "EventLogResponse":
        return cls(
            event=log.kind,
            topics=["0x" + t.hex() for t in log.topics],
            data="0x" + log.data.hex(),
        )


class ContractCallResponse(BaseModel):
    function: str
    result: Any = None
    logs: list[EventLogResponse] = Field(default_factory=list)


class StoredEventLogResponse(EventLogResponse):
    id: int
    caller: str
    contract_address: str
    created_at: datetime
