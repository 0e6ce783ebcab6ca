"""Event Logs: read access to persisted contract logs."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from secure_notes.core.domain_types import EventKind, address_to_hex, parse_address
from secure_notes.infrastructure.database import get_db
from secure_notes.infrastructure.sql_store import list_event_logs
from secure_notes.schemas.contract import StoredEventLogResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=list[StoredEventLogResponse])
async def get_event_logs(
    caller: str | None = Query(None),
    event: EventKind | None = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """List persisted logs, newest first."""
    caller_hex = address_to_hex(parse_address(caller)) if caller else None
    records = await list_event_logs(
        db, caller=caller_hex, event=event.value if event else None,
        limit=limit, offset=offset,
    )
    return [
        StoredEventLogResponse(
            id=r.id,
            event=r.event,
            caller=r.caller,
            contract_address=r.contract_address,
            topics=r.topics,
            data="0x" + r.data.hex(),
            created_at=r.created_at,
        )
        for r in records
    ]
