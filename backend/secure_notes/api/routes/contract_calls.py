"""Contract Calls: the external invocation endpoint.

Invariants:
    - Caller identity comes from the host header (settings.caller_header), never the body
    - One AsyncSession per call: committed on success, rolled back on any exception
    - Response logs are exactly the events emitted by this invocation
"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from secure_notes.config import get_settings
from secure_notes.core.domain_types import CallContext, parse_address
from secure_notes.infrastructure.database import get_db
from secure_notes.infrastructure.sql_store import SqlEventSink, SqlKeyValueStore
from secure_notes.schemas.contract import (
    ContractCall, ContractCallResponse, EventLogResponse,
)
from secure_notes.services.contract_dispatch import ContractDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/contract", tags=["contract"])


def get_call_context(request: Request) -> CallContext:
    """Build the host context for this request."""
    settings = get_settings()
    return CallContext(
        caller=parse_address(request.headers.get(settings.caller_header, "")),
        block_timestamp=int(time.time()),
        contract_address=parse_address(settings.contract_address),
    )


@router.post("/call", response_model=ContractCallResponse)
async def call_contract(
    body: ContractCall,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    """Invoke one contract operation as the header-supplied caller."""
    dispatch = ContractDispatch(
        ctx, SqlKeyValueStore(db), SqlEventSink(db, ctx.contract_address),
    )
    result = await dispatch.execute(body.function, body.args)
    await db.commit()
    return ContractCallResponse(
        function=body.function,
        result=result,
        logs=[EventLogResponse.from_log(log) for log in dispatch.logs],
    )


@router.get("/functions")
async def list_functions():
    """Supported function signatures."""
    return {"functions": ContractDispatch.functions()}
