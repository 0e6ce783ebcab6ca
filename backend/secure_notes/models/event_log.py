"""EventLogRecord ORM: persisted host log entries.

Invariants:
    - topics stored as a JSON list of 0x-hex strings, topics[0] is the signature
    - caller denormalized from topics[1] for filtering without JSON queries
    - Rows are append-only

Design Decisions:
    - Autoincrement integer id gives a stable emission order across invocations
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, JSON, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from secure_notes.db.base import Base


class EventLogRecord(Base):
    __tablename__ = "event_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    caller: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    contract_address: Mapped[str] = mapped_column(String(42), nullable=False)
    topics: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
