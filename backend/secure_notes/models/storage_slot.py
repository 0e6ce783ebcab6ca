"""StorageSlot ORM: one row per written (field, key) slot of the contract store.

Invariants:
    - (field, slot_key) is the primary key; writes overwrite in place
    - A row exists iff the slot was ever written; value may be empty bytes
"""

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from secure_notes.db.base import Base


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    field: Mapped[str] = mapped_column(String(32), primary_key=True)
    slot_key: Mapped[bytes] = mapped_column(LargeBinary(64), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
