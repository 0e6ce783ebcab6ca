"""ORM Models: SQLAlchemy declarative models for the contract's persistent state.

Invariants:
    - All models inherit from Base (db/base.py)
    - storage_slots holds every contract field; event_logs holds emitted logs

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and Alembic
"""

from secure_notes.models.storage_slot import StorageSlot  # noqa: F401
from secure_notes.models.event_log import EventLogRecord  # noqa: F401
