"""Note Layout: dense per-account indexing and swap-to-last compaction.

Invariants:
    - Live ids for an account are exactly range(count)
    - Removal moves at most one note (the last) and shrinks count by one
    - The vacated last slot is left as-is; count excludes it

Design Decisions:
    - Planning is pure; the repository applies the plan against storage
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RemovalPlan:
    """What deleting `target` from a dense range of `count` notes requires."""
    target: int
    move_from: int | None   # id whose note is copied into target, if any
    new_count: int


def is_live(note_id: int, count: int) -> bool:
    return 0 <= note_id < count


def plan_removal(note_id: int, count: int) -> RemovalPlan | None:
    """Return the compaction plan, or None when note_id is not live."""
    if not is_live(note_id, count):
        return None
    last = count - 1
    return RemovalPlan(
        target=note_id,
        move_from=None if note_id == last else last,
        new_count=last,
    )
