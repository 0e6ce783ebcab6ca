"""Note Layout tests: liveness and swap-to-last removal plans.

Tests cover:
    - is_live bounds
    - Removal of last / non-last / absent ids
    - Density preserved across a long create/delete sequence (simulated arena)
"""

import random

from secure_notes.core.note_layout import RemovalPlan, is_live, plan_removal


def test_is_live_bounds():
    assert is_live(0, 1)
    assert not is_live(1, 1)
    assert not is_live(0, 0)
    assert not is_live(-1, 5)


def test_remove_last_moves_nothing():
    assert plan_removal(2, 3) == RemovalPlan(target=2, move_from=None, new_count=2)


def test_remove_first_moves_last():
    assert plan_removal(0, 3) == RemovalPlan(target=0, move_from=2, new_count=2)


def test_remove_only_note():
    assert plan_removal(0, 1) == RemovalPlan(target=0, move_from=None, new_count=0)


def test_remove_absent_returns_none():
    assert plan_removal(3, 3) is None
    assert plan_removal(0, 0) is None


def test_density_preserved_over_random_operations():
    rng = random.Random(1234)
    slots: list[str] = []
    created = 0
    for _ in range(500):
        if slots and rng.random() < 0.45:
            target = rng.randrange(len(slots) + 2)
            plan = plan_removal(target, len(slots))
            if plan is None:
                assert target >= len(slots)
                continue
            removed = slots[plan.target]
            if plan.move_from is not None:
                slots[plan.target] = slots[plan.move_from]
            del slots[plan.new_count:]
            assert removed not in slots
        else:
            slots.append(f"note-{created}")
            created += 1
        assert len(set(slots)) == len(slots)
