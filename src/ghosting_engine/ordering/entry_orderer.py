"""Entry ordering for one pattern pass.

Entries are first partitioned into groups: a ``linked`` entry joins the group
of the entry before it, every other entry starts a new group. Groups are then
placed into slots in this order:

1. groups headed by a fixed-slot lock, at their 1-based slot;
2. groups headed by a ``last`` lock, right-aligned at the tail;
3. all remaining groups, shuffled (or kept in order) and placed first-fit.

Placement never splits a group unless there is no contiguous run of free
slots large enough for it, in which case its members fill free slots one by
one.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from ghosting_engine.models.enums import IterationType, PositionKind
from ghosting_engine.models.workout import Entry
from ghosting_engine.timing.randomness import SeededRandom, fisher_yates


def group_entries(entries: Sequence[Entry]) -> list[list[Entry]]:
    """Partition *entries* into link groups, preserving order."""
    groups: list[list[Entry]] = []
    for entry in entries:
        if entry.position.is_linked and groups:
            groups[-1].append(entry)
        else:
            groups.append([entry])
    return groups


def order_entries(
    entries: Sequence[Entry],
    iteration_type: IterationType,
    seed: int | None = None,
) -> list[Entry]:
    """Produce the consumption order for one pass over a pattern.

    Args:
        entries: The pattern's entries in definition order.
        iteration_type: SHUFFLE permutes unlocked groups; IN_ORDER keeps them
            in definition order. Position locks apply in both modes.
        seed: When given, the shuffle is reproducible.

    Returns:
        Ordered entries. Entries whose lock points outside the pattern, or
        whose tail slot is already taken, are dropped.
    """
    size = len(entries)
    if size == 0:
        return []

    groups = group_entries(entries)
    slots: list[Entry | None] = [None] * size
    used: set[int] = set()

    # Fixed-slot locks; later groups overwrite earlier ones on collision
    for group in groups:
        head = group[0].position
        if head.kind != PositionKind.FIXED:
            continue
        start = head.slot - 1
        for offset, entry in enumerate(group):
            pos = start + offset
            if pos < size:
                slots[pos] = entry
                used.add(pos)

    # Tail locks
    for group in groups:
        if not group[0].position.is_last:
            continue
        start = max(0, size - len(group))
        for offset, entry in enumerate(group):
            pos = start + offset
            if pos not in used:
                slots[pos] = entry
                used.add(pos)

    remaining = [
        g for g in groups
        if g[0].position.kind in (PositionKind.NORMAL, PositionKind.LINKED)
    ]
    if iteration_type == IterationType.SHUFFLE:
        linked = [g for g in remaining if any(e.position.is_linked for e in g)]
        plain = [g for g in remaining if not any(e.position.is_linked for e in g)]
        rng = SeededRandom(seed).random if seed is not None else random.random
        remaining = fisher_yates(linked + plain, rng)

    for group in remaining:
        start = _find_contiguous_run(used, size, len(group))
        if start is not None:
            for offset, entry in enumerate(group):
                slots[start + offset] = entry
                used.add(start + offset)
            continue
        # No room for the whole group: fill free slots individually.
        for entry in group:
            free = next((pos for pos in range(size) if pos not in used), None)
            if free is None:
                break
            slots[free] = entry
            used.add(free)

    return [entry for entry in slots if entry is not None]


def shuffle_pattern_order(count: int, seed: int | None = None) -> list[int]:
    """Shuffled pattern indices for workout-level shuffle."""
    rng = SeededRandom(seed).random if seed is not None else random.random
    return fisher_yates(list(range(count)), rng)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_contiguous_run(used: set[int], size: int, length: int) -> int | None:
    for start in range(size - length + 1):
        if all(start + i not in used for i in range(length)):
            return start
    return None
