from typing import List, Tuple

from session_layout import EventItem, SessionEntity


def generate_session_forest(
    n_roots: int = 3, n_children: int = 2, n_levels: int = 2
) -> List[SessionEntity]:
    """Build a forest where every session of the first n_levels - 1 levels spawns n_children sessions.

    Sessions are listed level by level, parents before children, which is the order in which a live monitor
    usually discovers them. Keys look like 'agent:r0', 'agent:r0:subagent:1', 'agent:r0:subagent:1:subagent:0'.

    Args:
        n_roots: The number of root sessions.
        n_children: The number of children of each non-leaf session.
        n_levels: The number of levels, minimum value is 1 (only roots).

    Returns:
        A list with n_roots * (1 + n_children + ... + n_children^(n_levels - 1)) sessions.
    """
    if n_levels < 1:
        raise ValueError(f"The number of levels should be at least 1, give {n_levels}.")

    level = [SessionEntity(f"agent:r{i}", last_activity_at=float(i)) for i in range(n_roots)]
    sessions = list(level)
    for _ in range(n_levels - 1):
        next_level = [
            SessionEntity(f"{parent.key}:subagent:{j}", spawned_by=parent.key)
            for parent in level
            for j in range(n_children)
        ]
        sessions += next_level
        level = next_level
    return sessions


def generate_items(
    sessions: List[SessionEntity], n_actions: int = 2, n_execs: int = 1
) -> List[EventItem]:
    """Interleave actions and exec processes of all sessions with decreasing timestamps.

    The timestamps run backwards so that the timeline order is the reverse of the encounter order.
    """
    items = []
    timestamp = 10_000.0
    for session in sessions:
        for a in range(n_actions):
            items.append(EventItem(f"{session.key}-a{a}", session.key, "action", timestamp))
            timestamp -= 10
        for e in range(n_execs):
            items.append(EventItem(f"{session.key}-e{e}", session.key, "exec", timestamp))
            timestamp -= 10
    return items


def boxes_overlap(a, b, padding: float) -> bool:
    return not (
        a.right + padding < b.left
        or b.right + padding < a.left
        or a.bottom + padding < b.top
        or b.bottom + padding < a.top
    )


def overlapping_pairs(nodes, padding: float) -> List[Tuple[str, str]]:
    return [
        (a.id, b.id)
        for i, a in enumerate(nodes)
        for b in nodes[i + 1 :]
        if boxes_overlap(a.box, b.box, padding)
    ]
