from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from session_layout.entities import SessionEntity


def index_sessions(sessions: Iterable[SessionEntity]) -> Dict[str, SessionEntity]:
    """Map session keys to sessions. If a key repeats, the first record wins."""
    index: Dict[str, SessionEntity] = {}
    for session in sessions:
        index.setdefault(session.key, session)
    return index


def session_depth(
    key: Optional[str], sessions_by_key: Mapping[str, SessionEntity]
) -> int:
    """Number of spawn links between a session and the root of its tree.

    The parent chain is walked iteratively with a visited set local to the call. The walk stops at the first
    session without a parent or whose parent is unknown. A chain that runs into a cycle puts the session at
    depth 0, so it is laid out as a root.
    """
    session = sessions_by_key.get(key) if key is not None else None
    if session is None:
        return 0

    depth = 0
    visited = {session.key}
    while session.spawned_by is not None:
        parent = sessions_by_key.get(session.spawned_by)
        if parent is None:
            break
        if parent.key in visited:
            return 0
        visited.add(parent.key)
        depth += 1
        session = parent
    return depth


def resolve_depths(sessions: Sequence[SessionEntity]) -> Dict[str, int]:
    sessions_by_key = index_sessions(sessions)
    return {key: session_depth(key, sessions_by_key) for key in sessions_by_key}


def group_by_depth(
    sessions: Sequence[SessionEntity], depths: Optional[Mapping[str, int]] = None
) -> Dict[int, List[SessionEntity]]:
    """Bucket sessions by depth. Within a bucket the input order is kept."""
    if depths is None:
        depths = resolve_depths(sessions)
    groups: Dict[int, List[SessionEntity]] = defaultdict(list)
    for session in sessions:
        groups[depths.get(session.key, 0)].append(session)
    return dict(sorted(groups.items()))


def children_by_parent(
    sessions: Sequence[SessionEntity], depths: Optional[Mapping[str, int]] = None
) -> Dict[str, List[SessionEntity]]:
    """Direct children of each parent key, in input order.

    Only resolved spawn links count: a child is listed under its parent when its depth is at least one, i.e. the
    parent exists and the chain is acyclic.
    """
    if depths is None:
        depths = resolve_depths(sessions)
    children: Dict[str, List[SessionEntity]] = defaultdict(list)
    for session in sessions:
        if depths.get(session.key, 0) >= 1:
            children[session.spawned_by].append(session)
    return dict(children)


def spawn_edges(
    sessions: Sequence[SessionEntity], depths: Optional[Mapping[str, int]] = None
) -> List[Tuple[str, str]]:
    return [
        (parent_key, child.key)
        for parent_key, children in children_by_parent(sessions, depths).items()
        for child in children
    ]
