from dataclasses import dataclass
from typing import Dict, Literal, Sequence

from session_layout.entities import SessionEntity
from session_layout.hierarchy import index_sessions, session_depth

SessionType = Literal["orchestrator", "subagent", "cron", "standalone"]

SESSION_TYPE_COLORS: Dict[str, str] = {
    "orchestrator": "#3B82F6",
    "subagent": "#10B981",
    "cron": "#F59E0B",
    "standalone": "#6366F1",
}


@dataclass(frozen=True)
class SessionTypeInfo:
    type: SessionType
    depth: int
    color: str
    badge_text: str


def has_spawned_sessions(
    session: SessionEntity, all_sessions: Sequence[SessionEntity]
) -> bool:
    return any(s.spawned_by == session.key for s in all_sessions)


def detect_session_type(
    session: SessionEntity, all_sessions: Sequence[SessionEntity]
) -> SessionType:
    """Classify a session from its kind, its key and its spawn links.

    Scheduled sessions come first, then spawned ones; a root session which spawned others is an orchestrator and
    any other session is standalone.
    """
    if session.kind == "scheduled" or ":cron:" in session.key:
        return "cron"
    if session.spawned_by is not None or ":subagent:" in session.key:
        return "subagent"
    depth = session_depth(session.key, index_sessions(all_sessions))
    if depth == 0 and has_spawned_sessions(session, all_sessions):
        return "orchestrator"
    return "standalone"


def session_type_info(
    session: SessionEntity, all_sessions: Sequence[SessionEntity]
) -> SessionTypeInfo:
    session_type = detect_session_type(session, all_sessions)
    depth = session_depth(session.key, index_sessions(all_sessions))
    badges = {
        "orchestrator": "Orchestrator",
        "subagent": f"L{depth} Subagent",
        "cron": "Scheduled",
        "standalone": "Standalone",
    }
    return SessionTypeInfo(
        type=session_type,
        depth=depth,
        color=SESSION_TYPE_COLORS[session_type],
        badge_text=badges[session_type],
    )


def depth_adjusted_color(base_color: str, depth: int) -> str:
    """Lighten a '#rrggbb' color by 10% per depth level, at most 40%. Depth 0 returns the color unchanged."""
    if depth <= 0:
        return base_color

    channels = [int(base_color[i : i + 2], 16) for i in (1, 3, 5)]
    factor = min(depth * 0.1, 0.4)
    lightened = [min(255, int(c + (255 - c) * factor)) for c in channels]
    return "#" + "".join(f"{c:02x}" for c in lightened)
