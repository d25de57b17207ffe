from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from session_layout.config import LayoutConfig
from session_layout.entities import Dimensions, EventItem, SessionEntity


@dataclass(frozen=True)
class SessionAnchor:
    session: SessionEntity


@dataclass(frozen=True)
class ActionEntry:
    item: EventItem


@dataclass(frozen=True)
class ExecEntry:
    item: EventItem


@dataclass(frozen=True)
class OtherEntry:
    """An event item whose kind is neither an action nor an exec process."""

    item: EventItem


TimelineItem = Union[SessionAnchor, ActionEntry, ExecEntry, OtherEntry]


def to_entry(item: EventItem) -> TimelineItem:
    if item.kind == "action":
        return ActionEntry(item)
    if item.kind == "exec":
        return ExecEntry(item)
    return OtherEntry(item)


def entry_kind(entry: TimelineItem) -> str:
    match entry:
        case SessionAnchor():
            return "session"
        case ActionEntry():
            return "action"
        case ExecEntry():
            return "exec"
        case OtherEntry(item=item):
            return item.kind
    raise TypeError(f"Unknown timeline entry: {entry!r}")


def entry_node_id(entry: TimelineItem) -> str:
    match entry:
        case SessionAnchor(session=session):
            return session.node_id
        case ActionEntry(item=item) | ExecEntry(item=item) | OtherEntry(item=item):
            return item.node_id
    raise TypeError(f"Unknown timeline entry: {entry!r}")


def entry_entity(entry: TimelineItem) -> Union[SessionEntity, EventItem]:
    match entry:
        case SessionAnchor(session=session):
            return session
        case ActionEntry(item=item) | ExecEntry(item=item) | OtherEntry(item=item):
            return item
    raise TypeError(f"Unknown timeline entry: {entry!r}")


def entry_dimensions(entry: TimelineItem, config: LayoutConfig) -> Dimensions:
    return config.dimensions_for(entry_kind(entry))


def partition_items(
    items: Iterable[EventItem], session_keys: Iterable[str]
) -> Tuple[Dict[str, List[EventItem]], List[EventItem]]:
    """Split items into per-session lists and orphans, both in encounter order.

    An item is an orphan when it has no session key or its key does not name a known session.
    """
    known = set(session_keys)
    by_session: Dict[str, List[EventItem]] = {}
    orphans: List[EventItem] = []
    for item in items:
        if item.session_key is None or item.session_key not in known:
            orphans.append(item)
        else:
            by_session.setdefault(item.session_key, []).append(item)
    return by_session, orphans


def build_timeline(
    session: SessionEntity, items: Sequence[EventItem]
) -> List[TimelineItem]:
    """The anchor of the session followed by its own items in ascending timestamp order.

    The anchor always comes first whatever its last activity time. `sorted` is stable, so items sharing a
    timestamp keep their encounter order. Items belonging to other sessions are ignored.
    """
    own = [item for item in items if item.session_key == session.key]
    own = sorted(own, key=lambda item: item.timestamp)
    return [SessionAnchor(session)] + [to_entry(item) for item in own]


def build_timelines(
    sessions: Sequence[SessionEntity], items_by_session: Mapping[str, Sequence[EventItem]]
) -> Dict[str, List[TimelineItem]]:
    timelines: Dict[str, List[TimelineItem]] = {}
    for session in sessions:
        if session.key not in timelines:
            timelines[session.key] = build_timeline(
                session, items_by_session.get(session.key, [])
            )
    return timelines
