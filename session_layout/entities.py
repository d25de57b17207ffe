from dataclasses import dataclass
from typing import Dict, Literal, Optional, Union

SessionKind = Literal["ordinary", "scheduled"]
ItemKind = Literal["action", "exec"]


def normalize_session_kind(kind: Optional[str] = "ordinary") -> SessionKind:
    k = str(kind or "").lower().strip()
    if k in {"scheduled", "cron"}:
        return "scheduled"
    # Fallback: anything else is an ordinary session
    return "ordinary"


def normalize_item_kind(kind: Optional[str]) -> Union[ItemKind, str]:
    """Map the item kind spellings used by the event sources onto `action` / `exec`.

    Unrecognized kinds are returned lowercased and stripped so that they can still be placed with the fallback box.
    """
    k = str(kind or "").lower().strip()
    if k == "action":
        return "action"
    if k in {"exec", "exec-process", "exec_process", "execprocess"}:
        return "exec"
    return k


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


DEFAULT_NODE_DIMENSIONS: Dict[str, Dimensions] = {
    "session": Dimensions(280, 140),
    "exec": Dimensions(300, 120),
    "action": Dimensions(220, 100),
    "origin": Dimensions(64, 64),
}
FALLBACK_DIMENSIONS = Dimensions(180, 80)


@dataclass(frozen=True)
class Origin:
    id: str = "origin"


@dataclass(frozen=True)
class SessionEntity:
    key: str
    spawned_by: Optional[str] = None
    last_activity_at: Optional[float] = None
    kind: SessionKind = "ordinary"

    def __post_init__(self):
        object.__setattr__(self, "kind", normalize_session_kind(self.kind))
        if self.spawned_by == "":
            object.__setattr__(self, "spawned_by", None)

    @property
    def node_id(self) -> str:
        return f"session-{self.key}"


@dataclass(frozen=True)
class EventItem:
    id: str
    session_key: Optional[str]
    kind: str
    timestamp: float = 0

    def __post_init__(self):
        object.__setattr__(self, "kind", normalize_item_kind(self.kind))
        if self.session_key == "":
            object.__setattr__(self, "session_key", None)

    @property
    def node_id(self) -> str:
        return f"{self.kind or 'item'}-{self.id}"
