import pytest

from session_layout import SessionEntity, detect_session_type, session_type_info
from session_layout.session_types import (
    SESSION_TYPE_COLORS,
    depth_adjusted_color,
    has_spawned_sessions,
)

SESSIONS = [
    SessionEntity("agent:main"),
    SessionEntity("agent:main:subagent:1", spawned_by="agent:main"),
    SessionEntity("agent:main:subagent:1:subagent:0", spawned_by="agent:main:subagent:1"),
    SessionEntity("agent:lonely"),
    SessionEntity("agent:nightly", kind="cron"),
    SessionEntity("agent:main:cron:backup", spawned_by="agent:main"),
    SessionEntity("agent:x:subagent:9"),
]


@pytest.mark.parametrize(
    "key, expected",
    [
        ("agent:main", "orchestrator"),
        ("agent:main:subagent:1", "subagent"),
        ("agent:main:subagent:1:subagent:0", "subagent"),
        ("agent:lonely", "standalone"),
        ("agent:nightly", "cron"),
        ("agent:main:cron:backup", "cron"),
        ("agent:x:subagent:9", "subagent"),
    ],
)
def test_detect_session_type(key, expected):
    session = next(s for s in SESSIONS if s.key == key)
    assert detect_session_type(session, SESSIONS) == expected


def test_has_spawned_sessions():
    assert has_spawned_sessions(SESSIONS[0], SESSIONS)
    assert not has_spawned_sessions(SESSIONS[3], SESSIONS)


def test_session_type_info():
    info = session_type_info(SESSIONS[2], SESSIONS)
    assert info.type == "subagent"
    assert info.depth == 2
    assert info.badge_text == "L2 Subagent"
    assert info.color == SESSION_TYPE_COLORS["subagent"]

    assert session_type_info(SESSIONS[0], SESSIONS).badge_text == "Orchestrator"
    assert session_type_info(SESSIONS[4], SESSIONS).badge_text == "Scheduled"
    assert session_type_info(SESSIONS[3], SESSIONS).badge_text == "Standalone"


def test_cyclic_sessions_are_not_orchestrators():
    sessions = [SessionEntity("a", spawned_by="b"), SessionEntity("b", spawned_by="a")]
    info = session_type_info(sessions[0], sessions)
    assert info.type == "subagent"
    assert info.depth == 0
    assert info.badge_text == "L0 Subagent"


def test_depth_adjusted_color():
    assert depth_adjusted_color("#3B82F6", 0) == "#3B82F6"
    assert depth_adjusted_color("#3B82F6", 1) == "#4e8ef6"
    # Lightening stops at 40%.
    assert depth_adjusted_color("#3B82F6", 4) == depth_adjusted_color("#3B82F6", 10)
    assert depth_adjusted_color("#3B82F6", 10) == "#89b4f9"
    assert depth_adjusted_color("#ffffff", 3) == "#ffffff"
