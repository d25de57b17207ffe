from session_layout.collision import Box, PlacementRegistry, collides, overlaps
from session_layout.config import LayoutConfig
from session_layout.entities import (
    DEFAULT_NODE_DIMENSIONS,
    FALLBACK_DIMENSIONS,
    Dimensions,
    EventItem,
    Origin,
    SessionEntity,
)
from session_layout.hierarchy import group_by_depth, resolve_depths, session_depth
from session_layout.layout import LayoutResult, RadialLayout, layout_graph
from session_layout.layout_utils import (
    group_nodes_by_session,
    layout_to_frame,
    positions_by_id,
)
from session_layout.placement import PlacedNode
from session_layout.session_types import detect_session_type, session_type_info
from session_layout.timeline import build_timeline

__all__ = [
    "Box",
    "DEFAULT_NODE_DIMENSIONS",
    "Dimensions",
    "EventItem",
    "FALLBACK_DIMENSIONS",
    "LayoutConfig",
    "LayoutResult",
    "Origin",
    "PlacedNode",
    "PlacementRegistry",
    "RadialLayout",
    "SessionEntity",
    "build_timeline",
    "collides",
    "detect_session_type",
    "group_by_depth",
    "group_nodes_by_session",
    "layout_graph",
    "layout_to_frame",
    "overlaps",
    "positions_by_id",
    "resolve_depths",
    "session_depth",
    "session_type_info",
]
