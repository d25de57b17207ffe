from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from session_layout.collision import Box, PlacementRegistry, collides
from session_layout.config import LayoutConfig
from session_layout.entities import Dimensions, EventItem, SessionEntity
from session_layout.timeline import (
    SessionAnchor,
    TimelineItem,
    entry_dimensions,
    entry_entity,
    entry_kind,
    entry_node_id,
)


@dataclass(frozen=True)
class PlacedNode:
    id: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    session_key: Optional[str] = None
    depth: Optional[int] = None
    ray_offset: Optional[float] = None
    adjusted: bool = False
    orphan: bool = False
    entity: Any = field(default=None, compare=False, repr=False)

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class AnchorPosition:
    """Start of a session ray: where its timeline begins and the direction it radiates to."""

    x: float
    y: float
    angle: float


@dataclass
class LayoutPass:
    """Everything accumulated during a single layout invocation.

    A new instance is created for every call and threaded through the placers, so concurrent or successive calls
    never see each other's boxes.
    """

    config: LayoutConfig
    registry: PlacementRegistry = field(default_factory=PlacementRegistry)
    nodes: List[PlacedNode] = field(default_factory=list)
    anchors: Dict[str, AnchorPosition] = field(default_factory=dict)
    unresolved_collisions: int = 0


def direction(angle: float) -> np.ndarray:
    return np.array([np.cos(angle), np.sin(angle)])


def bounded_retry(
    start: np.ndarray,
    unit: np.ndarray,
    distance: float,
    dims: Dimensions,
    registry: PlacementRegistry,
    padding: float,
    step: float,
    bound: float,
) -> Tuple[float, float, float, bool]:
    """Push a candidate outward along unit until it stops colliding or the adjustment reaches bound.

    Returns
    -------
        x, y: The accepted top-left corner. When the budget is exhausted this is the last candidate tried, even if
            it still overlaps.
        adjustment: The extra distance consumed by the retries.
        colliding: Whether the accepted candidate still overlaps a registered box.
    """
    adjustment = 0.0
    x, y = start + unit * distance
    colliding = collides(x, y, dims, registry, padding)
    while colliding and adjustment < bound:
        adjustment += step
        x, y = start + unit * (distance + adjustment)
        colliding = collides(x, y, dims, registry, padding)
    return float(x), float(y), adjustment, colliding


def radiate_timeline(
    state: LayoutPass,
    timeline: Sequence[TimelineItem],
    anchor: AnchorPosition,
    session_key: str,
    depth: int,
    anchor_adjusted: bool = False,
):
    """Place the entries of a timeline one after the other along the ray of its session."""
    config = state.config
    start = np.array([anchor.x, anchor.y])
    unit = direction(anchor.angle)

    current_radius = 0.0
    for entry in timeline:
        dims = entry_dimensions(entry, config)
        x, y, adjustment, colliding = bounded_retry(
            start,
            unit,
            current_radius,
            dims,
            state.registry,
            config.collision_padding,
            config.radius_step,
            config.max_radius_adjustment,
        )
        if colliding:
            state.unresolved_collisions += 1

        node = PlacedNode(
            id=entry_node_id(entry),
            kind=entry_kind(entry),
            x=x,
            y=y,
            width=dims.width,
            height=dims.height,
            session_key=session_key,
            depth=depth,
            ray_offset=current_radius + adjustment,
            adjusted=adjustment > 0
            or (anchor_adjusted and isinstance(entry, SessionAnchor)),
            entity=entry_entity(entry),
        )
        state.nodes.append(node)
        state.registry.add(node.box)

        current_radius += dims.height + config.radial_spacing + adjustment


def root_angles(count: int) -> np.ndarray:
    """Evenly spaced angles starting at the top (-pi/2) and going clockwise in screen coordinates."""
    angle_step = 2 * np.pi / max(count, 1)
    return np.array([i * angle_step - np.pi / 2 for i in range(count)])


def place_root_sessions(
    state: LayoutPass,
    roots: Sequence[SessionEntity],
    timelines: Mapping[str, Sequence[TimelineItem]],
):
    config = state.config
    for session, angle in zip(roots, root_angles(len(roots))):
        angle = float(angle)
        x, y = direction(angle) * config.base_radius
        anchor = AnchorPosition(float(x), float(y), angle)
        state.anchors[session.key] = anchor

        radiate_timeline(
            state,
            timelines.get(session.key, [SessionAnchor(session)]),
            anchor,
            session_key=session.key,
            depth=0,
        )


def sibling_offsets(count: int, config: LayoutConfig) -> List[float]:
    """Angular offsets of count siblings around the direction of their parent.

    The total spread is at least min_angular_spread and grows by min_sibling_angle per sibling. The offsets are
    symmetric around zero, so a single child continues straight along the parent ray.
    """
    if count <= 0:
        return []
    spread = max(config.min_angular_spread, config.min_sibling_angle * count)
    return [(i - (count - 1) / 2) * (spread / count) for i in range(count)]


def place_child_sessions(
    state: LayoutPass,
    sessions_at_depth: Sequence[SessionEntity],
    timelines: Mapping[str, Sequence[TimelineItem]],
    depth: int,
):
    """Place the sessions of one depth level next to their parents, which sit one level up and are already placed."""
    config = state.config
    session_dims = config.dimensions_for("session")

    siblings: Dict[str, List[SessionEntity]] = {}
    for session in sessions_at_depth:
        siblings.setdefault(session.spawned_by, []).append(session)

    for session in sessions_at_depth:
        parent = state.anchors[session.spawned_by]

        group = siblings[session.spawned_by]
        offset = sibling_offsets(len(group), config)[group.index(session)]
        child_angle = parent.angle + offset

        x, y, adjustment, _ = bounded_retry(
            np.array([parent.x, parent.y]),
            direction(child_angle),
            config.child_offset,
            session_dims,
            state.registry,
            config.collision_padding,
            config.offset_step,
            config.max_offset_adjustment,
        )
        anchor = AnchorPosition(x, y, child_angle)
        state.anchors[session.key] = anchor

        radiate_timeline(
            state,
            timelines.get(session.key, [SessionAnchor(session)]),
            anchor,
            session_key=session.key,
            depth=depth,
            anchor_adjusted=adjustment > 0,
        )


def place_orphans(state: LayoutPass, items: Iterable[EventItem]):
    """Put items without a known session on a ring around the origin, in encounter order and without collision
    checks. Every item gets a node, even when its id repeats one already placed.
    """
    config = state.config
    radius = config.orphan_radius
    angle = 0.0
    for item in items:
        dims = config.dimensions_for(item.kind)
        x, y = direction(angle) * radius
        state.nodes.append(
            PlacedNode(
                id=item.node_id,
                kind=item.kind,
                x=float(x),
                y=float(y),
                width=dims.width,
                height=dims.height,
                session_key=item.session_key,
                orphan=True,
                entity=item,
            )
        )
        angle += config.orphan_angle_step
