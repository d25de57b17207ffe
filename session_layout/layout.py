from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from session_layout.config import LayoutConfig
from session_layout.entities import EventItem, Origin, SessionEntity
from session_layout.hierarchy import group_by_depth, index_sessions, resolve_depths, spawn_edges
from session_layout.placement import (
    LayoutPass,
    PlacedNode,
    place_child_sessions,
    place_orphans,
    place_root_sessions,
)
from session_layout.timeline import build_timelines, partition_items


@dataclass
class LayoutResult:
    nodes: List[PlacedNode]
    depths: Dict[str, int]
    session_angles: Dict[str, float]
    spawn_edges: List[Tuple[str, str]] = field(default_factory=list)
    unresolved_collisions: int = 0

    @property
    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {node.id: node.position for node in self.nodes}

    def node(self, node_id: str) -> PlacedNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)


class RadialLayout:
    """Radial layout of agent sessions and their timelines around a fixed origin.

    Root sessions are spread evenly on a circle around the origin, spawned sessions are placed next to their parent
    with an angular spread that grows with the number of siblings, and every session radiates its own timeline of
    events outward along its ray. Overlaps are avoided locally: a candidate position that collides with an earlier
    placement is pushed outward in fixed steps, up to a bounded adjustment, after which it is accepted as is.

    The object only holds its configuration. Each call to `compute` builds its own placement registry, so the same
    instance can serve any number of successive or concurrent calls, and identical input in identical order always
    yields identical positions.

    Parameters
    ----------
    config: Optional[LayoutConfig] (default None)
        The layout constants. If None, the defaults of LayoutConfig are used.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config if config is not None else LayoutConfig()

    def compute(
        self,
        sessions: Iterable[SessionEntity],
        items: Iterable[EventItem],
        origin: Optional[Origin] = None,
        verbose: bool = False,
    ) -> LayoutResult:
        """
        Compute the position of the origin, of every session anchor and of every event item.

        Parameters
        ----------
        sessions: Iterable[SessionEntity]
            The sessions to lay out. Their order decides the order of roots around the origin and of siblings, so
            callers should keep it stable between calls (e.g. insertion order) to avoid a jittering layout.

        items: Iterable[EventItem]
            The events of the sessions. Items whose session is unknown are placed on the orphan ring.

        origin: Optional[Origin] (default None)
            The fixed center of the layout. If None, a default origin is used.

        verbose: bool (default False)
            If true, print progress messages.
        """
        config = self.config
        origin = origin if origin is not None else Origin()
        items = list(items)
        sessions_by_key = index_sessions(sessions)
        sessions = list(sessions_by_key.values())

        if verbose:
            print("Resolving session hierarchy...")
        depths = resolve_depths(sessions)
        groups = group_by_depth(sessions, depths)
        items_by_session, orphan_items = partition_items(items, sessions_by_key)
        timelines = build_timelines(sessions, items_by_session)

        state = LayoutPass(config=config)
        origin_dims = config.dimensions_for("origin")
        state.nodes.append(
            PlacedNode(
                id=origin.id,
                kind="origin",
                x=0.0,
                y=0.0,
                width=origin_dims.width,
                height=origin_dims.height,
                entity=origin,
            )
        )

        roots = groups.get(0, [])
        if verbose:
            print(f"Placing {len(roots)} root sessions...")
        place_root_sessions(state, roots, timelines)

        for depth in range(1, max(groups, default=0) + 1):
            sessions_at_depth = groups.get(depth, [])
            if verbose:
                print(f"Placing {len(sessions_at_depth)} sessions at depth {depth}...")
            place_child_sessions(state, sessions_at_depth, timelines, depth)

        if verbose and orphan_items:
            print(f"Placing {len(orphan_items)} orphan items...")
        place_orphans(state, orphan_items)

        if verbose and state.unresolved_collisions:
            print(
                f"Accepted {state.unresolved_collisions} placements that still overlap."
            )

        return LayoutResult(
            nodes=state.nodes,
            depths=depths,
            session_angles={key: anchor.angle for key, anchor in state.anchors.items()},
            spawn_edges=spawn_edges(sessions, depths),
            unresolved_collisions=state.unresolved_collisions,
        )


def layout_graph(
    sessions: Iterable[SessionEntity],
    items: Iterable[EventItem],
    config: Optional[LayoutConfig] = None,
    origin: Optional[Origin] = None,
    verbose: bool = False,
) -> LayoutResult:
    return RadialLayout(config).compute(sessions, items, origin=origin, verbose=verbose)
