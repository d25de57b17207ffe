import dataclasses
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

from session_layout.entities import (
    DEFAULT_NODE_DIMENSIONS,
    FALLBACK_DIMENSIONS,
    Dimensions,
)

_NON_NEGATIVE_FIELDS = (
    "base_radius",
    "child_offset",
    "radial_spacing",
    "collision_padding",
    "min_sibling_angle",
    "min_angular_spread",
    "max_radius_adjustment",
    "max_offset_adjustment",
    "orphan_ring_offset",
)
_POSITIVE_FIELDS = ("radius_step", "offset_step", "orphan_angle_step")


@dataclass(frozen=True)
class LayoutConfig:
    """Named constants of the radial session layout.

    Parameters
    ----------
    base_radius: float (default 500)
        Distance between the origin and the anchor of every root session.

    child_offset: float (default 350)
        Distance between a parent anchor and the anchor of a spawned child session, before any collision retry.

    radial_spacing: float (default 160)
        Gap added after each timeline item, on top of its height, when walking a session ray outward.

    collision_padding: float (default 40)
        Padding applied to both boxes of every overlap test.

    min_sibling_angle: float (default 0.4)
        Minimum angle in radians (about 23 degrees) reserved per sibling when spreading the children of a session.

    min_angular_spread: float (default pi / 3)
        Minimum total angle in radians over which siblings are spread, regardless of their count.

    radius_step, max_radius_adjustment: float (default 30, 500)
        Increment and bound of the outward retries of timeline items. The retry loop stops once the accumulated
        adjustment reaches the bound and the last candidate is accepted even if it still collides.

    offset_step, max_offset_adjustment: float (default 50, 300)
        Increment and bound of the retries of child session anchors, with the same acceptance policy.

    orphan_ring_offset: float (default 300)
        Items without a resolvable session are placed on a ring of radius base_radius + orphan_ring_offset.

    orphan_angle_step: float (default pi / 6)
        Angle in radians between consecutive orphan items on the ring.

    node_dimensions: Mapping[str, Dimensions]
        Box size per node kind ('session', 'action', 'exec', 'origin'). Overrides are merged over
        DEFAULT_NODE_DIMENSIONS and stored read-only.

    fallback_dimensions: Dimensions (default 180 x 80)
        Box size of node kinds missing from node_dimensions.
    """

    base_radius: float = 500.0
    child_offset: float = 350.0
    radial_spacing: float = 160.0
    collision_padding: float = 40.0
    min_sibling_angle: float = 0.4
    min_angular_spread: float = math.pi / 3
    radius_step: float = 30.0
    max_radius_adjustment: float = 500.0
    offset_step: float = 50.0
    max_offset_adjustment: float = 300.0
    orphan_ring_offset: float = 300.0
    orphan_angle_step: float = math.pi / 6
    node_dimensions: Mapping[str, Dimensions] = field(
        default_factory=lambda: dict(DEFAULT_NODE_DIMENSIONS)
    )
    fallback_dimensions: Dimensions = FALLBACK_DIMENSIONS

    def __post_init__(self):
        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"Invalid value for {name}: {value}. It should be a finite, non-negative number."
                )
        # A zero step would make the bounded retry loops spin forever.
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(
                    f"Invalid value for {name}: {value}. It should be a finite, positive number."
                )

        dimensions: Dict[str, Dimensions] = dict(DEFAULT_NODE_DIMENSIONS)
        dimensions.update(self.node_dimensions)
        for kind, dims in list(dimensions.items()) + [
            ("fallback", self.fallback_dimensions)
        ]:
            if not (dims.width > 0 and dims.height > 0):
                raise ValueError(
                    f"Invalid dimensions for {kind}: {dims.width}x{dims.height}. Both sides should be positive."
                )
        object.__setattr__(self, "node_dimensions", MappingProxyType(dimensions))

    def __hash__(self):
        return hash(
            tuple(
                tuple(sorted(self.node_dimensions.items()))
                if f.name == "node_dimensions"
                else getattr(self, f.name)
                for f in dataclasses.fields(self)
            )
        )

    def dimensions_for(self, kind: str) -> Dimensions:
        return self.node_dimensions.get(kind, self.fallback_dimensions)

    @property
    def orphan_radius(self) -> float:
        return self.base_radius + self.orphan_ring_offset

    def replace(self, **changes) -> "LayoutConfig":
        return dataclasses.replace(self, **changes)
