from dataclasses import dataclass

import numpy as np

from session_layout.entities import Dimensions


@dataclass(frozen=True)
class Box:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def at(cls, x: float, y: float, dims: Dimensions) -> "Box":
        """Box of size dims whose top-left corner sits at (x, y)."""
        return cls(x, y, x + dims.width, y + dims.height)

    def as_array(self) -> np.ndarray:
        return np.array([self.left, self.top, self.right, self.bottom], dtype=float)


def overlaps(a: Box, b: Box, padding: float = 0.0) -> bool:
    """Check if two boxes overlap once both are grown by padding.

    The boxes are considered apart only when they are separated on at least one axis by more than the padding.
    Touching boxes, or boxes exactly `padding` apart, overlap.
    """
    return not (
        a.right + padding < b.left
        or b.right + padding < a.left
        or a.bottom + padding < b.top
        or b.bottom + padding < a.top
    )


def _overlaps_many(box: np.ndarray, boxes: np.ndarray, padding: float) -> np.ndarray:
    """Vectorized version of `overlaps` of one (4, ) box against an (n, 4) array of boxes."""
    left, top, right, bottom = box
    apart = (
        (right + padding < boxes[:, 0])
        | (boxes[:, 2] + padding < left)
        | (bottom + padding < boxes[:, 1])
        | (boxes[:, 3] + padding < top)
    )
    return ~apart


class PlacementRegistry:
    """Append-only record of the boxes placed so far in a single layout pass.

    Each pass creates its own registry; it is never shared between calls. Queries are linear in the number of
    registered boxes, which makes a full layout quadratic in the number of nodes. This is fine for the expected
    scale of tens to a few hundred nodes.
    """

    def __init__(self, capacity: int = 64):
        self._boxes = np.empty((max(int(capacity), 1), 4), dtype=float)
        self._size = 0

    def __len__(self):
        return self._size

    def __iter__(self):
        for row in self._boxes[: self._size]:
            yield Box(*(float(v) for v in row))

    @property
    def boxes(self) -> np.ndarray:
        """A read-only (n, 4) view of [left, top, right, bottom] rows, in registration order."""
        view = self._boxes[: self._size]
        view.flags.writeable = False
        return view

    def add(self, box: Box):
        if self._size == len(self._boxes):
            grown = np.empty((2 * len(self._boxes), 4), dtype=float)
            grown[: self._size] = self._boxes[: self._size]
            self._boxes = grown
        self._boxes[self._size] = box.as_array()
        self._size += 1

    def collides(self, box: Box, padding: float = 0.0) -> bool:
        if self._size == 0:
            return False
        return bool(
            np.any(_overlaps_many(box.as_array(), self._boxes[: self._size], padding))
        )


def collides(
    x: float, y: float, dims: Dimensions, registry: PlacementRegistry, padding: float = 0.0
) -> bool:
    """Check if a box of size dims with top-left corner (x, y) overlaps any box already in the registry."""
    return registry.collides(Box.at(x, y, dims), padding)
