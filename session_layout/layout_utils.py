from typing import Dict, Iterable, List, Tuple

import pandas as pd

from session_layout.layout import LayoutResult
from session_layout.placement import PlacedNode

FRAME_COLUMNS = [
    "id",
    "kind",
    "session_key",
    "depth",
    "x",
    "y",
    "width",
    "height",
    "ray_offset",
    "adjusted",
    "orphan",
]


def layout_to_frame(result: LayoutResult) -> pd.DataFrame:
    """
    Convert a layout result into a table with one row per placed node.

    Parameters
    ----------
    result : LayoutResult
        The output of a layout pass.

    Returns
    -------
    frame : pd.DataFrame
        Columns are FRAME_COLUMNS and rows follow the placement order of result.nodes: the origin, the root
        timelines, the child timelines by ascending depth and finally the orphans. Missing values (e.g. the depth of
        the origin) are NaN / None.
    """
    rows = [
        {column: getattr(node, column) for column in FRAME_COLUMNS}
        for node in result.nodes
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def group_nodes_by_session(nodes: Iterable[PlacedNode]) -> Dict[str, List[PlacedNode]]:
    groups: Dict[str, List[PlacedNode]] = {}
    for node in nodes:
        if node.session_key:
            groups.setdefault(node.session_key, []).append(node)
    return groups


def positions_by_id(nodes: Iterable[PlacedNode]) -> Dict[str, Tuple[float, float]]:
    return {node.id: node.position for node in nodes}
