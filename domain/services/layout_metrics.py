from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from domain.models import GraphCoord, GraphNode


@dataclass(frozen=True)
class LayoutMetrics:
    nodes: int
    edges: int
    max_depth: int
    max_offset: int
    layer_sizes: dict[int, int]
    merge_nodes: set[str]
    flipped_edges: int


def compute_layout_metrics(nodes: Sequence[GraphNode]) -> LayoutMetrics:
    layer_sizes = Counter(node.depth for node in nodes)
    flipped = sum(is_flipped_edge(edge) for node in nodes for edge in node.edges)
    return LayoutMetrics(
        nodes=len(nodes),
        edges=sum(len(node.edges) for node in nodes),
        max_depth=max((node.depth for node in nodes), default=0),
        max_offset=max((node.offset for node in nodes), default=0),
        layer_sizes=dict(sorted(layer_sizes.items())),
        merge_nodes={node.id for node in nodes if len(node.parents) > 1},
        flipped_edges=flipped,
    )


def is_flipped_edge(edge: Sequence[GraphCoord]) -> bool:
    # A flipped edge leaves its parent along the offset axis first.
    start, bend = edge[0], edge[1]
    return bend.depth == start.depth and bend.offset != start.offset
