from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from adapters.layout.context import ChildSlot, OrthogonalLayoutContext, layer_offsets
from domain.models import ActivityNode, GraphCoord, GraphNode
from domain.ports.layout import MapLayoutEngine
from domain.services.graph_traversal import dfs_order, ensure_layout_root
from domain.services.layout_metrics import is_flipped_edge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrthogonalLayoutConfig:
    compact_leaves: bool = True
    compaction_distance: int = 2
    flip_parent_threshold: int = 2


class OrthogonalLayoutEngine(MapLayoutEngine):
    """Layered layout for maps whose branches merge again.

    Nodes are placed in a depth-first leaning order. The first child of a
    parent stays on the parent's row one layer deeper, later children open a
    new row below everything drawn so far. A node reached again through
    another parent is nudged one row down and kept deeper than that parent.
    """

    name = "orthogonal"

    def __init__(self, config: OrthogonalLayoutConfig | None = None) -> None:
        self.config = config or OrthogonalLayoutConfig()

    def layout(self, root: ActivityNode) -> List[GraphNode]:
        ensure_layout_root(root)
        context = OrthogonalLayoutContext()
        self._assign_coordinates(context, root)
        nodes = context.ordered(dfs_order(root))
        if self.config.compact_leaves:
            self._compact_leaves(nodes)
        self._route_edges(nodes)
        logger.debug(
            "Orthogonal layout of %s placed %d nodes, total offset %d",
            root.id,
            len(nodes),
            context.total_offset,
        )
        return nodes

    def _assign_coordinates(self, context: OrthogonalLayoutContext, root: ActivityNode) -> None:
        queue: Deque[GraphNode] = deque([context.node(root)])
        while queue:
            current = queue.popleft()
            if current.id in context.visited:
                continue
            context.visited.add(current.id)
            self._place(context, current)

            children = context.attach_children(current)
            for child in children:
                if child.id not in context.visited:
                    continue
                # Merge point: sit between the converging parents, deeper than this one.
                child.offset += 1
                context.total_offset = max(context.total_offset, child.offset)
                child.depth = max(child.depth, current.depth + 1)
            queue.extendleft(reversed(children))

    def _place(self, context: OrthogonalLayoutContext, current: GraphNode) -> None:
        if not current.parents:
            current.depth = 0
            current.offset = 0
            return
        parent = current.parents[0]
        slot = context.prev_child_position.get(parent.id) or ChildSlot()
        if slot.depth == 0:
            slot.depth = 1
            current.offset = parent.offset + slot.offset
        else:
            context.total_offset += 1
            slot.offset = context.total_offset
            current.offset = context.total_offset
        current.depth = parent.depth + slot.depth
        context.prev_child_position[parent.id] = slot

    def _compact_leaves(self, nodes: List[GraphNode]) -> None:
        offsets_by_depth = layer_offsets(nodes)
        moved = 0
        for node in nodes:
            if not node.is_leaf or len(node.parents) != 1:
                continue
            parent = node.parents[0]
            sibling_offset = _previous_offset(offsets_by_depth[node.depth], node.offset)
            # A neighbour at offset 0 counts as no neighbour at all.
            if sibling_offset:
                distance = node.offset - sibling_offset
            else:
                distance = abs(node.depth - parent.depth) + abs(node.offset - parent.offset)
            if distance <= self.config.compaction_distance:
                continue
            node.depth = parent.depth
            node.offset = (sibling_offset or parent.offset) + 1
            moved += 1
        if moved:
            logger.debug("Pulled %d leaf nodes back beside their parents", moved)

    def _route_edges(self, nodes: List[GraphNode]) -> None:
        offsets_by_depth = layer_offsets(nodes)
        flipped = 0
        for node in nodes:
            node.edges = []
            if not node.parents:
                continue
            # Vertical first when a parent shares the row or many parents converge.
            try_flip = any(parent.offset == node.offset for parent in node.parents) or (
                len(node.parents) > self.config.flip_parent_threshold
            )
            offsets = offsets_by_depth[node.depth]
            for parent in node.parents:
                if try_flip and _has_flip_space(offsets, node, parent):
                    bend = GraphCoord(parent.depth, node.offset)
                else:
                    bend = GraphCoord(node.depth, parent.offset)
                edge = [parent.coord, bend, node.coord]
                flipped += is_flipped_edge(edge)
                node.edges.append(edge)
        if flipped:
            logger.debug("Flipped %d edges", flipped)


def _previous_offset(offsets: List[int], offset: int) -> Optional[int]:
    index = offsets.index(offset)
    return offsets[index - 1] if index > 0 else None


def _has_flip_space(offsets: List[int], node: GraphNode, parent: GraphNode) -> bool:
    index = offsets.index(node.offset)
    if node.offset > parent.offset:
        if index + 1 >= len(offsets):
            return True
        return offsets[index + 1] - offsets[index] >= node.offset - parent.offset
    if node.offset < parent.offset:
        if index == 0:
            return True
        return offsets[index] - offsets[index - 1] >= parent.offset - node.offset
    return False
