from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from adapters.layout.context import TreeLayoutContext
from domain.models import ActivityNode, GraphCoord, GraphNode
from domain.ports.layout import MapLayoutEngine
from domain.services.graph_traversal import bfs_order, ensure_layout_root
from domain.services.subtree_widths import compute_subtree_widths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeLayoutConfig:
    first_offset: int = 1


class TreeLayoutEngine(MapLayoutEngine):
    """Breadth-first layout that reserves one slot per leaf below each node."""

    name = "tree"

    def __init__(self, config: TreeLayoutConfig | None = None) -> None:
        self.config = config or TreeLayoutConfig()

    def layout(self, root: ActivityNode) -> List[GraphNode]:
        ensure_layout_root(root)
        context = TreeLayoutContext(widths=compute_subtree_widths(root))
        self._assign_coordinates(context, root)
        nodes = context.ordered(bfs_order(root))
        for node in nodes:
            node.edges = [
                [parent.coord, GraphCoord(node.depth, parent.offset), node.coord]
                for parent in node.parents
            ]
        logger.debug("Tree layout of %s placed %d nodes", root.id, len(nodes))
        return nodes

    def _assign_coordinates(self, context: TreeLayoutContext, root: ActivityNode) -> None:
        queue: Deque[GraphNode] = deque([context.node(root)])
        while queue:
            current = queue.popleft()
            current.width = context.widths[current.id]
            if current.parents:
                current.depth = min(parent.depth for parent in current.parents) + 1
            else:
                current.depth = 0
            slot = context.offset_map.setdefault(current.depth, self.config.first_offset)

            if current.id not in context.placed:
                current.offset = max([slot] + [parent.offset for parent in current.parents])
                context.offset_map[current.depth] = current.offset + current.width
                context.placed.add(current.id)

            children = context.attach_children(current)
            if current.id not in context.expanded:
                context.expanded.add(current.id)
                queue.extend(children)
