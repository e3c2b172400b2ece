from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List, Set

from domain.models import ActivityNode, GraphNode


@dataclass
class ChildSlot:
    """Placement of the previous child of a parent.

    ``depth`` turns to 1 once the slot beside the parent is taken, and
    ``offset`` holds the row of the latest child pushed to the bottom.
    """

    depth: int = 0
    offset: int = 0


@dataclass
class LayoutContext:
    nodes: Dict[str, GraphNode] = field(default_factory=dict)

    def node(self, activity: ActivityNode) -> GraphNode:
        graph_node = self.nodes.get(activity.id)
        if graph_node is None:
            graph_node = GraphNode(activity=activity)
            self.nodes[activity.id] = graph_node
        return graph_node

    def attach_children(self, current: GraphNode) -> List[GraphNode]:
        children: List[GraphNode] = []
        seen: Set[str] = set()
        for activity in current.next:
            if activity.id in seen:
                continue
            seen.add(activity.id)
            child = self.node(activity)
            child.add_parent(current)
            children.append(child)
        return children

    def ordered(self, activities: Iterable[ActivityNode]) -> List[GraphNode]:
        return [self.nodes[activity.id] for activity in activities]


@dataclass
class OrthogonalLayoutContext(LayoutContext):
    visited: Set[str] = field(default_factory=set)
    prev_child_position: Dict[str, ChildSlot] = field(default_factory=dict)
    total_offset: int = 0


@dataclass
class TreeLayoutContext(LayoutContext):
    widths: Dict[str, int] = field(default_factory=dict)
    offset_map: Dict[int, int] = field(default_factory=dict)
    placed: Set[str] = field(default_factory=set)
    expanded: Set[str] = field(default_factory=set)


def layer_offsets(nodes: Iterable[GraphNode]) -> Dict[int, List[int]]:
    offsets: Dict[int, List[int]] = defaultdict(list)
    for node in nodes:
        offsets[node.depth].append(node.offset)
    return {depth: sorted(values) for depth, values in offsets.items()}
