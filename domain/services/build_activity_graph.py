from __future__ import annotations

from typing import Dict

from domain.models import ActivityNode, MapDocument


def build_activity_graph(document: MapDocument) -> ActivityNode:
    """Link the activities of ``document`` and return the root node.

    Successors that are only referenced, never declared, become leaves.
    """
    nodes: Dict[str, ActivityNode] = {}

    def node_for(activity_id: str) -> ActivityNode:
        node = nodes.get(activity_id)
        if node is None:
            node = ActivityNode(id=activity_id)
            nodes[activity_id] = node
        return node

    for activity_id, targets in document.activities.items():
        source = node_for(activity_id)
        source.next.extend(node_for(target) for target in targets)

    return node_for(document.root_id)
