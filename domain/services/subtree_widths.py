from __future__ import annotations

from typing import Dict, List, Set

from domain.models import ActivityNode, CyclicGraphError


def compute_subtree_widths(root: ActivityNode) -> Dict[str, int]:
    """Count leaf descendants for every node reachable from ``root``.

    A leaf has width 1 and an internal node sums the widths of its
    successors, so a successor shared by two parents is counted under both.
    """
    widths: Dict[str, int] = {}
    in_progress: Set[str] = set()
    path: List[str] = []

    def visit(node: ActivityNode) -> int:
        if node.id in widths:
            return widths[node.id]
        if node.id in in_progress:
            start = path.index(node.id)
            raise CyclicGraphError(path[start:] + [node.id])
        in_progress.add(node.id)
        path.append(node.id)
        if not node.next:
            width = 1
        else:
            width = sum(visit(child) for child in node.next)
        path.pop()
        in_progress.discard(node.id)
        widths[node.id] = width
        return width

    visit(root)
    return widths
