from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Set

from domain.models import ActivityNode, CyclicGraphError, InvalidRootError


def bfs_order(root: ActivityNode) -> List[ActivityNode]:
    """Breadth-first visitation order, each id reported once."""
    nodes: List[ActivityNode] = []
    visited: Set[str] = set()
    queue: Deque[ActivityNode] = deque([root])
    while queue:
        current = queue.popleft()
        if current.id in visited:
            continue
        visited.add(current.id)
        nodes.append(current)
        queue.extend(current.next)
    return nodes


def dfs_order(root: ActivityNode) -> List[ActivityNode]:
    """Preorder walk that pushes successors to the front of the queue.

    Successors keep their declared order, and the newest batch is always
    visited before siblings that were queued earlier.
    """
    nodes: List[ActivityNode] = []
    visited: Set[str] = set()
    queue: Deque[ActivityNode] = deque([root])
    while queue:
        current = queue.popleft()
        if current.id in visited:
            continue
        visited.add(current.id)
        nodes.append(current)
        queue.extendleft(reversed(current.next))
    return nodes


def find_cycle(root: ActivityNode) -> Optional[List[str]]:
    color: dict[str, int] = {}
    path: List[str] = []
    stack: List[tuple[ActivityNode, int]] = [(root, 0)]
    color[root.id] = 1
    path.append(root.id)
    while stack:
        node, index = stack[-1]
        if index >= len(node.next):
            stack.pop()
            path.pop()
            color[node.id] = 2
            continue
        stack[-1] = (node, index + 1)
        child = node.next[index]
        state = color.get(child.id, 0)
        if state == 0:
            color[child.id] = 1
            path.append(child.id)
            stack.append((child, 0))
        elif state == 1:
            start = path.index(child.id)
            return path[start:] + [child.id]
    return None


def ensure_layout_root(root: ActivityNode) -> None:
    if getattr(root, "parents", None):
        raise InvalidRootError(root.id, "root already has parents")
    for node in bfs_order(root):
        if any(child.id == root.id for child in node.next):
            raise InvalidRootError(root.id, f"root is a successor of {node.id!r}")
    cycle = find_cycle(root)
    if cycle is not None:
        raise CyclicGraphError(cycle)
