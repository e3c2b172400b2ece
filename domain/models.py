from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field, field_validator, model_validator


class LayoutError(ValueError):
    pass


class InvalidRootError(LayoutError):
    def __init__(self, root_id: str, reason: str) -> None:
        super().__init__(f"Invalid layout root {root_id!r}: {reason}")
        self.root_id = root_id


class CyclicGraphError(LayoutError):
    def __init__(self, cycle_path: List[str]) -> None:
        super().__init__(f"Cycle detected: {' -> '.join(cycle_path)}")
        self.cycle_path = cycle_path


class MapDocument(BaseModel):
    map_id: str = Field(..., min_length=1)
    root_id: str = Field(..., min_length=1)
    activities: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("activities", mode="after")
    @classmethod
    def ensure_unique_successors(cls, activities: Dict[str, List[str]]) -> Dict[str, List[str]]:
        # Order of successors drives placement, so keep the first occurrence.
        return {key: list(dict.fromkeys(value)) for key, value in activities.items()}

    @model_validator(mode="after")
    def ensure_root_declared(self) -> MapDocument:
        if self.root_id not in self.activity_ids():
            msg = f"root_id {self.root_id!r} is not an activity of map {self.map_id!r}"
            raise ValueError(msg)
        return self

    def activity_ids(self) -> Set[str]:
        referenced: Set[str] = set(self.activities.keys())
        for targets in self.activities.values():
            referenced.update(targets)
        return referenced


@dataclass(frozen=True, eq=False)
class ActivityNode:
    id: str
    next: List[ActivityNode] = field(default_factory=list)


@dataclass(frozen=True)
class GraphCoord:
    depth: int
    offset: int

    def to_dict(self) -> dict:
        return {"depth": self.depth, "offset": self.offset}


@dataclass(eq=False)
class GraphNode:
    """Layout state for one activity, owned by a single layout call."""

    activity: ActivityNode
    depth: int = 0
    offset: int = 0
    width: Optional[int] = None
    parents: List[GraphNode] = field(default_factory=list)
    edges: List[List[GraphCoord]] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.activity.id

    @property
    def next(self) -> List[ActivityNode]:
        return self.activity.next

    @property
    def coord(self) -> GraphCoord:
        return GraphCoord(self.depth, self.offset)

    @property
    def is_leaf(self) -> bool:
        return not self.activity.next

    def add_parent(self, parent: GraphNode) -> None:
        if all(existing.id != parent.id for existing in self.parents):
            self.parents.append(parent)

    def to_dict(self) -> dict:
        payload: dict = {
            "id": self.id,
            "next": [child.id for child in self.next],
            "depth": self.depth,
            "offset": self.offset,
        }
        if self.width is not None:
            payload["width"] = self.width
        payload["edges"] = [[point.to_dict() for point in edge] for edge in self.edges]
        return payload

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id!r}, depth={self.depth}, offset={self.offset})"


@dataclass(frozen=True)
class MapLayout:
    map_id: str
    engine: str
    nodes: List[GraphNode]

    def node(self, node_id: str) -> GraphNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def to_dict(self) -> dict:
        return {
            "map_id": self.map_id,
            "engine": self.engine,
            "nodes": [node.to_dict() for node in self.nodes],
        }
