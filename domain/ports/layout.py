from __future__ import annotations

from typing import List, Protocol

from domain.models import ActivityNode, GraphNode


class MapLayoutEngine(Protocol):
    name: str

    def layout(self, root: ActivityNode) -> List[GraphNode]:
        ...
