from __future__ import annotations

import logging

from domain.models import MapDocument, MapLayout
from domain.ports.layout import MapLayoutEngine
from domain.services.build_activity_graph import build_activity_graph

logger = logging.getLogger(__name__)


class MapLayoutBuilder:
    def __init__(self, engine: MapLayoutEngine) -> None:
        self.engine = engine

    def build(self, document: MapDocument) -> MapLayout:
        root = build_activity_graph(document)
        nodes = self.engine.layout(root)
        unreachable = len(document.activity_ids()) - len(nodes)
        if unreachable:
            logger.info(
                "Map %s: %d activities are not reachable from %s and were skipped",
                document.map_id,
                unreachable,
                document.root_id,
            )
        return MapLayout(map_id=document.map_id, engine=self.engine.name, nodes=nodes)
