from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import write_json_atomic
from domain.models import MapLayout
from domain.ports.repositories import LayoutRepository


class FileSystemLayoutRepository(LayoutRepository):
    def save(self, layout: MapLayout, path: Path) -> None:
        write_json_atomic(path, layout.to_dict())
