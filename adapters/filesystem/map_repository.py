from __future__ import annotations

from pathlib import Path
from typing import List

from adapters.filesystem.json_utils import load_json_text, write_json_atomic
from adapters.filesystem.map_utils import iter_map_paths, strip_map_comments
from domain.models import MapDocument
from domain.ports.repositories import MapRepository


class FileSystemMapRepository(MapRepository):
    def load_all(self, directory: Path) -> List[MapDocument]:
        return [document for _, document in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, MapDocument]]:
        return [(path, self.load_by_path(path)) for path in sorted(iter_map_paths(directory))]

    def load_by_path(self, path: Path) -> MapDocument:
        text = path.read_text(encoding="utf-8")
        content = load_json_text(strip_map_comments(text))
        return MapDocument.model_validate(content)

    def save(self, document: MapDocument, path: Path) -> None:
        write_json_atomic(path, document.model_dump(mode="json"))
