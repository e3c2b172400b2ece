from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import MapDocument, MapLayout


class MapRepository(Protocol):
    def load_all(self, directory: Path) -> Sequence[MapDocument]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, MapDocument]]: ...

    def load_by_path(self, path: Path) -> MapDocument: ...

    def save(self, document: MapDocument, path: Path) -> None: ...


class LayoutRepository(Protocol):
    def save(self, layout: MapLayout, path: Path) -> None: ...
