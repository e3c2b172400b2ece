from __future__ import annotations

import json
from pathlib import Path

from adapters.filesystem.layout_repository import FileSystemLayoutRepository
from adapters.filesystem.map_repository import FileSystemMapRepository
from adapters.filesystem.map_utils import layout_path_for, strip_map_comments
from adapters.layout.orthogonal import OrthogonalLayoutEngine
from domain.models import MapDocument
from domain.services.layout_map import MapLayoutBuilder


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_all_skips_layout_outputs(tmp_path: Path) -> None:
    _write(tmp_path / "b.json", '{"map_id": "b", "root_id": "x", "activities": {"x": []}}')
    _write(tmp_path / "a.json", '{"map_id": "a", "root_id": "x", "activities": {"x": []}}')
    _write(tmp_path / "a.layout.json", '{"map_id": "a", "engine": "tree", "nodes": []}')

    documents = FileSystemMapRepository().load_all(tmp_path)

    assert [document.map_id for document in documents] == ["a", "b"]


def test_line_comments_are_ignored(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "commented.json",
        '// intro map\n{"map_id": "c", "root_id": "x", // root\n'
        ' "activities": {"x": ["https://example.org"]}}\n',
    )

    document = FileSystemMapRepository().load_by_path(path)

    assert document.activities == {"x": ["https://example.org"]}


def test_strip_comments_keeps_escaped_quotes() -> None:
    line = '{"id": "say \\"hi\\" // not a comment"} // trailing'

    assert strip_map_comments(line) == '{"id": "say \\"hi\\" // not a comment"} '


def test_save_roundtrip(tmp_path: Path) -> None:
    document = MapDocument(map_id="m", root_id="r", activities={"r": ["a"]})
    repo = FileSystemMapRepository()
    target = tmp_path / "nested" / "m.json"

    repo.save(document, target)

    assert repo.load_by_path(target) == document


def test_layout_repository_writes_json(tmp_path: Path) -> None:
    document = MapDocument(map_id="m", root_id="r", activities={"r": ["a", "b"]})
    layout = MapLayoutBuilder(OrthogonalLayoutEngine()).build(document)
    target = layout_path_for(Path("maps/m.json"), tmp_path / "out")

    FileSystemLayoutRepository().save(layout, target)

    assert target.name == "m.layout.json"
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["engine"] == "orthogonal"
    assert [(node["id"], node["depth"], node["offset"]) for node in payload["nodes"]] == [
        ("r", 0, 0),
        ("a", 1, 0),
        ("b", 1, 1),
    ]
    assert not target.with_suffix(".json.tmp").exists()
