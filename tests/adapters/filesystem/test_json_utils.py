from __future__ import annotations

from pathlib import Path

import pytest

from adapters.filesystem.json_utils import load_json_text, write_json_atomic


def test_write_json_atomic_replaces_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out" / "m.layout.json"
    write_json_atomic(target, {"map_id": "old"})
    write_json_atomic(target, {"map_id": "new", "nodes": [{"depth": 0, "offset": 0}]})

    assert load_json_text(target.read_text(encoding="utf-8")) == {
        "map_id": "new",
        "nodes": [{"depth": 0, "offset": 0}],
    }
    assert target.read_text(encoding="utf-8").startswith("{\n  ")
    assert sorted(path.name for path in target.parent.iterdir()) == ["m.layout.json"]


def test_load_json_text_rejects_malformed_input() -> None:
    with pytest.raises(ValueError):
        load_json_text('{"map_id": ')
