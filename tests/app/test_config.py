from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from adapters.layout.orthogonal import OrthogonalLayoutEngine
from adapters.layout.tree import TreeLayoutEngine
from app.config import AppSettings, load_settings
from app.wiring import build_layout_engine


def test_defaults() -> None:
    settings = AppSettings()

    assert settings.layout.engine == "orthogonal"
    assert settings.layout.compaction_distance == 2
    assert settings.layout.log_level == "WARNING"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SKILLMAP_LAYOUT__ENGINE", "TREE")
    monkeypatch.setenv("SKILLMAP_LAYOUT__TREE_FIRST_OFFSET", "0")
    monkeypatch.setenv("SKILLMAP_LAYOUT__LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.layout.engine == "tree"
    assert settings.layout.tree_first_offset == 0
    assert settings.layout.log_level == "DEBUG"


def test_yaml_file(tmp_path: Path) -> None:
    config_path = tmp_path / "skillmap.yaml"
    config_path.write_text(
        "layout:\n  engine: tree\n  compact_leaves: false\n  map_dir: maps\n",
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.layout.engine == "tree"
    assert settings.layout.compact_leaves is False
    assert settings.layout.map_dir == Path("maps")
    assert AppSettings._yaml_path is None


def test_env_wins_over_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "skillmap.yaml"
    config_path.write_text("layout:\n  engine: tree\n", encoding="utf-8")
    monkeypatch.setenv("SKILLMAP_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("SKILLMAP_LAYOUT__ENGINE", "orthogonal")

    assert load_settings().layout.engine == "orthogonal"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_settings(tmp_path / "absent.yaml")


def test_unknown_engine_in_settings_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AppSettings.model_validate({"layout": {"engine": "force"}})


def test_wiring_builds_configured_engines() -> None:
    settings = AppSettings.model_validate(
        {"layout": {"compaction_distance": 5, "flip_parent_threshold": 3, "tree_first_offset": 0}}
    )

    orthogonal = build_layout_engine(settings)
    assert isinstance(orthogonal, OrthogonalLayoutEngine)
    assert orthogonal.config.compaction_distance == 5
    assert orthogonal.config.flip_parent_threshold == 3

    tree = build_layout_engine(settings, "tree")
    assert isinstance(tree, TreeLayoutEngine)
    assert tree.config.first_offset == 0


def test_wiring_rejects_unknown_engine() -> None:
    with pytest.raises(ValueError, match="Unknown layout engine"):
        build_layout_engine(AppSettings(), "radial")
