from __future__ import annotations

from adapters.layout.orthogonal import OrthogonalLayoutConfig, OrthogonalLayoutEngine
from adapters.layout.tree import TreeLayoutConfig, TreeLayoutEngine
from app.config import AppSettings
from domain.ports.layout import MapLayoutEngine


def build_layout_engine(settings: AppSettings, engine: str | None = None) -> MapLayoutEngine:
    layout = settings.layout
    name = (engine or layout.engine).strip().lower()
    if name == "orthogonal":
        return OrthogonalLayoutEngine(
            OrthogonalLayoutConfig(
                compact_leaves=layout.compact_leaves,
                compaction_distance=layout.compaction_distance,
                flip_parent_threshold=layout.flip_parent_threshold,
            )
        )
    if name == "tree":
        return TreeLayoutEngine(TreeLayoutConfig(first_offset=layout.tree_first_offset))
    msg = f"Unknown layout engine: {name!r} (expected 'orthogonal' or 'tree')"
    raise ValueError(msg)
