from __future__ import annotations

import os
from collections.abc import Callable, Generator, Mapping, Sequence

import pytest

from domain.models import ActivityNode, MapDocument
from domain.services.build_activity_graph import build_activity_graph

GraphFactory = Callable[[str, Mapping[str, Sequence[str]]], ActivityNode]


def _clear_skillmap_env() -> None:
    for key in list(os.environ):
        if key.startswith("SKILLMAP_"):
            os.environ.pop(key, None)


_clear_skillmap_env()


@pytest.fixture(autouse=True)
def clear_skillmap_env() -> Generator[None, None, None]:
    _clear_skillmap_env()
    yield
    _clear_skillmap_env()


@pytest.fixture
def graph_factory() -> GraphFactory:
    def _factory(root_id: str, adjacency: Mapping[str, Sequence[str]]) -> ActivityNode:
        document = MapDocument(
            map_id="test",
            root_id=root_id,
            activities={key: list(value) for key, value in adjacency.items()},
        )
        return build_activity_graph(document)

    return _factory

