"""Shared test fixtures."""

from __future__ import annotations

import pytest

from roadraster.core.geometry import Transform
from roadraster.core.road_map import MeshTag, RoadMap, build_road_map
from roadraster.core.config import RoadMapConfig

UNIT = RoadMapConfig(pixels_per_centimeter=1.0)


@pytest.fixture
def two_cell_map() -> RoadMap:
    """2x1: (0,0) off-road, (1,0) right lane heading +X."""
    m = RoadMap()
    m.configure(2, 1, 1.0, Transform.identity(), (0.0, 0.0, 0.0))
    m.append_empty_cell()
    m.append_cell(MeshTag.ROAD_TWO_LANES_LANE_RIGHT, Transform.identity())
    return m


@pytest.fixture
def off_road_map() -> RoadMap:
    return build_road_map(8, 8, [None] * 64, config=UNIT)


@pytest.fixture
def eastbound_map() -> RoadMap:
    """8x8, every cell a right lane heading +X."""
    cells = [(MeshTag.ROAD_TWO_LANES_LANE_RIGHT, Transform.identity())] * 64
    return build_road_map(8, 8, cells, config=UNIT)


@pytest.fixture
def half_off_road_map() -> RoadMap:
    """4x2: columns 0-1 off-road, columns 2-3 undirected road."""
    cells = []
    for _y in range(2):
        for x in range(4):
            cells.append(None if x < 2 else (MeshTag.ROAD_X_INTERSECTION, Transform.identity()))
    return build_road_map(4, 2, cells, config=UNIT)
