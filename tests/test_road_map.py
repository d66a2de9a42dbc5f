"""Tests for building and point-querying the road map."""

import numpy as np
import pytest

from roadraster.core.config import RoadMapConfig
from roadraster.core.geometry import Rotator, Transform
from roadraster.core.road_map import (
    LANE_YAW_OFFSETS,
    MeshTag,
    RoadMap,
    RoadMapNotBuiltError,
    build_road_map,
    lane_direction,
)


def test_default_map_is_valid_empty():
    m = RoadMap()
    assert m.is_valid()
    assert (m.width, m.height) == (1, 1)
    assert m.pixels_per_centimeter == 1.0
    for pos in [(0.0, 0.0, 0.0), (1e6, -1e6, 3.0), (-5.0, 7.0, -2.0)]:
        cell = m.cell_at_world(pos)
        assert cell.is_off_road
        assert not cell.has_direction


@pytest.mark.parametrize(
    "args",
    [(0, 1, 1.0), (1, 0, 1.0), (2, 2, 0.0), (2, 2, -0.5)],
)
def test_configure_rejects_bad_arguments(args):
    m = RoadMap()
    with pytest.raises(ValueError):
        m.configure(*args)
    # failed configure leaves the previous map untouched
    assert m.is_valid()
    assert (m.width, m.height) == (1, 1)


def test_queries_before_build_completes_fail():
    m = RoadMap()
    m.configure(2, 2, 1.0)
    m.append_empty_cell()
    assert not m.is_valid()
    with pytest.raises(RoadMapNotBuiltError):
        m.cell_at_world((0.0, 0.0, 0.0))
    with pytest.raises(RoadMapNotBuiltError):
        m.intersect(Transform.identity(), (1.0, 1.0, 0.0), 1.0)


def test_append_past_capacity_fails(two_cell_map):
    with pytest.raises(RuntimeError):
        two_cell_map.append_empty_cell()


def test_two_cell_scenario(two_cell_map):
    m = two_cell_map
    assert m.is_valid()
    cell = m.cell_at_world(m.pixel_to_world(1.5, 0.5))
    assert not cell.is_off_road
    assert cell.has_direction
    np.testing.assert_allclose(cell.direction, [1.0, 0.0, 0.0], atol=1e-12)
    assert m.cell_at(0, 0).is_off_road
    # off the map on the left => border cell (0, 0)
    assert m.cell_at_world((-50.0, 0.0, 0.0)).is_off_road
    # off the map on the right => border cell (1, 0)
    assert not m.cell_at_world((50.0, 30.0, 0.0)).is_off_road


def test_every_tag_has_a_table_entry():
    assert set(LANE_YAW_OFFSETS) == set(MeshTag)


@pytest.mark.parametrize(
    "tag, expected",
    [
        (MeshTag.ROAD_TWO_LANES_LANE_RIGHT, [1.0, 0.0, 0.0]),
        (MeshTag.ROAD_90_DEG_TURN_LANE_0, [1.0, 0.0, 0.0]),
        (MeshTag.ROAD_TWO_LANES_LANE_LEFT, [-1.0, 0.0, 0.0]),
        (MeshTag.ROAD_90_DEG_TURN_LANE_1, [-1.0, 0.0, 0.0]),
        (MeshTag.ROAD_90_DEG_TURN_LANE_2, [0.0, 1.0, 0.0]),
        (MeshTag.ROAD_90_DEG_TURN_LANE_3, [0.0, -1.0, 0.0]),
    ],
)
def test_lane_direction_per_tag(tag, expected):
    np.testing.assert_allclose(lane_direction(tag, Transform.identity()), expected, atol=1e-12)
    inverted = lane_direction(tag, Transform.identity(), invert_direction=True)
    np.testing.assert_allclose(inverted, -np.asarray(expected), atol=1e-12)


@pytest.mark.parametrize(
    "tag",
    [MeshTag.ROAD_T_INTERSECTION, MeshTag.ROAD_X_INTERSECTION, MeshTag.OTHER, "sidewalk", "", None, 42],
)
def test_undirected_and_unknown_tags(tag):
    assert lane_direction(tag, Transform.identity()) is None
    assert lane_direction(tag, Transform.identity(), invert_direction=True) is None


def test_tag_given_by_value_or_name():
    d = lane_direction("road_90_deg_turn_lane_2", Transform.identity())
    np.testing.assert_allclose(d, [0.0, 1.0, 0.0], atol=1e-12)
    d = lane_direction("ROAD_TWO_LANES_LANE_LEFT", Transform.identity())
    np.testing.assert_allclose(d, [-1.0, 0.0, 0.0], atol=1e-12)


def test_yaw_offset_is_applied_to_the_rotator_not_the_vector():
    # with pitch, yaw+180 is not a plain negation of the forward vector
    t = Transform(rotation=Rotator(pitch=30.0, yaw=0.0))
    d = lane_direction(MeshTag.ROAD_TWO_LANES_LANE_LEFT, t)
    np.testing.assert_allclose(d, [-np.cos(np.radians(30.0)), 0.0, 0.5], atol=1e-12)


def test_lane_direction_follows_mesh_rotation():
    t = Transform(rotation=Rotator(yaw=90.0), translation=(500.0, 0.0, 0.0))
    d = lane_direction(MeshTag.ROAD_90_DEG_TURN_LANE_2, t)
    np.testing.assert_allclose(d, [-1.0, 0.0, 0.0], atol=1e-12)


def test_appended_cells_are_on_road_with_unit_direction():
    rng = np.random.default_rng(7)
    tags = list(MeshTag) + ["bogus"]
    m = RoadMap()
    m.configure(10, 10, 1.0)
    for i in range(100):
        rot = Rotator(*rng.uniform(-180.0, 180.0, size=3))
        m.append_cell(tags[i % len(tags)], Transform(rotation=rot), invert_direction=bool(i % 2))
    assert m.is_valid()
    for y in range(10):
        for x in range(10):
            cell = m.cell_at(x, y)
            assert not cell.is_off_road
            if cell.has_direction:
                assert np.linalg.norm(cell.direction) == pytest.approx(1.0, abs=1e-5)
            else:
                np.testing.assert_array_equal(cell.direction, 0.0)


def test_build_road_map_row_major(half_off_road_map):
    m = half_off_road_map
    assert (m.width, m.height) == (4, 2)
    for y in range(2):
        for x in range(4):
            assert m.cell_at(x, y).is_off_road == (x < 2)
            assert not m.cell_at(x, y).has_direction


def test_build_road_map_with_inversion():
    cells = [(MeshTag.ROAD_TWO_LANES_LANE_RIGHT, Transform.identity(), True)]
    m = build_road_map(1, 1, cells, config=RoadMapConfig(pixels_per_centimeter=2.0))
    assert m.pixels_per_centimeter == 2.0
    np.testing.assert_allclose(m.cell_at(0, 0).direction, [-1.0, 0.0, 0.0], atol=1e-12)


def test_build_road_map_wrong_cell_count():
    with pytest.raises(ValueError):
        build_road_map(2, 2, [None] * 3)
    with pytest.raises(ValueError):
        build_road_map(2, 2, [None] * 5)


def test_reconfigure_starts_new_build_pass(two_cell_map):
    m = two_cell_map
    m.configure(1, 1, 0.5, Transform.identity(), (10.0, 0.0, 0.0))
    assert not m.is_valid()
    m.append_cell(MeshTag.OTHER, Transform.identity())
    assert m.is_valid()
    assert m.pixels_per_centimeter == 0.5
    cell = m.cell_at_world((0.0, 0.0, 0.0))
    assert not cell.is_off_road and not cell.has_direction


def test_build_config_is_clamped_copy():
    cfg = RoadMapConfig(pixels_per_centimeter=1.0, checks_per_centimeter=-2.0)
    m = build_road_map(1, 1, [None], config=cfg)
    assert m.config.checks_per_centimeter > 0.0
    assert m.config is not cfg
    # caller's config untouched
    assert cfg.checks_per_centimeter == -2.0


def test_default_map_uses_default_config():
    assert RoadMap().config == RoadMapConfig()
