"""Tests for surfnet.vertices."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from surfnet import (
    EDGE_OFFSETS,
    NO_VERTEX,
    FieldSampler,
    cell_normal,
    find_center,
    find_edge,
    place_vertices,
)
from surfnet.fields import constant_field, single_corner_field


def _two_corner_field(x, y, z):
    return -1.0 if (x, y, z) in ((0, 0, 0), (1, 1, 1)) else 1.0


# ---------------------------------------------------------------------------
# Edge table
# ---------------------------------------------------------------------------

class TestEdgeTable:
    def test_twelve_unit_edges(self):
        assert len(EDGE_OFFSETS) == 12
        assert len(set(EDGE_OFFSETS)) == 12
        for a, b in EDGE_OFFSETS:
            diff = [bb - aa for aa, bb in zip(a, b)]
            assert sorted(diff) == [0, 0, 1]

    def test_three_edges_per_corner(self):
        for corner in [(0, 0, 0), (1, 1, 1), (0, 1, 0)]:
            touching = [e for e in EDGE_OFFSETS if corner in e]
            assert len(touching) == 3


# ---------------------------------------------------------------------------
# find_edge
# ---------------------------------------------------------------------------

class TestFindEdge:
    def test_same_sign_is_none(self):
        s = FieldSampler(1, constant_field(1.0))
        assert find_edge(s, (0, 0, 0), (0, 0, 0), (0, 0, 1)) is None

    def test_midpoint(self):
        s = FieldSampler(1, single_corner_field())
        point = find_edge(s, (0, 0, 0), (0, 0, 0), (1, 0, 0))
        npt.assert_allclose(point, (0.5, 0.0, 0.0))

    def test_interpolation_parameter(self):
        # value1 = -1 at z=0, value2 = 3 at z=1 -> t = 0.25
        s = FieldSampler(1, lambda x, y, z: -1.0 if z == 0 else 3.0)
        point = find_edge(s, (0, 0, 0), (0, 1, 0), (0, 1, 1))
        npt.assert_allclose(point, (0.0, 1.0, 0.25))

    def test_cell_offset_added(self):
        s = FieldSampler(3, lambda x, y, z: -1.0 if x <= 1 else 1.0)
        point = find_edge(s, (1, 2, 0), (0, 0, 1), (1, 0, 1))
        npt.assert_allclose(point, (1.5, 2.0, 1.0))

    def test_zero_counts_as_exterior(self):
        s = FieldSampler(1, lambda x, y, z: 0.0 if x == 0 else -2.0)
        point = find_edge(s, (0, 0, 0), (0, 0, 0), (1, 0, 0))
        npt.assert_allclose(point, (0.0, 0.0, 0.0))
        s = FieldSampler(1, lambda x, y, z: 0.0 if x == 0 else 2.0)
        assert find_edge(s, (0, 0, 0), (0, 0, 0), (1, 0, 0)) is None


# ---------------------------------------------------------------------------
# find_center
# ---------------------------------------------------------------------------

class TestFindCenter:
    def test_inactive_cell(self):
        s = FieldSampler(1, constant_field(-1.0))
        assert find_center(s, (0, 0, 0)) is None

    def test_single_negative_corner(self):
        s = FieldSampler(1, single_corner_field())
        npt.assert_allclose(find_center(s, (0, 0, 0)), (1 / 6, 1 / 6, 1 / 6))

    def test_opposite_corner(self):
        s = FieldSampler(1, single_corner_field((1, 1, 1)))
        npt.assert_allclose(find_center(s, (0, 0, 0)), (5 / 6, 5 / 6, 5 / 6))

    def test_planar_surface(self):
        # x = 0.5 plane -> every x-edge crosses at 0.5
        s = FieldSampler(2, lambda x, y, z: x - 0.5)
        npt.assert_allclose(find_center(s, (0, 1, 1)), (0.5, 1.5, 1.5))
        assert find_center(s, (1, 0, 0)) is None


# ---------------------------------------------------------------------------
# cell_normal
# ---------------------------------------------------------------------------

class TestCellNormal:
    def test_single_corner_diagonal(self):
        s = FieldSampler(1, single_corner_field())
        k = 1.0 / math.sqrt(3.0)
        npt.assert_allclose(cell_normal(s, (0, 0, 0)), (k, k, k))

    def test_points_toward_exterior(self):
        s = FieldSampler(2, lambda x, y, z: 1.0 - z)
        npt.assert_allclose(cell_normal(s, (0, 0, 0)), (0.0, 0.0, -1.0))

    def test_unit_length(self):
        s = FieldSampler(2, lambda x, y, z: 3.0 * x - y + 0.5 * z - 1.0)
        assert math.isclose(np.linalg.norm(cell_normal(s, (1, 1, 0))), 1.0)

    def test_degenerate_is_zero_vector(self):
        s = FieldSampler(1, _two_corner_field)
        assert cell_normal(s, (0, 0, 0)) == (0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# place_vertices
# ---------------------------------------------------------------------------

class TestPlaceVertices:
    def test_no_surface(self):
        placed = place_vertices(FieldSampler(3, constant_field(1.0)), 3)
        assert placed.positions.shape == (0, 3)
        assert placed.normals.shape == (0, 3)
        assert (placed.index_grid.values == NO_VERTEX).all()

    def test_sentinel_is_max_uint32(self):
        assert NO_VERTEX == 2 ** 32 - 1

    def test_scan_order_indices(self):
        # every cell touches the negative centre point
        placed = place_vertices(FieldSampler(2, single_corner_field((1, 1, 1))), 2)
        assert placed.positions.shape == (8, 3)
        for x in range(2):
            for y in range(2):
                for z in range(2):
                    assert placed.index_grid[x, y, z] == 4 * x + 2 * y + z
        npt.assert_allclose(placed.positions[0], (5 / 6, 5 / 6, 5 / 6), rtol=1e-6)
        npt.assert_allclose(placed.positions[7], (7 / 6, 7 / 6, 7 / 6), rtol=1e-6)

    def test_vertex_stays_in_its_cell(self):
        rng = np.random.default_rng(3)
        values = rng.normal(size=(6, 6, 6))
        placed = place_vertices(FieldSampler(5, lambda x, y, z: values[x, y, z]), 5)
        for x in range(5):
            for y in range(5):
                for z in range(5):
                    i = placed.index_grid[x, y, z]
                    if i == NO_VERTEX:
                        continue
                    p = placed.positions[i]
                    assert (p >= np.array([x, y, z]) - 1e-5).all()
                    assert (p <= np.array([x, y, z]) + 1 + 1e-5).all()

    def test_output_dtypes(self):
        placed = place_vertices(FieldSampler(1, single_corner_field()), 1)
        assert placed.positions.dtype == np.float32
        assert placed.normals.dtype == np.float32
        assert placed.index_grid.values.dtype == np.uint32

    def test_without_normals(self):
        placed = place_vertices(FieldSampler(1, single_corner_field()), 1,
                                compute_normals=False)
        assert placed.positions.shape == (1, 3)
        assert placed.normals.shape == (0, 3)

    def test_degenerate_count(self):
        placed = place_vertices(FieldSampler(1, _two_corner_field), 1)
        assert placed.degenerate_normals == 1
        npt.assert_array_equal(placed.normals, [[0.0, 0.0, 0.0]])
        npt.assert_allclose(placed.positions, [[0.5, 0.5, 0.5]])
