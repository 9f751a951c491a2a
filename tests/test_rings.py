"""
Tests for ring emission and stitching.
"""

from math import cos, pi, sin

import pytest

from threadmesh.core.mesh import Mesh
from threadmesh.core.rings import RingDescriptor, build_ring, emit_polygon, stitch_rings
from threadmesh.enums import Hand, RingKind


@pytest.fixture
def six_steps(make_params):
    return make_params(steps_per_turn=6, turns=1)


class TestRingDescriptor:
    def test_index_wraps_around(self):
        ring = RingDescriptor(start=12, size=6, kind=RingKind.INNER, radius=1.0)
        assert ring.index(0) == 12
        assert ring.index(5) == 17
        assert ring.index(6) == 12
        assert ring.index(-1) == 17
        assert ring.index(-2) == 16

    def test_first_last_indices(self):
        ring = RingDescriptor(start=4, size=3, kind=RingKind.CREST, radius=1.2)
        assert ring.first == 4
        assert ring.last == 6
        assert list(ring.indices) == [4, 5, 6]


class TestBuildRing:
    def test_ramp_ring_positions(self, six_steps):
        mesh = Mesh()
        ring = build_ring(mesh, six_steps, 2.0, 0.5, 0.6, True, RingKind.INNER)

        assert ring == RingDescriptor(start=0, size=6, kind=RingKind.INNER, radius=2.0)
        for step in range(6):
            angle = 2 * pi * step / 6
            x, y, z = mesh.vertex_at(ring.index(step))
            assert x == pytest.approx(cos(angle) * 2.0)
            assert z == pytest.approx(sin(angle) * 2.0)
            assert y == pytest.approx(0.5 + 0.1 * step)

    def test_ramp_stops_one_step_short_of_full_turn(self, six_steps):
        mesh = Mesh()
        ring = build_ring(mesh, six_steps, 1.0, 0.0, 0.6, True, RingKind.INNER)
        assert mesh.vertex_at(ring.last)[1] == pytest.approx(0.5)

    def test_flat_ring_is_planar_at_offset_height(self, six_steps):
        mesh = Mesh()
        ring = build_ring(mesh, six_steps, 1.0, 0.7, 0.4, False, RingKind.FLAT)
        heights = {round(mesh.vertex_at(i)[1], 12) for i in ring.indices}
        assert heights == {1.1}

    def test_start_follows_existing_vertices(self, six_steps):
        mesh = Mesh()
        mesh.append_vertex((0, 0, 0))
        ring = build_ring(mesh, six_steps, 1.0, 0.0, 0.3, True, RingKind.CREST)
        assert ring.start == 1
        assert mesh.vertex_count() == 7

    def test_right_hand_mirrors_z(self, six_steps):
        left, right = Mesh(), Mesh()
        build_ring(left, six_steps, 1.0, 0.0, 0.3, True, RingKind.INNER)
        build_ring(right, six_steps.model_copy(update={"hand": Hand.RIGHT}),
                   1.0, 0.0, 0.3, True, RingKind.INNER)

        for (lx, ly, lz), (rx, ry, rz) in zip(left.vertices, right.vertices):
            assert (rx, ry) == (lx, ly)
            assert rz == pytest.approx(-lz)


class TestStitchRings:
    def test_quads_follow_ring_order(self, six_steps):
        mesh = Mesh()
        lower = build_ring(mesh, six_steps, 1.0, 0.0, 0.3, True, RingKind.INNER)
        upper = build_ring(mesh, six_steps, 1.2, 0.15, 0.3, True, RingKind.CREST)

        count = stitch_rings(mesh, six_steps, lower, upper)

        assert count == 5
        assert mesh.polygons == [
            (0, 1, 7, 6),
            (1, 2, 8, 7),
            (2, 3, 9, 8),
            (3, 4, 10, 9),
            (4, 5, 11, 10),
        ]

    def test_wrap_edge_left_open(self, six_steps):
        mesh = Mesh()
        lower = build_ring(mesh, six_steps, 1.0, 0.0, 0.3, True, RingKind.INNER)
        upper = build_ring(mesh, six_steps, 1.2, 0.15, 0.3, True, RingKind.CREST)
        stitch_rings(mesh, six_steps, lower, upper)

        for polygon in mesh.polygons:
            assert not {lower.last, lower.first} <= set(polygon)

    def test_step_subset(self, six_steps):
        mesh = Mesh()
        lower = build_ring(mesh, six_steps, 1.0, 0.0, 0.3, True, RingKind.INNER)
        upper = build_ring(mesh, six_steps, 1.0, 0.3, 0.0, False, RingKind.FLAT)

        assert stitch_rings(mesh, six_steps, lower, upper, steps=range(1, 3)) == 2
        assert mesh.polygons == [(1, 2, 8, 7), (2, 3, 9, 8)]

    def test_size_mismatch_rejected(self, six_steps, make_params):
        mesh = Mesh()
        lower = build_ring(mesh, six_steps, 1.0, 0.0, 0.3, True, RingKind.INNER)
        upper = build_ring(mesh, make_params(steps_per_turn=5), 1.2, 0.15, 0.3, True, RingKind.CREST)

        with pytest.raises(ValueError, match="different sizes"):
            stitch_rings(mesh, six_steps, lower, upper)
        assert mesh.polygon_count() == 0


class TestEmitPolygon:
    def test_left_hand_keeps_order(self, six_steps):
        mesh = Mesh()
        for _ in range(4):
            mesh.append_vertex((0, 0, 0))
        emit_polygon(mesh, six_steps, (0, 1, 2, 3))
        assert mesh.polygons == [(0, 1, 2, 3)]

    def test_right_hand_reverses_order(self, six_steps):
        mesh = Mesh()
        for _ in range(3):
            mesh.append_vertex((0, 0, 0))
        emit_polygon(mesh, six_steps.model_copy(update={"hand": Hand.RIGHT}), (0, 1, 2))
        assert mesh.polygons == [(2, 1, 0)]
