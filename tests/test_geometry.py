import math

import pytest

from meshworks.geometry import (
    FLT_MAX,
    BoundingBox,
    Vector,
    Vector2D,
    compute_bounding_box,
    intersect_ray_triangle,
    mesh_ray_hits,
)


def _triangle_at(z):
    return Vector(-1, -1, z), Vector(1, -1, z), Vector(0, 1, z)


def test_cross_is_perpendicular_to_both():
    a, b = Vector(1, 2, 3), Vector(-4, 5, 0.5)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)


def test_cross_of_axes():
    assert Vector(1, 0, 0).cross(Vector(0, 1, 0)) == Vector(0, 0, 1)


def test_arithmetic_round_trip():
    a, b = Vector(1.5, -2, 3), Vector(0.5, 4, -1)
    assert (a + b) - b == a
    assert (a * 2) / 2 == a
    assert -(-a) == a


def test_normalized_has_unit_length_and_same_direction():
    v = Vector(3, -7, 2)
    n = v.normalized()
    assert n.magnitude() == pytest.approx(1.0)
    assert n.dot(v) == pytest.approx(v.magnitude())


def test_normalized_zero_stays_zero():
    assert Vector().normalized() == Vector()


def test_vector2d_fields():
    uv = Vector2D(0.25, 0.75)
    assert (uv.x, uv.y) == (0.25, 0.75)


def test_ray_hits_triangle_at_its_depth():
    hit = intersect_ray_triangle(Vector(0, 0, 0), Vector(0, 0, 1), *_triangle_at(2.0))
    assert hit == pytest.approx(2.0)


def test_ray_parallel_to_triangle_misses():
    assert intersect_ray_triangle(Vector(0, 0, 0), Vector(1, 0, 0), *_triangle_at(2.0)) is None


def test_ray_outside_triangle_misses():
    assert intersect_ray_triangle(Vector(5, 5, 0), Vector(0, 0, 1), *_triangle_at(2.0)) is None


def test_triangle_behind_ray_misses():
    assert intersect_ray_triangle(Vector(0, 0, 0), Vector(0, 0, 1), *_triangle_at(-2.0)) is None


def test_compute_bounding_box_encloses_points():
    points = [Vector(1, -2, 3), Vector(-4, 5, 0), Vector(2, 2, -6)]
    box = compute_bounding_box(points)
    assert box.min == Vector(-4, -2, -6)
    assert box.max == Vector(2, 5, 3)


def test_compute_bounding_box_empty_is_inverted():
    box = compute_bounding_box([])
    assert box.min == Vector(FLT_MAX, FLT_MAX, FLT_MAX)
    assert box.max == Vector(-FLT_MAX, -FLT_MAX, -FLT_MAX)


def test_box_intersect_from_outside():
    box = BoundingBox(Vector(-1, -1, -1), Vector(1, 1, 1))
    hit = box.intersect(Vector(0, 0, -5), Vector(0, 0, 1))
    assert hit == pytest.approx(4.0)


def test_box_intersect_miss_and_behind():
    box = BoundingBox(Vector(-1, -1, -1), Vector(1, 1, 1))
    assert box.intersect(Vector(5, 5, -5), Vector(0, 0, 1)) is None
    assert box.intersect(Vector(0, 0, 5), Vector(0, 0, 1)) is None


def test_mesh_ray_hits_counts_and_nearest_without_indices():
    positions = [*_triangle_at(3.0), *_triangle_at(1.0)]
    hits = mesh_ray_hits(Vector(0, 0, 0), Vector(0, 0, 1), positions)
    assert hits.count == 2
    assert hits.distance == pytest.approx(1.0)


def test_mesh_ray_hits_with_indices():
    positions = list(_triangle_at(3.0))
    hits = mesh_ray_hits(Vector(0, 0, 0), Vector(0, 0, 1), positions, [0, 1, 2, 2, 1, 0])
    assert hits.count == 2
    assert hits.distance == pytest.approx(3.0)


def test_mesh_ray_hits_empty_mesh():
    hits = mesh_ray_hits(Vector(0, 0, 0), Vector(0, 0, 1), [])
    assert hits.count == 0
    assert hits.distance is None


def test_mesh_ray_hits_miss():
    hits = mesh_ray_hits(Vector(9, 9, 0), Vector(0, 0, 1), list(_triangle_at(1.0)))
    assert hits.count == 0
    assert hits.distance is None
    assert math.isfinite(FLT_MAX)