"""Vector math, bounding boxes and ray intersection tests for meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Sequence

FLT_MAX = 3.4028234663852886e38
RAY_EPSILON = 1e-6


@dataclass(frozen=True)
class Vector:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector:
        """Return a unit vector in the same direction; the zero vector stays zero."""
        length = self.magnitude()
        if length == 0.0:
            return Vector()
        return self / length


@dataclass(frozen=True)
class Vector2D:
    """A two-component vector, used for texture coordinates."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    min: Vector = Vector()
    max: Vector = Vector()

    def intersect(self, origin: Vector, direction: Vector) -> Optional[float]:
        """Return the distance along the ray to the box, or None on a miss."""
        t_near, t_far = -math.inf, math.inf
        for o, d, lo, hi in zip(origin, direction, self.min, self.max):
            if abs(d) < 1e-12:
                if o < lo or o > hi:
                    return None
                continue
            t1, t2 = (lo - o) / d, (hi - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        if t_far < 0.0:
            return None
        return max(t_near, 0.0)


class RayHits(NamedTuple):
    """How many triangles a ray crossed and the nearest hit distance."""

    count: int
    distance: Optional[float]


def intersect_ray_triangle(
    origin: Vector, direction: Vector, v0: Vector, v1: Vector, v2: Vector
) -> Optional[float]:
    """Return the hit distance of a ray with a triangle, or None if it misses."""
    edge1 = v1 - v0
    edge2 = v2 - v0
    h = direction.cross(edge2)
    a = edge1.dot(h)
    if abs(a) < RAY_EPSILON:
        return None  # ray parallel to the triangle

    f = 1.0 / a
    s = origin - v0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return None

    q = s.cross(edge1)
    v = f * direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * edge2.dot(q)
    return t if t > RAY_EPSILON else None


def compute_bounding_box(points) -> BoundingBox:
    """Return the box enclosing the given points (anything with x, y and z)."""
    lo = [FLT_MAX, FLT_MAX, FLT_MAX]
    hi = [-FLT_MAX, -FLT_MAX, -FLT_MAX]
    for p in points:
        for axis, value in enumerate((p.x, p.y, p.z)):
            lo[axis] = min(lo[axis], value)
            hi[axis] = max(hi[axis], value)
    return BoundingBox(Vector(*lo), Vector(*hi))


def mesh_ray_hits(
    origin: Vector,
    direction: Vector,
    positions: Sequence,
    indices: Optional[Sequence[int]] = None,
) -> RayHits:
    """Count the triangles of a mesh that a ray hits and find the nearest one.

    Without indices the positions are taken three at a time. With indices the
    second and third corner of each triangle are swapped.
    """
    if not positions:
        return RayHits(0, None)

    def corner(i: int) -> Vector:
        p = positions[i]
        return p if isinstance(p, Vector) else Vector(p.x, p.y, p.z)

    if indices:
        triangles = (
            (indices[i], indices[i + 2], indices[i + 1])
            for i in range(0, len(indices) - len(indices) % 3, 3)
        )
    else:
        triangles = (
            (i, i + 1, i + 2)
            for i in range(0, len(positions) - len(positions) % 3, 3)
        )

    count = 0
    nearest: Optional[float] = None
    for a, b, c in triangles:
        hit = intersect_ray_triangle(origin, direction, corner(a), corner(b), corner(c))
        if hit is None:
            continue
        count += 1
        if nearest is None or hit < nearest:
            nearest = hit
    return RayHits(count, nearest)