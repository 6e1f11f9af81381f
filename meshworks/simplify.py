"""Quadric error metric simplification of raw OBJ meshes."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Iterable, List, Set, Tuple

from meshworks.geometry import Vector
from meshworks.objparse import ObjInfo

QUADRIC_SIZE = 10


@dataclass
class Quadric:
    """The ten distinct entries of a symmetric 4x4 error quadric."""

    data: List[float] = field(default_factory=lambda: [0.0] * QUADRIC_SIZE)

    def __post_init__(self) -> None:
        if len(self.data) != QUADRIC_SIZE:
            raise ValueError(f"a quadric holds {QUADRIC_SIZE} values, got {len(self.data)}")
        self.data = [float(value) for value in self.data]

    def add(self, other: Quadric) -> None:
        """Add another quadric into this one."""
        self.data = [a + b for a, b in zip(self.data, other.data)]

    def copy(self) -> Quadric:
        return Quadric(list(self.data))


def face_quadric(p0: Vector, p1: Vector, p2: Vector) -> Quadric:
    """Return the quadric of the plane through a triangle."""
    normal = (p1 - p0).cross(p2 - p0).normalized()
    d = -normal.dot(p0)
    nx, ny, nz = normal.x, normal.y, normal.z
    return Quadric(
        [
            nx * nx, nx * ny, nx * nz, nx * d,
            ny * ny, ny * nz, ny * d,
            nz * nz, nz * d,
            d * d,
        ]
    )


def collapse_cost(q1: Quadric, q2: Quadric, position: Vector) -> float:
    """Return the error of placing the merged vertex at position."""
    q = q1.copy()
    q.add(q2)
    a = q.data
    x, y, z = position.x, position.y, position.z
    return (
        a[0] * x * x + 2.0 * a[1] * x * y + 2.0 * a[2] * x * z + 2.0 * a[3] * x
        + a[4] * y * y + 2.0 * a[5] * y * z + 2.0 * a[6] * y
        + a[7] * z * z + 2.0 * a[8] * z
        + a[9]
    )


def _faces(obj: ObjInfo) -> Iterable[Tuple[int, int, int]]:
    idx = obj.vertex_indices
    for start in range(0, len(idx) - len(idx) % 3, 3):
        yield idx[start], idx[start + 1], idx[start + 2]


def _vertex_quadrics(obj: ObjInfo) -> List[Quadric]:
    quadrics = [Quadric() for _ in obj.vertices]
    for v0, v1, v2 in _faces(obj):
        q = face_quadric(obj.vertices[v0], obj.vertices[v1], obj.vertices[v2])
        for corner in (v0, v1, v2):
            quadrics[corner].add(q)
    return quadrics


def _edges(obj: ObjInfo) -> Set[Tuple[int, int]]:
    edges: Set[Tuple[int, int]] = set()
    for face in _faces(obj):
        for j in range(3):
            a, b = face[j], face[(j + 1) % 3]
            if a != b:
                edges.add((min(a, b), max(a, b)))
    return edges


def _collapse_queue(obj: ObjInfo) -> List[Tuple[float, int, int]]:
    quadrics = _vertex_quadrics(obj)
    heap = []
    for a, b in _edges(obj):
        midpoint = (obj.vertices[a] + obj.vertices[b]) * 0.5
        heap.append((collapse_cost(quadrics[a], quadrics[b], midpoint), a, b))
    heapq.heapify(heap)
    return heap


def _drop_degenerate_faces(obj: ObjInfo) -> None:
    keep = [
        start
        for start, (a, b, c) in zip(range(0, len(obj.vertex_indices), 3), _faces(obj))
        if a != b and b != c and c != a
    ]

    def gather(values: List[int]) -> List[int]:
        return [values[s + k] for s in keep if s + 2 < len(values) for k in range(3)]

    obj.vertex_indices = gather(obj.vertex_indices)
    obj.normal_indices = gather(obj.normal_indices)
    obj.texture_indices = gather(obj.texture_indices)


def simplify(obj: ObjInfo, target_vertex_count: int) -> ObjInfo:
    """Collapse the cheapest edges until obj has at most target_vertex_count vertices.

    Each collapse removes the higher-numbered vertex of an edge, points its
    faces at the other one and drops faces that become degenerate. It stops
    early when no edge is left. The mesh is changed in place and returned.
    """
    if target_vertex_count < 0:
        return obj

    queue = _collapse_queue(obj)
    while len(obj.vertices) > target_vertex_count and queue:
        _, keep, gone = heapq.heappop(queue)
        del obj.vertices[gone]
        obj.vertex_indices = [
            keep if i == gone else i - 1 if i > gone else i for i in obj.vertex_indices
        ]
        _drop_degenerate_faces(obj)
        queue = _collapse_queue(obj)
    return obj