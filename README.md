# meshworks

Pure-Python tools for working with small 3D meshes. There are no third-party
dependencies.

## Modules

- `meshworks.geometry` provides `Vector` (`dot`, `cross`, `magnitude`,
  `normalized`), `Vector2D` and `BoundingBox` (with `intersect`, which returns
  the distance to the box or `None`). It also has these functions:
  - `intersect_ray_triangle(origin, direction, v0, v1, v2)` returns the hit
    distance or `None`.
  - `compute_bounding_box(points)`.
  - `mesh_ray_hits(origin, direction, positions, indices=None)` returns a
    `RayHits(count, distance)` pair. `distance` is the nearest hit.
- `meshworks.objparse` reads Wavefront OBJ and MTL text.
  - `parse_obj` and `parse_obj_lines` give an `ObjInfo`. Faces with three or
    four corners are triangulated and other faces are skipped.
  - `parse_material` and `parse_mtl_lines` fill in `ObjMaterialInfo` entries.
  - `combine_material_index` links each material subset to its material.
  - `convert_to_static_mesh` deduplicates `v/vt/vn` triples into `MeshVertex`
    records and indices, and computes the bounding box.
  - Bad input raises `ObjParseError`.
- `meshworks.assets` holds the asset types and the binary cache.
  - `Material`, `StaticMaterial` and `StaticMesh` are the asset types.
  - `save_static_mesh` and `load_static_mesh` write and read a compact binary
    mesh file. A truncated or invalid file raises `MeshFileError`.
  - `MeshManager` loads OBJ files and caches the render data, static meshes
    (keyed by file name) and materials (keyed by material name).
- `meshworks.simplify` provides `simplify(obj, target_vertex_count)`. It
  collapses the cheapest edges by quadric error until the `ObjInfo` has at most
  that many vertices, or until no edge is left. Degenerate faces are dropped
  along the way. `Quadric`, `face_quadric` and `collapse_cost` are the building
  blocks.
- `meshworks.viewport` provides `Viewport`, `ViewScreenLocation`, `Rect` and
  `ViewportRect`. They place one of four quadrant panes in one of three ways:
  from a screen size, from split rectangles, or from an explicit rectangle.
- `meshworks.components` provides `ActorComponent`, `SceneComponent` and
  `EndPlayReason`.
  - `ActorComponent` tracks its lifecycle: initialize, begin play, end play,
    register, activate and destroy. A step taken in the wrong state raises
    `ComponentStateError`.
  - `SceneComponent` adds a relative transform and parent/child attachment,
    with `world_location` and `world_scale` summed up the chain.

## Installation

```
pip install .
```

## Example

```python
from meshworks.assets import MeshManager
from meshworks.geometry import Vector, mesh_ray_hits
from meshworks.objparse import parse_obj
from meshworks.simplify import simplify

manager = MeshManager()
mesh = manager.create_static_mesh("Assets/cube.obj")
data = mesh.render_data

hits = mesh_ray_hits(Vector(0, 0, -5), Vector(0, 0, 1), data.vertices, data.indices)
print(hits.count, hits.distance)

raw = parse_obj("Assets/cube.obj")
simplify(raw, 6)
print(len(raw.vertices))
```

Loading an `.obj` through `MeshManager` writes a `<file>.obj.bin` cache next to
it if it can. Later loads read that cache instead of parsing the text again.
If the OBJ names materials, its MTL file must sit in the same directory.

## What it does not do

- It draws nothing. There is no renderer, window or GPU code.
- Texture images are not loaded. Texture file names and paths from MTL files
  are only recorded.
- There is no actor, level or world layer on top of the components. A
  component's `owner` is any object you assign that provides
  `remove_owned_component` and `set_root_component`.
- There is no command-line tool. It is a library only.

## Tests

```
pip install .[test]
pytest
```