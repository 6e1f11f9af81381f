"""Parsing of Wavefront OBJ and MTL text into mesh render data."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, List, Optional

from meshworks.geometry import Vector, Vector2D, compute_bounding_box

NO_INDEX = 0xFFFFFFFF

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ObjParseError(ValueError):
    """Raised when OBJ or MTL text cannot be understood."""


@dataclass
class MaterialSubset:
    """A run of indices drawn with one material."""

    material_name: str = ""
    index_start: int = 0
    index_count: int = 0
    material_index: int = 0


@dataclass
class ObjMaterialInfo:
    """Material properties read from an MTL file."""

    mtl_name: str = ""
    has_texture: bool = False
    transparent: bool = False
    diffuse: Vector = Vector()
    specular: Vector = Vector()
    ambient: Vector = Vector()
    emissive: Vector = Vector()
    specular_scalar: float = 0.0
    density_scalar: float = 0.0
    transparency_scalar: float = 0.0
    illuminance_model: int = 0
    diffuse_texture_name: str = ""
    diffuse_texture_path: str = ""
    ambient_texture_name: str = ""
    ambient_texture_path: str = ""
    specular_texture_name: str = ""
    specular_texture_path: str = ""
    bump_texture_name: str = ""
    bump_texture_path: str = ""
    alpha_texture_name: str = ""
    alpha_texture_path: str = ""


@dataclass
class MeshVertex:
    """One vertex of cooked mesh data."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0
    nx: float = 0.0
    ny: float = 0.0
    nz: float = 0.0
    u: float = 0.0
    v: float = 0.0
    material_index: int = 0

    @property
    def position(self) -> Vector:
        return Vector(self.x, self.y, self.z)


@dataclass
class ObjInfo:
    """Raw contents of an OBJ file."""

    path_name: str = ""
    object_name: str = ""
    display_name: str = ""
    mat_name: str = ""
    group_names: List[str] = field(default_factory=list)
    num_of_group: int = 0
    vertices: List[Vector] = field(default_factory=list)
    normals: List[Vector] = field(default_factory=list)
    uvs: List[Vector2D] = field(default_factory=list)
    vertex_indices: List[int] = field(default_factory=list)
    texture_indices: List[int] = field(default_factory=list)
    normal_indices: List[int] = field(default_factory=list)
    material_subsets: List[MaterialSubset] = field(default_factory=list)


@dataclass
class StaticMeshRenderData:
    """Cooked mesh data: unique vertices, triangle indices and materials."""

    object_name: str = ""
    path_name: str = ""
    display_name: str = ""
    vertices: List[MeshVertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    materials: List[ObjMaterialInfo] = field(default_factory=list)
    material_subsets: List[MaterialSubset] = field(default_factory=list)
    bounding_box_min: Vector = Vector()
    bounding_box_max: Vector = Vector()


def _floats(tokens: List[str], count: int) -> List[float]:
    values = []
    for token in tokens[:count]:
        try:
            values.append(float(token))
        except ValueError:
            raise ObjParseError(f"not a number: {token!r}") from None
    return values + [0.0] * (count - len(values))


def _first_word(tokens: List[str]) -> str:
    return tokens[0] if tokens else ""


def _obj_index(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ObjParseError(f"bad face index: {text!r}")
    return (int(match.group(1)) - 1) & 0xFFFFFFFF


def _close_last_subset(info: ObjInfo) -> None:
    if info.material_subsets:
        last = info.material_subsets[-1]
        last.index_count = len(info.vertex_indices) - last.index_start


def _split_path(path: str):
    cut = max(path.rfind("/"), path.rfind("\\")) + 1
    object_name = path[cut:]
    dot = object_name.rfind(".")
    display = object_name[:dot] if dot != -1 else object_name
    return path[:cut], object_name, display


def parse_obj_lines(lines: Iterable[str], path: str) -> ObjInfo:
    """Parse OBJ text lines; path names the file the lines came from."""
    info = ObjInfo()
    info.path_name, info.object_name, info.display_name = _split_path(str(path))

    for line in lines:
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            continue
        keyword, rest = tokens[0], tokens[1:]

        if keyword == "mtllib":
            info.mat_name = _first_word(rest)
        elif keyword == "usemtl":
            _close_last_subset(info)
            info.material_subsets.append(
                MaterialSubset(
                    material_name=_first_word(rest),
                    index_start=len(info.vertex_indices),
                )
            )
        elif keyword in ("g", "o"):
            info.group_names.append(_first_word(rest))
            info.num_of_group += 1
        elif keyword == "v":
            info.vertices.append(Vector(*_floats(rest, 3)))
        elif keyword == "vn":
            info.normals.append(Vector(*_floats(rest, 3)))
        elif keyword == "vt":
            info.uvs.append(Vector2D(*_floats(rest, 2)))
        elif keyword == "f":
            _add_face(info, rest)

    _close_last_subset(info)
    return info


def _add_face(info: ObjInfo, corners: List[str]) -> None:
    verts, texs, norms = [], [], []
    for corner in corners:
        pieces = corner.split("/")
        verts.append(_obj_index(pieces[0]) if pieces[0] else 0)
        texs.append(_obj_index(pieces[1]) if len(pieces) > 1 and pieces[1] else NO_INDEX)
        norms.append(_obj_index(pieces[2]) if len(pieces) > 2 and pieces[2] else NO_INDEX)

    if len(verts) == 4:
        order = (0, 1, 2, 0, 2, 3)
    elif len(verts) == 3:
        order = (0, 1, 2)
    else:
        return
    info.vertex_indices.extend(verts[i] for i in order)
    info.texture_indices.extend(texs[i] for i in order)
    info.normal_indices.extend(norms[i] for i in order)


def parse_obj(path) -> ObjInfo:
    """Read and parse an OBJ file."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_obj_lines(handle, str(path))


def parse_mtl_lines(
    lines: Iterable[str], obj_info: ObjInfo, render_data: StaticMeshRenderData
) -> StaticMeshRenderData:
    """Parse MTL text lines into the materials of render_data."""
    render_data.material_subsets = [replace(s) for s in obj_info.material_subsets]

    def current() -> ObjMaterialInfo:
        if not render_data.materials:
            raise ObjParseError("material property before any newmtl")
        return render_data.materials[-1]

    for line in lines:
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            continue
        keyword, rest = tokens[0], tokens[1:]

        if keyword == "newmtl":
            render_data.materials.append(ObjMaterialInfo(mtl_name=_first_word(rest)))
        elif keyword == "Kd":
            current().diffuse = Vector(*_floats(rest, 3))
        elif keyword == "Ks":
            current().specular = Vector(*_floats(rest, 3))
        elif keyword == "Ka":
            current().ambient = Vector(*_floats(rest, 3))
        elif keyword == "Ke":
            current().emissive = Vector(*_floats(rest, 3))
        elif keyword == "Ns":
            current().specular_scalar = _floats(rest, 1)[0]
        elif keyword == "Ni":
            current().density_scalar = _floats(rest, 1)[0]
        elif keyword in ("d", "Tr"):
            material = current()
            material.transparency_scalar = _floats(rest, 1)[0]
            material.transparent = True
        elif keyword == "illum":
            material = current()
            try:
                material.illuminance_model = int(rest[0]) if rest else 0
            except ValueError:
                raise ObjParseError(f"bad illum value: {rest[0]!r}") from None
        elif keyword == "map_Kd":
            material = current()
            material.diffuse_texture_name = _first_word(rest)
            material.diffuse_texture_path = obj_info.path_name + material.diffuse_texture_name
            material.has_texture = True
    return render_data


def parse_material(obj_info: ObjInfo, render_data: StaticMeshRenderData) -> StaticMeshRenderData:
    """Read the MTL file named by obj_info into render_data."""
    render_data.material_subsets = [replace(s) for s in obj_info.material_subsets]
    mtl_path = Path(obj_info.path_name + obj_info.mat_name)
    with open(mtl_path, encoding="utf-8", errors="replace") as handle:
        return parse_mtl_lines(handle, obj_info, render_data)


def combine_material_index(render_data: StaticMeshRenderData) -> None:
    """Point each subset at the first material carrying its name."""
    for subset in render_data.material_subsets:
        for index, material in enumerate(render_data.materials):
            if material.mtl_name == subset.material_name:
                subset.material_index = index
                break


def _subset_material(subsets: List[MaterialSubset], position: int) -> Optional[int]:
    for subset in subsets:
        if subset.index_start <= position < subset.index_start + subset.index_count:
            return subset.material_index
    return None


def convert_to_static_mesh(raw: ObjInfo, render_data: StaticMeshRenderData) -> StaticMeshRenderData:
    """Build unique vertices and triangle indices from raw OBJ data."""
    render_data.object_name = raw.object_name
    render_data.path_name = raw.path_name
    render_data.display_name = raw.display_name

    seen: dict = {}
    corners = zip(raw.vertex_indices, raw.texture_indices, raw.normal_indices)
    for position, key in enumerate(corners):
        index = seen.get(key)
        if index is None:
            v_idx, t_idx, n_idx = key
            if v_idx >= len(raw.vertices):
                raise ObjParseError(f"vertex index {v_idx + 1} out of range")
            p = raw.vertices[v_idx]
            vertex = MeshVertex(x=p.x, y=p.y, z=p.z, r=1.0, g=1.0, b=1.0, a=1.0)
            if t_idx != NO_INDEX and t_idx < len(raw.uvs):
                vertex.u = raw.uvs[t_idx].x
                vertex.v = -raw.uvs[t_idx].y
            if n_idx != NO_INDEX and n_idx < len(raw.normals):
                n = raw.normals[n_idx]
                vertex.nx, vertex.ny, vertex.nz = n.x, n.y, n.z
            material = _subset_material(render_data.material_subsets, position)
            if material is not None:
                vertex.material_index = material
            index = len(render_data.vertices)
            render_data.vertices.append(vertex)
            seen[key] = index
        render_data.indices.append(index)

    box = compute_bounding_box(render_data.vertices)
    render_data.bounding_box_min = box.min
    render_data.bounding_box_max = box.max
    return render_data