"""Materials, static meshes, a binary mesh cache format and an asset manager."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from meshworks.geometry import Vector
from meshworks.objparse import (
    MaterialSubset,
    MeshVertex,
    ObjMaterialInfo,
    StaticMeshRenderData,
    combine_material_index,
    convert_to_static_mesh,
    parse_material,
    parse_obj,
)

BINARY_SUFFIX = ".bin"

_COUNT = "<I"
_VERTEX = "<12fI"
_INDEX = "<I"
_MATERIAL_FIXED = "<??15fI"
_SUBSET_FIXED = "<3I"
_VECTOR = "<3f"


class MeshFileError(ValueError):
    """Raised when a binary mesh file is truncated or malformed."""


@dataclass
class Material:
    """A material built from the properties of an MTL entry."""

    info: ObjMaterialInfo = field(default_factory=ObjMaterialInfo)

    @property
    def name(self) -> str:
        return self.info.mtl_name

    def set_transparency(self, value: float) -> None:
        """Set the transparency; values below one mark the material transparent."""
        self.info.transparency_scalar = value
        self.info.transparent = value < 1.0


@dataclass
class StaticMaterial:
    """A material slot of a static mesh."""

    material: Material
    slot_name: str


class StaticMesh:
    """A mesh asset: cooked render data plus its material slots."""

    def __init__(self) -> None:
        self.render_data: Optional[StaticMeshRenderData] = None
        self.materials: List[StaticMaterial] = []

    def set_data(self, render_data: StaticMeshRenderData, manager: MeshManager) -> None:
        """Attach render data and create a material slot for each of its materials."""
        self.render_data = render_data
        if not render_data.vertices:
            return
        for info in render_data.materials:
            material = manager.create_material(info)
            self.materials.append(StaticMaterial(material=material, slot_name=info.mtl_name))

    def material_index(self, slot_name: str) -> Optional[int]:
        """Return the index of the slot with this name, or None if there is none."""
        for index, slot in enumerate(self.materials):
            if slot.slot_name == slot_name:
                return index
        return None

    def used_materials(self) -> List[Material]:
        return [slot.material for slot in self.materials]


def _pack_str(text: str) -> bytes:
    raw = text.encode("utf-8")
    return struct.pack(_COUNT, len(raw)) + raw


def _pack_vector(v: Vector) -> bytes:
    return struct.pack(_VECTOR, v.x, v.y, v.z)


def _encode(data: StaticMeshRenderData) -> bytes:
    parts = [
        _pack_str(data.object_name),
        _pack_str(data.path_name),
        _pack_str(data.display_name),
        struct.pack(_COUNT, len(data.vertices)),
    ]
    parts.extend(
        struct.pack(
            _VERTEX,
            v.x, v.y, v.z, v.r, v.g, v.b, v.a,
            v.nx, v.ny, v.nz, v.u, v.v,
            v.material_index,
        )
        for v in data.vertices
    )
    parts.append(struct.pack(_COUNT, len(data.indices)))
    parts.extend(struct.pack(_INDEX, i) for i in data.indices)

    parts.append(struct.pack(_COUNT, len(data.materials)))
    for m in data.materials:
        parts.append(_pack_str(m.mtl_name))
        parts.append(
            struct.pack(
                _MATERIAL_FIXED,
                m.has_texture,
                m.transparent,
                *m.diffuse, *m.specular, *m.ambient, *m.emissive,
                m.specular_scalar,
                m.density_scalar,
                m.transparency_scalar,
                m.illuminance_model,
            )
        )
        for text in (
            m.diffuse_texture_name, m.diffuse_texture_path,
            m.ambient_texture_name, m.ambient_texture_path,
            m.specular_texture_name, m.specular_texture_path,
            m.bump_texture_name, m.bump_texture_path,
            m.alpha_texture_name, m.alpha_texture_path,
        ):
            parts.append(_pack_str(text))

    parts.append(struct.pack(_COUNT, len(data.material_subsets)))
    for s in data.material_subsets:
        parts.append(_pack_str(s.material_name))
        parts.append(struct.pack(_SUBSET_FIXED, s.index_start, s.index_count, s.material_index))

    parts.append(_pack_vector(data.bounding_box_min))
    parts.append(_pack_vector(data.bounding_box_max))
    return b"".join(parts)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise MeshFileError("mesh file is truncated")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> tuple:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def count(self) -> int:
        return self.unpack(_COUNT)[0]

    def string(self) -> str:
        raw = self.take(self.count())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MeshFileError("mesh file holds an invalid string") from None

    def vector(self) -> Vector:
        return Vector(*self.unpack(_VECTOR))


def _decode(blob: bytes) -> StaticMeshRenderData:
    r = _Reader(blob)
    data = StaticMeshRenderData(
        object_name=r.string(), path_name=r.string(), display_name=r.string()
    )
    for _ in range(r.count()):
        *floats, material_index = r.unpack(_VERTEX)
        x, y, z, cr, cg, cb, ca, nx, ny, nz, u, v = floats
        data.vertices.append(
            MeshVertex(x, y, z, cr, cg, cb, ca, nx, ny, nz, u, v, material_index)
        )
    data.indices = [r.unpack(_INDEX)[0] for _ in range(r.count())]

    for _ in range(r.count()):
        name = r.string()
        has_texture, transparent, *rest = r.unpack(_MATERIAL_FIXED)
        vectors = [Vector(*rest[i:i + 3]) for i in range(0, 12, 3)]
        spec_scalar, density, transparency, illum = rest[12:]
        texts = [r.string() for _ in range(10)]
        data.materials.append(
            ObjMaterialInfo(
                mtl_name=name,
                has_texture=has_texture,
                transparent=transparent,
                diffuse=vectors[0],
                specular=vectors[1],
                ambient=vectors[2],
                emissive=vectors[3],
                specular_scalar=spec_scalar,
                density_scalar=density,
                transparency_scalar=transparency,
                illuminance_model=illum,
                diffuse_texture_name=texts[0],
                diffuse_texture_path=texts[1],
                ambient_texture_name=texts[2],
                ambient_texture_path=texts[3],
                specular_texture_name=texts[4],
                specular_texture_path=texts[5],
                bump_texture_name=texts[6],
                bump_texture_path=texts[7],
                alpha_texture_name=texts[8],
                alpha_texture_path=texts[9],
            )
        )

    for _ in range(r.count()):
        name = r.string()
        start, count, material_index = r.unpack(_SUBSET_FIXED)
        data.material_subsets.append(MaterialSubset(name, start, count, material_index))

    data.bounding_box_min = r.vector()
    data.bounding_box_max = r.vector()
    return data


def save_static_mesh(path, render_data: StaticMeshRenderData) -> None:
    """Write render data to a binary mesh file."""
    Path(path).write_bytes(_encode(render_data))


def load_static_mesh(path) -> StaticMeshRenderData:
    """Read render data from a binary mesh file."""
    return _decode(Path(path).read_bytes())


class MeshManager:
    """Loads OBJ assets and keeps the meshes and materials made from them."""

    def __init__(self) -> None:
        self._render_data: Dict[str, StaticMeshRenderData] = {}
        self._static_meshes: Dict[str, StaticMesh] = {}
        self._materials: Dict[str, Material] = {}

    @property
    def materials(self) -> Dict[str, Material]:
        return self._materials

    @property
    def static_meshes(self) -> Dict[str, StaticMesh]:
        return self._static_meshes

    def load_static_mesh_asset(self, path) -> StaticMeshRenderData:
        """Return render data for an OBJ file, using the binary cache when present."""
        key = str(path)
        cached = self._render_data.get(key)
        if cached is not None:
            return cached

        binary_path = Path(key + BINARY_SUFFIX)
        if binary_path.is_file():
            try:
                data = load_static_mesh(binary_path)
            except (MeshFileError, OSError):
                pass
            else:
                self._render_data[key] = data
                return data

        obj_info = parse_obj(key)
        data = StaticMeshRenderData()
        if obj_info.material_subsets:
            parse_material(obj_info, data)
            combine_material_index(data)
            for info in data.materials:
                self.create_material(info)

        convert_to_static_mesh(obj_info, data)
        try:
            save_static_mesh(binary_path, data)
        except OSError:
            pass
        self._render_data[key] = data
        return data

    def create_material(self, info: ObjMaterialInfo) -> Material:
        """Return the material with this name, creating it on first use."""
        existing = self._materials.get(info.mtl_name)
        if existing is not None:
            return existing
        material = Material(info=info)
        self._materials[info.mtl_name] = material
        return material

    def get_material(self, name: str) -> Optional[Material]:
        return self._materials.get(name)

    def create_static_mesh(self, path) -> StaticMesh:
        """Load an OBJ asset and return the static mesh made from it."""
        data = self.load_static_mesh_asset(path)
        existing = self.get_static_mesh(data.object_name)
        if existing is not None:
            return existing
        mesh = StaticMesh()
        mesh.set_data(data, self)
        self._static_meshes[data.object_name] = mesh
        return mesh

    def get_static_mesh(self, name: str) -> Optional[StaticMesh]:
        return self._static_meshes.get(name)