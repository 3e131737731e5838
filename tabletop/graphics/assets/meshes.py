from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import moderngl
import numpy as np

from tabletop.graphics.utils.geometry import (
    FLOATS_PER_VERTEX,
    VERTEX_ATTRIBUTES,
    VERTEX_FORMAT,
    create_plane,
    create_tapered_cylinder,
    create_torus,
)
from tabletop.types import MeshName

logger = logging.getLogger(__name__)

PLANE = MeshName("plane")
TAPERED_CYLINDER = MeshName("tapered_cylinder")
TORUS = MeshName("torus")


@dataclass(frozen=True)
class Mesh:
    vbo: moderngl.Buffer
    layout: str
    attribs: tuple[str, ...]
    mode: int
    vertex_count: int


class MeshLibrary:
    """Uploads the scene primitives and draws them with a given program."""

    def __init__(self, ctx: moderngl.Context):
        self._ctx = ctx
        self._meshes: Dict[MeshName, Mesh] = {}
        self._vaos: Dict[tuple[MeshName, int], moderngl.VertexArray] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._meshes

    def register(self, name: MeshName, vertices: np.ndarray) -> Mesh:
        """Upload an (N, 8) float32 vertex array as triangle list `name`."""
        vertices = np.ascontiguousarray(vertices, dtype="f4")
        if vertices.ndim != 2 or vertices.shape[1] != FLOATS_PER_VERTEX:
            raise ValueError(
                f"Mesh '{name}' expects (N, {FLOATS_PER_VERTEX}) vertices, "
                f"got {vertices.shape}"
            )

        mesh = Mesh(
            vbo=self._ctx.buffer(vertices.tobytes()),
            layout=VERTEX_FORMAT,
            attribs=VERTEX_ATTRIBUTES,
            mode=moderngl.TRIANGLES,
            vertex_count=len(vertices),
        )
        self._meshes[name] = mesh
        logger.debug("Registered mesh '%s' (%d vertices)", name, mesh.vertex_count)
        return mesh

    def get(self, name: MeshName) -> Mesh:
        try:
            return self._meshes[name]
        except KeyError:
            raise KeyError(f"Mesh '{name}' not found")

    def load_plane_mesh(self) -> Mesh:
        return self.register(PLANE, create_plane())

    def load_tapered_cylinder_mesh(self) -> Mesh:
        return self.register(TAPERED_CYLINDER, create_tapered_cylinder())

    def load_torus_mesh(self) -> Mesh:
        return self.register(TORUS, create_torus())

    def draw(self, name: MeshName, program: moderngl.Program) -> None:
        mesh = self.get(name)

        key = (name, id(program))
        vao = self._vaos.get(key)
        if vao is None:
            vao = self._ctx.vertex_array(
                program, [(mesh.vbo, mesh.layout, *mesh.attribs)]
            )
            self._vaos[key] = vao

        vao.render(mode=mesh.mode, vertices=mesh.vertex_count)

    def release(self) -> None:
        for vao in self._vaos.values():
            vao.release()
        for mesh in self._meshes.values():
            mesh.vbo.release()
        self._vaos.clear()
        self._meshes.clear()
