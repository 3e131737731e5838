# tabletop/scene.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple, Union

import moderngl

from tabletop.graphics.assets.material_manager import Material, MaterialRegistry
from tabletop.graphics.assets.meshes import PLANE, TAPERED_CYLINDER, TORUS
from tabletop.graphics.assets.texture_manager import TextureRegistry
from tabletop.graphics.light import DEFAULT_LIGHTS, LightSource, push_lights
from tabletop.graphics.shaders.shader_manager import ShaderStage
from tabletop.math import compose_model_matrix
from tabletop.types import Color4, MaterialTag, MeshName, TextureTag, Vec3Like

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


class MeshDrawer(Protocol):
    def load_plane_mesh(self) -> object: ...

    def load_tapered_cylinder_mesh(self) -> object: ...

    def load_torus_mesh(self) -> object: ...

    def draw(self, name: MeshName, program: moderngl.Program) -> None: ...

    def release(self) -> None: ...


class SceneShader(ShaderStage, Protocol):
    program: moderngl.Program


@dataclass(frozen=True, slots=True)
class TextureAppearance:
    tag: TextureTag
    uv_scale: Tuple[float, float] = (1.0, 1.0)
    # Used when the texture is not resident
    fallback_color: Color4 = (0.8, 0.8, 0.8, 1.0)


@dataclass(frozen=True, slots=True)
class ColorAppearance:
    rgba: Color4


Appearance = Union[TextureAppearance, ColorAppearance]


@dataclass(frozen=True, slots=True)
class SceneObject:
    """Everything needed for one draw call."""

    mesh: MeshName
    scale: Vec3
    rotation: Vec3  # degrees about X, Y, Z
    position: Vec3
    appearance: Appearance
    material: Optional[MaterialTag] = None


SCENE_TEXTURES: Tuple[Tuple[str, TextureTag], ...] = (
    ("wood.png", TextureTag("wood")),
    ("ceramic.png", TextureTag("ceramic")),
)

SCENE_MATERIALS: Tuple[Material, ...] = (
    Material(
        tag=MaterialTag("wood"),
        ambient_color=(0.4, 0.3, 0.2),
        ambient_strength=0.3,
        diffuse_color=(0.8, 0.7, 0.6),
        specular_color=(0.2, 0.2, 0.2),
        shininess=8.0,
    ),
    Material(
        tag=MaterialTag("ceramic"),
        ambient_color=(0.9, 0.9, 0.9),
        ambient_strength=0.25,
        diffuse_color=(0.9, 0.9, 0.9),
        specular_color=(0.9, 0.9, 0.9),
        shininess=64.0,
    ),
    Material(
        tag=MaterialTag("plastic"),
        ambient_color=(1.0, 0.6, 0.3),
        ambient_strength=0.3,
        diffuse_color=(1.0, 1.0, 1.0),
        specular_color=(0.6, 0.6, 0.6),
        shininess=32.0,
    ),
)


def build_scene_objects() -> Tuple[SceneObject, ...]:
    """The desk plane and a two-piece coffee mug."""
    mug_x = 0.0
    mug_z = -2.8
    mug_yaw = -20.0

    body_scale = (1.15, 1.65, 1.15)
    # Body mesh is centered, so lift by half its height to rest on y = 0
    body_half_height = body_scale[1] * 0.5

    floor = SceneObject(
        mesh=PLANE,
        scale=(20.0, 1.0, 10.0),
        rotation=(0.0, 0.0, 0.0),
        position=(0.0, 0.0, 0.0),
        appearance=TextureAppearance(
            TextureTag("wood"), uv_scale=(6.0, 3.0), fallback_color=(0.55, 0.4, 0.25, 1.0)
        ),
        material=MaterialTag("wood"),
    )

    body = SceneObject(
        mesh=TAPERED_CYLINDER,
        scale=body_scale,
        rotation=(0.0, mug_yaw, 0.0),
        position=(mug_x, body_half_height, mug_z),
        appearance=TextureAppearance(
            TextureTag("ceramic"), uv_scale=(2.0, 2.0), fallback_color=(0.92, 0.92, 0.9, 1.0)
        ),
        material=MaterialTag("ceramic"),
    )

    handle = SceneObject(
        mesh=TORUS,
        scale=(0.55, 0.75, 0.22),
        rotation=(0.0, mug_yaw, 90.0),
        position=(
            mug_x + 0.98,  # out from the body
            body_half_height + 0.45,
            mug_z + 0.08,  # avoids z-fighting with the body
        ),
        appearance=ColorAppearance((0.98, 0.55, 0.15, 1.0)),
        material=MaterialTag("plastic"),
    )

    return (floor, body, handle)


class SceneManager:
    """
    Prepares and renders the scene: owns the texture and material registries
    and turns each SceneObject into uniform writes plus a draw call.
    """

    def __init__(
        self,
        shader: SceneShader,
        textures: TextureRegistry,
        meshes: MeshDrawer,
        materials: Optional[MaterialRegistry] = None,
        lights: Sequence[LightSource] = DEFAULT_LIGHTS,
    ) -> None:
        self.shader = shader
        self.textures = textures
        self.meshes = meshes
        self.materials = materials if materials is not None else MaterialRegistry()
        self.lights = tuple(lights)
        self.objects: Tuple[SceneObject, ...] = ()

    # -- Appearance / transform uniforms --
    def set_transformations(
        self,
        scale: Vec3Like,
        x_rotation_degrees: float,
        y_rotation_degrees: float,
        z_rotation_degrees: float,
        position: Vec3Like,
    ) -> None:
        model = compose_model_matrix(
            scale,
            (x_rotation_degrees, y_rotation_degrees, z_rotation_degrees),
            position,
        )
        self.shader.set_mat4("model", model)

    def set_shader_color(self, red: float, green: float, blue: float, alpha: float) -> None:
        self.shader.set_bool("bUseTexture", False)
        self.shader.set_vec4("objectColor", (red, green, blue, alpha))

    def set_shader_texture(self, texture_tag: str) -> None:
        slot = self.textures.find_slot(texture_tag)

        if slot is None:
            logger.debug("Texture '%s' not loaded; drawing untextured", texture_tag)
            self.shader.set_bool("bUseTexture", False)
            return

        self.shader.set_bool("bUseTexture", True)
        self.shader.set_sampler2d("objectTexture", slot)

    def set_texture_uv_scale(self, u: float, v: float) -> None:
        self.shader.set_vec2("UVscale", (u, v))

    def set_shader_material(self, material_tag: str) -> None:
        if len(self.materials) == 0:
            return

        material = self.materials.lookup(material_tag)
        if material is None:
            logger.debug("Material '%s' not found; keeping current", material_tag)
            return

        self.shader.set_vec3("material.ambientColor", material.ambient_color)
        self.shader.set_float("material.ambientStrength", material.ambient_strength)
        self.shader.set_vec3("material.diffuseColor", material.diffuse_color)
        self.shader.set_vec3("material.specularColor", material.specular_color)
        self.shader.set_float("material.shininess", material.shininess)

    def set_shader_lights(self, camera_position: Vec3Like) -> None:
        push_lights(self.shader, camera_position, self.lights)

    # -- Lifecycle --
    def prepare_scene(
        self,
        texture_dir: Path,
        materials: Sequence[Material] = SCENE_MATERIALS,
        objects: Optional[Sequence[SceneObject]] = None,
    ) -> None:
        """Load textures and meshes and define materials. Call once."""
        for filename, tag in SCENE_TEXTURES:
            self.textures.load(Path(texture_dir) / filename, tag)

        # Units are fixed for the whole run
        self.textures.bind()

        for material in materials:
            self.materials.add(material)

        self.meshes.load_plane_mesh()
        self.meshes.load_tapered_cylinder_mesh()
        self.meshes.load_torus_mesh()

        self.objects = tuple(objects) if objects is not None else build_scene_objects()

    def draw_object(self, obj: SceneObject) -> None:
        self.set_transformations(obj.scale, *obj.rotation, obj.position)

        appearance = obj.appearance
        if isinstance(appearance, TextureAppearance):
            self.set_shader_color(*appearance.fallback_color)
            self.set_shader_texture(appearance.tag)
            self.set_texture_uv_scale(*appearance.uv_scale)
        else:
            self.set_shader_color(*appearance.rgba)
            self.set_texture_uv_scale(1.0, 1.0)

        if obj.material is not None:
            self.set_shader_material(obj.material)

        self.meshes.draw(obj.mesh, self.shader.program)

    def render_scene(self, camera_position: Vec3Like) -> None:
        self.shader.use()
        self.shader.set_bool("bUseLighting", True)
        self.set_shader_lights(camera_position)

        for obj in self.objects:
            self.draw_object(obj)

    def release(self) -> None:
        self.textures.release_all()
        self.meshes.release()
