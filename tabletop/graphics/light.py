from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from tabletop.graphics.shaders.shader_manager import ShaderStage
from tabletop.types import Color3, Vec3Like

MAX_LIGHTS = 4


@dataclass(frozen=True, slots=True)
class LightSource:
    """
    Point light as consumed by the scene shader.

    `focal_strength` is the specular exponent, and `constant`, `linear` and
    `quadratic` are the distance attenuation coefficients.
    """

    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    ambient_color: Color3 = (0.0, 0.0, 0.0)
    diffuse_color: Color3 = (0.0, 0.0, 0.0)
    specular_color: Color3 = (0.0, 0.0, 0.0)
    focal_strength: float = 1.0
    specular_intensity: float = 0.0
    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0


# Contributes nothing; fills slots nobody asked for.
INERT_LIGHT = LightSource()

KEY_LIGHT = LightSource(
    position=(0.0, 3.0, 2.0),
    ambient_color=(0.10, 0.10, 0.10),
    diffuse_color=(0.95, 0.90, 0.80),
    specular_color=(1.00, 1.00, 1.00),
    focal_strength=32.0,
    specular_intensity=0.60,
    constant=1.0,
    linear=0.09,
    quadratic=0.032,
)

# Keeps the floor from going black away from the key light
FILL_LIGHT = LightSource(
    position=(-3.0, 2.0, -2.0),
    ambient_color=(0.14, 0.14, 0.14),
    diffuse_color=(0.35, 0.35, 0.40),
    specular_color=(0.40, 0.40, 0.40),
    focal_strength=16.0,
    specular_intensity=0.20,
    constant=1.0,
    linear=0.09,
    quadratic=0.032,
)

DEFAULT_LIGHTS: Tuple[LightSource, ...] = (KEY_LIGHT, FILL_LIGHT)


def light_slots(lights: Sequence[LightSource]) -> Tuple[LightSource, ...]:
    """Pad `lights` with INERT_LIGHT to exactly MAX_LIGHTS entries."""
    if len(lights) > MAX_LIGHTS:
        raise ValueError(
            f"At most {MAX_LIGHTS} lights are supported, got {len(lights)}"
        )
    return tuple(lights) + (INERT_LIGHT,) * (MAX_LIGHTS - len(lights))


def push_lights(
    shader: ShaderStage,
    camera_position: Vec3Like,
    lights: Sequence[LightSource] = DEFAULT_LIGHTS,
) -> None:
    """Publish the camera position and all light slots, in slot order."""
    slots = light_slots(lights)

    shader.set_vec3("viewPosition", camera_position)

    for i, light in enumerate(slots):
        prefix = f"lightSources[{i}]"
        shader.set_vec3(f"{prefix}.position", light.position)
        shader.set_vec3(f"{prefix}.ambientColor", light.ambient_color)
        shader.set_vec3(f"{prefix}.diffuseColor", light.diffuse_color)
        shader.set_vec3(f"{prefix}.specularColor", light.specular_color)
        shader.set_float(f"{prefix}.focalStrength", light.focal_strength)
        shader.set_float(f"{prefix}.specularIntensity", light.specular_intensity)
        shader.set_float(f"{prefix}.constant", light.constant)
        shader.set_float(f"{prefix}.linear", light.linear)
        shader.set_float(f"{prefix}.quadratic", light.quadratic)
