# tabletop/graphics/assets/material_manager.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from tabletop.types import Color3, MaterialTag


@dataclass(frozen=True, slots=True)
class Material:
    """
    Phong surface response.

    Colors are linear RGB in [0, 1]; `shininess` is the specular exponent.
    """

    tag: MaterialTag
    ambient_color: Color3 = (1.0, 1.0, 1.0)
    ambient_strength: float = 0.2
    diffuse_color: Color3 = (1.0, 1.0, 1.0)
    specular_color: Color3 = (0.5, 0.5, 0.5)
    shininess: float = 32.0


class MaterialRegistry:
    """Stores materials populated at scene setup; read-only afterwards."""

    def __init__(self, materials: Iterable[Material] = ()) -> None:
        self._materials: List[Material] = []
        for material in materials:
            self.add(material)

    def __len__(self) -> int:
        return len(self._materials)

    def add(self, material: Material) -> None:
        """Register a material. Tags must be unique."""
        if self.lookup(material.tag) is not None:
            raise KeyError(f"Material '{material.tag}' already exists")
        self._materials.append(material)

    def lookup(self, tag: str) -> Optional[Material]:
        """Get a material by tag, or None if there is none."""
        for material in self._materials:
            if material.tag == tag:
                return material
        return None
