# tabletop/assets/__init__.py
from tabletop.assets.importers.shader import ShaderImporter
from tabletop.assets.importers.texture import TextureImporter
from tabletop.assets.types import ShaderSource, TextureData

__all__ = [
    "ShaderImporter",
    "ShaderSource",
    "TextureData",
    "TextureImporter",
]
