from dataclasses import dataclass


@dataclass(frozen=True)
class TextureData:
    """Raw decoded pixels and metadata, rows stored bottom-up."""

    data: bytes
    width: int
    height: int
    components: int  # 3 (RGB) or 4 (RGBA) are uploadable


@dataclass(frozen=True)
class ShaderSource:
    """Raw shader source code."""

    source: str
    path: str  # For debugging / error reporting.
