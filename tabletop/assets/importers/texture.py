# tabletop/assets/importers/texture.py
from pathlib import Path

from PIL import Image

from tabletop.assets.importers.base import AssetImporter
from tabletop.assets.types import TextureData


class TextureImporter(AssetImporter):
    """
    Decodes an image file with Pillow, keeping its native channel count.

    Rows are flipped so the first row in `data` is the bottom of the image,
    matching OpenGL's texture origin.
    """

    def __init__(self, flip_vertically: bool = True) -> None:
        self.flip_vertically = flip_vertically

    def import_file(self, path: Path) -> TextureData:
        with Image.open(path) as img:
            img.load()
            converted = _normalize_mode(img)

            if self.flip_vertically:
                converted = converted.transpose(Image.Transpose.FLIP_TOP_BOTTOM)

            width, height = converted.size
            components = len(converted.getbands())
            data = converted.tobytes()

        return TextureData(
            data=data, width=width, height=height, components=components
        )


def _normalize_mode(img: Image.Image) -> Image.Image:
    # Palette and CMYK images expand to the RGB(A) layout their pixels
    # actually describe; everything else keeps its bands.
    if img.mode == "P":
        return img.convert("RGBA" if "transparency" in img.info else "RGB")
    if img.mode == "CMYK":
        return img.convert("RGB")
    return img
