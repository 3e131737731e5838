# tabletop/graphics/assets/texture_manager.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import moderngl

from tabletop.assets.importers.texture import TextureImporter
from tabletop.types import TextureTag

logger = logging.getLogger(__name__)

MAX_TEXTURES = 16
SUPPORTED_COMPONENTS = (3, 4)


@dataclass(slots=True)
class TextureEntry:
    """A resident GPU texture and the tag scenes refer to it by."""

    tag: TextureTag
    handle: moderngl.Texture


class TextureRegistry:
    """
    Loads images into GPU textures and maps string tags to texture units.

    Entries keep insertion order; an entry's index is the texture unit it is
    bound to by `bind()`.
    """

    def __init__(
        self,
        gl: moderngl.Context,
        importer: Optional[TextureImporter] = None,
        max_textures: int = MAX_TEXTURES,
    ) -> None:
        self._gl = gl
        self._importer = importer or TextureImporter(flip_vertically=True)
        self._max_textures = max_textures
        self._entries: List[TextureEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: object) -> bool:
        return any(entry.tag == tag for entry in self._entries)

    @property
    def tags(self) -> tuple[TextureTag, ...]:
        return tuple(entry.tag for entry in self._entries)

    def load(self, path: Path | str, tag: str) -> bool:
        """
        Decode `path` and upload it under `tag`.

        Returns False, leaving the registry untouched, when the registry is
        full, the tag is taken, the file cannot be decoded, or the image is
        not 3- or 4-channel.
        """
        if len(self._entries) >= self._max_textures:
            logger.warning(
                "Texture limit reached (%d). Could not load: %s",
                self._max_textures,
                path,
            )
            return False

        if tag in self:
            logger.warning("Texture tag '%s' already loaded. Skipping: %s", tag, path)
            return False

        try:
            image = self._importer.import_file(Path(path))
        except (OSError, ValueError) as e:
            logger.warning("Could not load image: %s (%s)", path, e)
            return False

        logger.info(
            "Successfully loaded image: %s, width: %d, height: %d, channels: %d",
            path,
            image.width,
            image.height,
            image.components,
        )

        if image.components not in SUPPORTED_COMPONENTS:
            logger.warning(
                "Not implemented to handle image with %d channels: %s",
                image.components,
                path,
            )
            return False

        texture = self._gl.texture(
            (image.width, image.height), image.components, data=image.data
        )
        texture.repeat_x = True
        texture.repeat_y = True
        texture.filter = (moderngl.LINEAR_MIPMAP_LINEAR, moderngl.LINEAR)
        texture.build_mipmaps()

        self._entries.append(TextureEntry(tag=TextureTag(tag), handle=texture))
        return True

    def bind(self) -> None:
        """Activate every resident texture on units 0..n-1 in load order."""
        for unit, entry in enumerate(self._entries):
            entry.handle.use(location=unit)

    def find_slot(self, tag: str) -> Optional[int]:
        """Texture unit for `tag`, or None when no texture has that tag."""
        for index, entry in enumerate(self._entries):
            if entry.tag == tag:
                return index
        return None

    def find_handle(self, tag: str) -> Optional[moderngl.Texture]:
        """GPU texture for `tag`, or None when no texture has that tag."""
        for entry in self._entries:
            if entry.tag == tag:
                return entry.handle
        return None

    def release_all(self) -> None:
        """Free every GPU texture. Safe to call repeatedly."""
        for entry in self._entries:
            entry.handle.release()
        self._entries.clear()
