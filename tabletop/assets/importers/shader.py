from pathlib import Path

from tabletop.assets.importers.base import AssetImporter
from tabletop.assets.types import ShaderSource


class ShaderImporter(AssetImporter):
    def import_file(self, path: Path) -> ShaderSource:
        source = Path(path).read_text(encoding="utf-8")
        return ShaderSource(source=source, path=str(path))
