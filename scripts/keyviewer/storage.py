"""File-based JSON storage for parsed keymaps and layouts."""

import logging
from pathlib import Path

from .errors import InvalidNameError, KeymapValidationError, NotFoundError
from .models import Keymap, Layout

logger = logging.getLogger(__name__)


class _JsonStore:
    """One ``<name>.json`` file per stored value in a directory."""

    kind = "value"

    def __init__(self, directory: Path, indent: int = 2):
        self.directory = Path(directory)
        self.indent = indent

    def path_for(self, name: str) -> Path:
        """Return the file of a stored name.

        Raises:
            InvalidNameError: If the name is empty or has path components
        """
        if name in ("", ".", "..") or Path(name).name != name:
            raise InvalidNameError(f"Invalid {self.kind} name: {name!r}")
        return self.directory / f"{name}.json"

    def names(self) -> list[str]:
        """Return the sorted names of stored values."""
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json") if p.is_file())

    def _write(self, name: str, json_text: str) -> Path:
        path = self.path_for(name)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(json_text, encoding="utf-8")
        logger.debug("Saved %s '%s' to %s", self.kind, name, path)
        return path

    def _read(self, name: str) -> str:
        path = self.path_for(name)
        if not path.is_file():
            raise NotFoundError(f"{self.kind.capitalize()} not found: {name}")
        return path.read_text(encoding="utf-8")


class LayoutStore(_JsonStore):
    """Stored physical layouts."""

    kind = "layout"

    def save(self, layout: Layout) -> Path:
        return self._write(layout.name, layout.to_json(self.indent))

    def load(self, name: str) -> Layout:
        return Layout.from_json(self._read(name))


class KeymapStore(_JsonStore):
    """Stored keymaps, including their custom key names."""

    kind = "keymap"

    def save(self, keymap: Keymap) -> Path:
        return self._write(keymap.name, keymap.to_json(self.indent))

    def load(self, name: str) -> Keymap:
        return Keymap.from_json(self._read(name))

    def import_json(self, data: str | bytes) -> Keymap:
        """Validate and store a keymap given as JSON.

        Raises:
            DecodeError: If the data is not a keymap document
            KeymapValidationError: If the keymap has no name or no layers
            InvalidNameError: If the name cannot be stored as a file
        """
        keymap = Keymap.from_json(data)
        if not keymap.name:
            raise KeymapValidationError("Keymap name is required")
        if not keymap.layers:
            raise KeymapValidationError("Keymap must have at least one layer")
        self.save(keymap)
        return keymap

    def set_custom_name(self, name: str, layer_index: int, key_index: int, custom_name: str) -> Keymap:
        """Set or clear one custom key name in a stored keymap and save it."""
        keymap = self.load(name)
        keymap.set_custom_name(layer_index, key_index, custom_name)
        self.save(keymap)
        return keymap
