"""Keymap and physical layout models with their JSON wire shape."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .errors import DecodeError, InvalidLayerError


class _Model(BaseModel):
    """Shared serialization helpers."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready dict using wire field names."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON text, keeping glyphs unescaped."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | bytes):
        """Re-hydrate a model from JSON text.

        Raises:
            DecodeError: If the text is not JSON or does not match the model
        """
        try:
            raw = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            raise DecodeError(f"Invalid JSON: {err}") from err
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: Any):
        try:
            return cls.model_validate(raw)
        except ValidationError as err:
            raise DecodeError(f"Invalid {cls.__name__.lower()}: {err}") from err


class PhysicalKey(_Model):
    """A single key rectangle in key units."""

    x: float = Field(0.0, description="Left edge")
    y: float = Field(0.0, description="Top edge")
    w: float = Field(1.0, description="Width")
    h: float = Field(1.0, description="Height")
    r: float = Field(0.0, description="Rotation angle in degrees")
    rx: float = Field(0.0, description="Rotation pivot X")
    ry: float = Field(0.0, description="Rotation pivot Y")
    index: int = Field(0, ge=0, description="Declaration order, joins with Layer.keys")


class Layout(_Model):
    """A named physical keyboard layout."""

    name: str
    keys: list[PhysicalKey] = Field(default_factory=list)


class Layer(_Model):
    """Labels for every key position plus user overrides."""

    name: str
    keys: list[str] = Field(default_factory=list)
    custom_names: dict[str, str] = Field(default_factory=dict, alias="customNames")

    @field_validator("keys", "custom_names", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # Files written by older tools store empty collections as null.
        if value is None:
            return {} if info.field_name == "custom_names" else []
        return value


class Keymap(_Model):
    """A named list of layers, optionally embedding its physical layout."""

    name: str
    layers: list[Layer] = Field(default_factory=list)
    layout: Layout | None = None

    def set_custom_name(self, layer_index: int, key_index: int, custom_name: str) -> None:
        """Set or clear the override label of one key.

        An empty name removes the override. Key indices are not checked
        against the layer size.

        Raises:
            InvalidLayerError: If layer_index is out of range
        """
        if layer_index < 0 or layer_index >= len(self.layers):
            raise InvalidLayerError(f"Invalid layer index: {layer_index}")

        custom_names = self.layers[layer_index].custom_names
        key = str(key_index)
        if custom_name == "":
            custom_names.pop(key, None)
        else:
            custom_names[key] = custom_name

    def with_layout(self, layout: Layout | None) -> "Keymap":
        """Return a copy of this keymap embedding the given layout."""
        return self.model_copy(update={"layout": layout}, deep=True)
