"""Configuration model and loader for keyviewer."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .keymap import DEFAULT_LAYER_MACRO


class ViewerConfig(BaseModel):
    """Storage locations and parsing options."""

    model_config = ConfigDict(extra="ignore")

    keymaps_dir: Path = Field(Path("keymaps"), description="Directory of stored keymaps")
    layouts_dir: Path = Field(Path("layouts"), description="Directory of stored layouts")
    layer_macro: str = Field(DEFAULT_LAYER_MACRO, min_length=1, description="Layer macro name")
    indent: int = Field(2, ge=0, le=8, description="JSON output indentation")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_viewer_config(path: Path | None) -> ViewerConfig:
    """Load viewer configuration from a YAML file.

    A missing path or file yields the defaults. Relative directories are
    resolved against the config file location.
    """
    if path is None or not path.exists():
        return ViewerConfig()

    config = ViewerConfig.model_validate(load_yaml(path))
    base = path.parent
    return config.model_copy(update={
        "keymaps_dir": base / config.keymaps_dir,
        "layouts_dir": base / config.layouts_dir,
    })
