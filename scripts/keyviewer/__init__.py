"""
ZMK keymap and KLE layout parsing for keyboard visualization.

Turns layer macros of a ZMK keymap into short key labels and replays KLE
layout notation into absolute key rectangles joined by key index.

Usage:
    python -m keyviewer keymap corne.keymap -o corne.json
    python -m keyviewer layout corne-kle.json --save
    python -m keyviewer list keymaps
"""

from .config import ViewerConfig, load_yaml, load_viewer_config
from .errors import (
    DecodeError,
    InvalidLayerError,
    InvalidNameError,
    KeymapValidationError,
    KeyviewerError,
    NotFoundError,
)
from .keymap import (
    find_matching_paren,
    format_layer_name,
    load_keymap_source,
    parse_keymap,
    tokenize,
)
from .labels import convert_binding, format_key, format_layer_short
from .layout import LayoutState, load_layout_file, parse_kle, parse_kle_json
from .models import Keymap, Layer, Layout, PhysicalKey
from .storage import KeymapStore, LayoutStore

__all__ = [
    # Config
    "ViewerConfig",
    "load_yaml",
    "load_viewer_config",
    # Errors
    "KeyviewerError",
    "DecodeError",
    "NotFoundError",
    "KeymapValidationError",
    "InvalidLayerError",
    "InvalidNameError",
    # Models
    "PhysicalKey",
    "Layout",
    "Layer",
    "Keymap",
    # Labels
    "convert_binding",
    "format_key",
    "format_layer_short",
    # Keymap
    "tokenize",
    "find_matching_paren",
    "format_layer_name",
    "parse_keymap",
    "load_keymap_source",
    # Layout
    "LayoutState",
    "parse_kle",
    "parse_kle_json",
    "load_layout_file",
    # Storage
    "KeymapStore",
    "LayoutStore",
]
