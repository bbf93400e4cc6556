"""Reconstruction of absolute key positions from KLE row notation."""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import DecodeError
from .models import Layout, PhysicalKey

logger = logging.getLogger(__name__)


@dataclass
class LayoutState:
    """Cursor carried across the KLE scan.

    Size resets after every key, rotation and its pivot persist.
    """

    x: float = 0.0
    y: float = 0.0
    w: float = 1.0
    h: float = 1.0
    r: float = 0.0
    rx: float = 0.0
    ry: float = 0.0

    def start_row(self) -> None:
        self.x = self.rx
        self.y += 1.0

    def apply(self, props: dict[str, Any]) -> None:
        """Apply a KLE property object to the cursor.

        Non-numeric values are ignored, like any property the cursor does
        not track (colors, labels alignment and so on).
        """
        values = {k: float(v) for k, v in props.items() if _is_number(v)}
        if "x" in values:
            self.x += values["x"]
        if "y" in values:
            self.y += values["y"]
        if "w" in values:
            self.w = values["w"]
        if "h" in values:
            self.h = values["h"]
        if "r" in values:
            self.r = values["r"]
        if "rx" in values:
            self.rx = self.x = values["rx"]
        if "ry" in values:
            self.ry = self.y = values["ry"]

    def emit(self, index: int) -> PhysicalKey:
        """Create the key at the cursor and advance past it."""
        # y was incremented when the row started
        key = PhysicalKey(
            x=self.x,
            y=self.y - 1,
            w=self.w,
            h=self.h,
            r=self.r,
            rx=self.rx,
            ry=self.ry,
            index=index,
        )
        self.x += self.w
        self.w = 1.0
        self.h = 1.0
        return key


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_kle(rows: list[Any], name: str) -> Layout:
    """Replay KLE rows into a layout.

    Args:
        rows: Decoded KLE JSON, a list of rows with an optional leading
            metadata object
        name: Name of the resulting layout

    Returns:
        Layout with one key per label string, indexed in declaration order
    """
    state = LayoutState()
    keys: list[PhysicalKey] = []

    for row in rows:
        if not isinstance(row, list):
            # keyboard metadata
            continue

        state.start_row()
        for item in row:
            if isinstance(item, dict):
                state.apply(item)
            elif isinstance(item, str):
                keys.append(state.emit(len(keys)))

    logger.debug("Parsed %d keys from layout '%s'", len(keys), name)
    return Layout(name=name, keys=keys)


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _reject_constant(text: str) -> None:
    raise ValueError(f"Unsupported JSON constant: {text}")


def parse_kle_json(data: str | bytes, name: str) -> Layout:
    """Decode KLE JSON text and reconstruct the layout.

    Raises:
        DecodeError: If the data is not JSON, holds numbers a float cannot
            represent, or is not a list of rows
    """
    try:
        rows = json.loads(data, parse_float=_finite_float, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as err:
        raise DecodeError(f"Invalid layout JSON: {err}") from err

    if not isinstance(rows, list):
        raise DecodeError("Layout JSON must be a list of rows")
    try:
        return parse_kle(rows, name)
    except OverflowError as err:
        raise DecodeError(f"Invalid layout JSON: {err}") from err


def load_layout_file(path: Path, name: str | None = None) -> Layout:
    """Read and parse a KLE JSON file, naming the layout after the file stem."""
    return parse_kle_json(path.read_bytes(), name or path.stem)
