"""Conversion of ZMK binding expressions into short display labels."""

import re
from types import MappingProxyType
from typing import Callable

TRANSPARENT_GLYPH = "▽"

# Exact ZMK key code spelling -> display label
KEY_LABELS = MappingProxyType({
    "SPACE": "SPC",
    "ENTER": "ENT",
    "RETURN": "RET",
    "BACKSPACE": "BSPC",
    "BSPC": "BSPC",
    "TAB": "TAB",
    "ESC": "ESC",
    "ESCAPE": "ESC",
    "DELETE": "DEL",
    "DEL": "DEL",
    "INSERT": "INS",
    "HOME": "HOME",
    "END": "END",
    "PAGE_UP": "PGUP",
    "PG_UP": "PGUP",
    "PAGE_DOWN": "PGDN",
    "PG_DN": "PGDN",
    "UP": "↑",
    "DOWN": "↓",
    "LEFT": "←",
    "RIGHT": "→",
    "LSHIFT": "SHFT",
    "RSHIFT": "SHFT",
    "LSHFT": "SHFT",
    "LEFT_SHIFT": "SHFT",
    "LCTRL": "CTRL",
    "RCTRL": "CTRL",
    "LEFT_CONTROL": "CTRL",
    "LALT": "ALT",
    "RALT": "ALT",
    "LGUI": "GUI",
    "RGUI": "GUI",
    "GRAVE": "`",
    "MINUS": "-",
    "EQUAL": "=",
    "LBKT": "[",
    "RBKT": "]",
    "LBRC": "{",
    "RBRC": "}",
    "BSLH": "\\",
    "SEMI": ";",
    "SQT": "'",
    "COMMA": ",",
    "DOT": ".",
    "SLASH": "/",
    "FSLH": "/",
    "CAPS": "CAPS",
    "CAPSLOCK": "CAPS",
    "PSCRN": "PSCR",
    "SLCK": "SLCK",
    "PAUSE_BREAK": "PAUS",
    "LPAR": "(",
    "RPAR": ")",
    "C_VOL_UP": "V+",
    "C_VOL_DN": "V-",
    "C_MUTE": "MUTE",
    "C_PLAY_PAUSE": "▶⏸",
    "C_NEXT": "⏭",
    "C_PREV": "⏮",
})

# Modifier function prefix -> label tag, left and right variants collapse
MODIFIER_TAGS = MappingProxyType({
    "LS": "S", "RS": "S",
    "LC": "C", "RC": "C",
    "LA": "A", "RA": "A",
    "LG": "G", "RG": "G",
})

# Upper-cased layer reference -> single letter
LAYER_SHORT_NAMES = MappingProxyType({
    "DEFAULT": "D", "0": "D",
    "LOWER": "L", "1": "L",
    "RAISE": "R", "2": "R",
    "FN": "F", "3": "F",
    "SYSTEM": "S", "4": "S",
})

MODIFIER_PATTERN = re.compile(r"([LR][SCAG])\((.+)\)")
NUMBER_KEY_PATTERN = re.compile(r"N\d", re.ASCII)
BINDING_NAME_PATTERN = re.compile(r"&(\w+)", re.ASCII)

MAX_LABEL_LEN = 4


def format_key(key: str) -> str:
    """Format a ZMK key code such as ``LC(LS(A))`` or ``PG_UP`` for display."""
    match = MODIFIER_PATTERN.fullmatch(key)
    if match:
        return f"{MODIFIER_TAGS[match.group(1)]}-{format_key(match.group(2))}"

    if NUMBER_KEY_PATTERN.fullmatch(key):
        return key[1:]

    if key.startswith("F") and len(key) <= 3:
        return key

    if key in KEY_LABELS:
        return KEY_LABELS[key]

    return key[:MAX_LABEL_LEN]


def format_layer_short(layer: str) -> str:
    """Return a one letter label for a layer reference (name or index)."""
    short = LAYER_SHORT_NAMES.get(layer.upper())
    if short is not None:
        return short
    if layer:
        return layer[:1].upper()
    return "?"


def _kp(parts: list[str]) -> str | None:
    return format_key(parts[1]) if len(parts) >= 2 else None


def _layer_tap(parts: list[str]) -> str | None:
    if len(parts) < 3:
        return None
    return f"{format_key(parts[2])}/{format_layer_short(parts[1])}"


def _momentary(parts: list[str]) -> str | None:
    if len(parts) < 2:
        return None
    return f"[{format_layer_short(parts[1])}]"


def _home_row_mod(parts: list[str]) -> str | None:
    # The modifier (parts[1]) is not part of the label.
    if len(parts) < 3:
        return None
    return format_key(parts[2])


def _bluetooth(parts: list[str]) -> str | None:
    if len(parts) >= 2:
        command = parts[1]
        if command.startswith("BT_SEL") and len(parts) >= 3:
            return f"BT{parts[2]}"
        if command == "BT_CLR":
            return "BT CLR"
    return "BT"


def _fixed(label: str) -> Callable[[list[str]], str]:
    return lambda parts: label


# Ordered (prefix, handler) rules; a handler returning None falls through
# to the generic binding name label.
BINDING_RULES: tuple[tuple[str, Callable[[list[str]], str | None]], ...] = (
    ("&kp ", _kp),
    ("&lt ", _layer_tap),
    ("&mo ", _momentary),
    ("&hrm ", _home_row_mod),
    ("&bt ", _bluetooth),
    ("&bootloader", _fixed("BOOT")),
    ("&caps_word", _fixed("CAPS")),
    ("&leader", _fixed("LDR")),
    ("&bl ", _fixed("BL")),
    ("&studio", _fixed("STUDIO")),
)


def convert_binding(binding: str) -> str:
    """Convert one binding expression like ``&lt 1 SPACE`` into a label.

    Unknown behaviors fall back to the first characters of their name, so
    this never fails.

    Args:
        binding: Binding text starting at its ``&`` sigil

    Returns:
        Display label, possibly empty for ``&none``
    """
    binding = binding.strip()

    if binding == "&trans":
        return TRANSPARENT_GLYPH
    if binding == "&none":
        return ""

    for prefix, handler in BINDING_RULES:
        if binding.startswith(prefix):
            label = handler(binding.split())
            if label is not None:
                return label
            break

    match = BINDING_NAME_PATTERN.search(binding)
    if match:
        return match.group(1)[:MAX_LABEL_LEN].upper()
    return "?"
