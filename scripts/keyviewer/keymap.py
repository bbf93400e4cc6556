"""Extraction of layers from ZMK keymap source text."""

import logging
import re
from pathlib import Path

from .errors import DecodeError
from .labels import convert_binding
from .models import Keymap, Layer

logger = logging.getLogger(__name__)

DEFAULT_LAYER_MACRO = "ZMK_LAYER"

# &name, optionally followed by a flat (args) list
BINDING_PATTERN = re.compile(r"&(\w+)(?:\s*\([^)]*\))?", re.ASCII)


def tokenize(content: str) -> list[str]:
    """Split binding text into one label per binding.

    Each binding spans from its ``&`` to the next binding's ``&``, so bare
    parameters like ``&kp A`` stay attached to their behavior.

    Args:
        content: Binding list text, may span several lines

    Returns:
        Labels in source order, empty if no binding is found
    """
    content = content.replace("\n", " ").replace("\t", " ").strip()

    starts = [match.start() for match in BINDING_PATTERN.finditer(content)]
    ends = starts[1:] + [len(content)]
    return [convert_binding(content[start:end]) for start, end in zip(starts, ends)]


def find_matching_paren(text: str, open_index: int) -> int:
    """Return the index of the ``)`` closing the ``(`` at open_index.

    Returns -1 if open_index is not an opening paren or it is never closed.
    """
    if open_index >= len(text) or text[open_index] != "(":
        return -1

    depth = 1
    for i in range(open_index + 1, len(text)):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def format_layer_name(name: str) -> str:
    """Convert a snake_case layer identifier to Title Case.

    ``nav_layer`` becomes ``Nav``, ``LOWER_keys`` becomes ``Lower Keys``.
    """
    name = name.removesuffix("_layer")
    words = [word[:1].upper() + word[1:].lower() for word in name.split("_") if word]
    return " ".join(words)


def parse_keymap(content: str, name: str, macro: str = DEFAULT_LAYER_MACRO) -> Keymap:
    """Parse every layer macro invocation in a keymap file.

    Unterminated invocations and invocations without a name/bindings comma
    are skipped; the scan continues with the next one.

    Args:
        content: Full keymap source text
        name: Name of the resulting keymap
        macro: Name of the layer macro to look for

    Returns:
        Keymap with one layer per invocation, in file order
    """
    layers: list[Layer] = []
    cursor = 0

    while True:
        start = content.find(macro, cursor)
        if start == -1:
            break

        paren_start = content.find("(", start)
        if paren_start == -1:
            break

        paren_end = find_matching_paren(content, paren_start)
        if paren_end == -1:
            logger.debug("Skipping unterminated %s at offset %d", macro, start)
            cursor = paren_start + 1
            continue

        inner = content[paren_start + 1:paren_end]
        cursor = paren_end + 1

        layer_name, comma, bindings = inner.partition(",")
        if not comma:
            logger.debug("Skipping %s without bindings at offset %d", macro, start)
            continue

        layers.append(
            Layer(name=format_layer_name(layer_name.strip()), keys=tokenize(bindings))
        )

    logger.debug("Parsed %d layers from keymap '%s'", len(layers), name)
    return Keymap(name=name, layers=layers)


def load_keymap_source(path: Path, name: str | None = None, macro: str = DEFAULT_LAYER_MACRO) -> Keymap:
    """Read and parse a ZMK keymap file.

    Args:
        path: Path to the .keymap (or .dtsi) file
        name: Keymap name, defaults to the file stem
        macro: Name of the layer macro to look for

    Raises:
        DecodeError: If the file is not valid UTF-8
    """
    try:
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as err:
        raise DecodeError(f"Keymap file is not valid UTF-8: {path}") from err
    return parse_keymap(content, name or path.stem, macro)
