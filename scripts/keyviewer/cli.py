"""Command-line interface for keyviewer."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config import ViewerConfig, load_viewer_config
from .errors import KeyviewerError
from .keymap import load_keymap_source
from .layout import load_layout_file
from .storage import KeymapStore, LayoutStore


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="keyviewer",
        description="Parse ZMK keymaps and KLE layouts into viewable JSON",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to keyviewer.yaml with storage and parsing settings",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- keymap subcommand ---
    keymap_parser = subparsers.add_parser(
        "keymap",
        help="Parse a ZMK keymap file into key labels per layer",
    )
    keymap_parser.add_argument(
        "keymap_file",
        type=Path,
        help="ZMK .keymap file using layer macros",
    )
    keymap_parser.add_argument("--name", help="Keymap name (default: file stem)")
    keymap_parser.add_argument(
        "--layout",
        type=Path,
        help="KLE JSON layout to embed in the keymap",
    )
    keymap_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output JSON file (default: stdout)",
    )
    keymap_parser.add_argument(
        "--save",
        action="store_true",
        help="Also store the keymap in the keymaps directory",
    )

    # --- layout subcommand ---
    layout_parser = subparsers.add_parser(
        "layout",
        help="Parse a KLE JSON layout into absolute key positions",
    )
    layout_parser.add_argument("layout_file", type=Path, help="KLE JSON file")
    layout_parser.add_argument("--name", help="Layout name (default: file stem)")
    layout_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output JSON file (default: stdout)",
    )
    layout_parser.add_argument(
        "--save",
        action="store_true",
        help="Also store the layout in the layouts directory",
    )

    # --- import subcommand ---
    import_parser = subparsers.add_parser(
        "import",
        help="Validate and store a keymap JSON file",
    )
    import_parser.add_argument("json_file", type=Path, help="Keymap JSON file")

    # --- list subcommand ---
    list_parser = subparsers.add_parser("list", help="List stored keymaps or layouts")
    list_parser.add_argument("kind", choices=["keymaps", "layouts"])

    # --- show subcommand ---
    show_parser = subparsers.add_parser("show", help="Print a stored keymap or layout")
    show_parser.add_argument("kind", choices=["keymap", "layout"])
    show_parser.add_argument("name", help="Stored name")

    # --- rename subcommand ---
    rename_parser = subparsers.add_parser(
        "rename",
        help="Set or clear the custom label of a key in a stored keymap",
    )
    rename_parser.add_argument("keymap", help="Stored keymap name")
    rename_parser.add_argument("layer_index", type=int, help="0-based layer index")
    rename_parser.add_argument("key_index", type=int, help="0-based key index")
    rename_parser.add_argument(
        "label",
        nargs="?",
        default="",
        help="Custom label (omit to clear)",
    )

    return parser


def _emit(json_text: str, output: Path | None) -> None:
    if output is None:
        print(json_text)
    else:
        output.write_text(json_text + "\n", encoding="utf-8")
        print(f"Written to {output}")


def _missing(path: Path, what: str) -> bool:
    if path.exists():
        return False
    print(f"Error: {what} not found: {path}", file=sys.stderr)
    return True


def cmd_keymap(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute keymap subcommand."""
    if _missing(args.keymap_file, "Keymap file"):
        return 1
    if args.layout is not None and _missing(args.layout, "Layout file"):
        return 1

    keymap = load_keymap_source(args.keymap_file, args.name, config.layer_macro)
    if args.layout is not None:
        keymap = keymap.with_layout(load_layout_file(args.layout))

    if args.save:
        path = KeymapStore(config.keymaps_dir, config.indent).save(keymap)
        print(f"Saved keymap to {path}", file=sys.stderr)

    _emit(keymap.to_json(config.indent), args.output)
    return 0


def cmd_layout(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute layout subcommand."""
    if _missing(args.layout_file, "Layout file"):
        return 1

    layout = load_layout_file(args.layout_file, args.name)

    if args.save:
        path = LayoutStore(config.layouts_dir, config.indent).save(layout)
        print(f"Saved layout to {path}", file=sys.stderr)

    _emit(layout.to_json(config.indent), args.output)
    return 0


def cmd_import(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute import subcommand."""
    if _missing(args.json_file, "Keymap JSON file"):
        return 1

    store = KeymapStore(config.keymaps_dir, config.indent)
    keymap = store.import_json(args.json_file.read_bytes())
    print(f"Imported keymap '{keymap.name}' with {len(keymap.layers)} layers")
    return 0


def cmd_list(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute list subcommand."""
    if args.kind == "keymaps":
        names = KeymapStore(config.keymaps_dir).names()
    else:
        names = LayoutStore(config.layouts_dir).names()
    for name in names:
        print(name)
    return 0


def cmd_show(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute show subcommand."""
    if args.kind == "keymap":
        value = KeymapStore(config.keymaps_dir).load(args.name)
    else:
        value = LayoutStore(config.layouts_dir).load(args.name)
    print(value.to_json(config.indent))
    return 0


def cmd_rename(args: argparse.Namespace, config: ViewerConfig) -> int:
    """Execute rename subcommand."""
    store = KeymapStore(config.keymaps_dir, config.indent)
    store.set_custom_name(args.keymap, args.layer_index, args.key_index, args.label)
    if args.label:
        print(f"Key {args.key_index} on layer {args.layer_index} renamed to '{args.label}'")
    else:
        print(f"Custom name of key {args.key_index} on layer {args.layer_index} cleared")
    return 0


COMMANDS = {
    "keymap": cmd_keymap,
    "layout": cmd_layout,
    "import": cmd_import,
    "list": cmd_list,
    "show": cmd_show,
    "rename": cmd_rename,
}


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, run the selected subcommand and return its exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        config = load_viewer_config(args.config)
    except (ValidationError, yaml.YAMLError) as err:
        print(f"Error: Invalid config {args.config}: {err}", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](args, config)
    except KeyviewerError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
