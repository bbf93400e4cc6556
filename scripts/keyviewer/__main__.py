"""CLI entry point for keyviewer package.

Usage:
    python -m keyviewer keymap corne.keymap --layout corne.json -o corne.view.json
    python -m keyviewer layout corne.json --save
    python -m keyviewer rename corne 0 12 Hyper
"""

from .cli import main

if __name__ == "__main__":
    main()
