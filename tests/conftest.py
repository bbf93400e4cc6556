from pathlib import Path

import pytest

from keyviewer.storage import KeymapStore, LayoutStore

SAMPLE_KEYMAP = """\
#include <behaviors.dtsi>
#include <dt-bindings/zmk/keys.h>

/ {
    keymap {
        compatible = "zmk,keymap";

ZMK_LAYER(base_layer,
    &kp Q       &kp W      &hrm LGUI A   &lt 1 SPACE
    &mo LOWER   &trans     &none         &kp LC(LS(Z))
)

ZMK_LAYER(lower_keys,
\t&bt BT_SEL 0  &bt BT_CLR  &bootloader  &caps_word
)
    };
};
"""

SAMPLE_KLE = """[
  {"name": "mini"},
  ["Q", "W", {"w": 2}, "A", "B"],
  [{"y": 0.5}, "C", {"x": 1}, "D", "E", "F"]
]"""


@pytest.fixture
def keymap_file(tmp_path) -> Path:
    path = tmp_path / "corne.keymap"
    path.write_text(SAMPLE_KEYMAP, encoding="utf-8")
    return path


@pytest.fixture
def layout_file(tmp_path) -> Path:
    path = tmp_path / "corne.json"
    path.write_text(SAMPLE_KLE, encoding="utf-8")
    return path


@pytest.fixture
def keymap_store(tmp_path) -> KeymapStore:
    return KeymapStore(tmp_path / "keymaps")


@pytest.fixture
def layout_store(tmp_path) -> LayoutStore:
    return LayoutStore(tmp_path / "layouts")
