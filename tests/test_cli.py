import json

import pytest

from keyviewer.cli import create_parser, run


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "keyviewer.yaml"
    path.write_text("keymaps_dir: store/keymaps\nlayouts_dir: store/layouts\n")
    return path


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        create_parser().parse_args([])


def test_keymap_to_stdout(keymap_file, capsys) -> None:
    assert run(["keymap", str(keymap_file)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "corne"
    assert [layer["name"] for layer in data["layers"]] == ["Base", "Lower Keys"]
    assert "layout" not in data


def test_keymap_with_layout_and_save(tmp_path, config_file, keymap_file, layout_file, capsys) -> None:
    output = tmp_path / "out.json"
    args = [
        "-c", str(config_file), "keymap", str(keymap_file),
        "--name", "mine", "--layout", str(layout_file), "-o", str(output), "--save",
    ]
    assert run(args) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["name"] == "mine"
    assert data["layout"]["name"] == "corne"
    assert len(data["layout"]["keys"]) == 8
    assert (tmp_path / "store" / "keymaps" / "mine.json").is_file()
    assert "Saved keymap" in capsys.readouterr().err


def test_layout_save_list_show(config_file, layout_file, capsys) -> None:
    assert run(["-c", str(config_file), "layout", str(layout_file), "--save"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [k["index"] for k in data["keys"]] == list(range(8))

    assert run(["-c", str(config_file), "list", "layouts"]) == 0
    assert capsys.readouterr().out.split() == ["corne"]

    assert run(["-c", str(config_file), "show", "layout", "corne"]) == 0
    assert json.loads(capsys.readouterr().out) == data


def test_import_and_rename(tmp_path, config_file, capsys) -> None:
    source = tmp_path / "km.json"
    source.write_text(json.dumps({"name": "km", "layers": [{"name": "Base", "keys": ["A"]}]}))

    assert run(["-c", str(config_file), "import", str(source)]) == 0
    assert "Imported keymap 'km' with 1 layers" in capsys.readouterr().out

    assert run(["-c", str(config_file), "rename", "km", "0", "0", "Alpha"]) == 0
    capsys.readouterr()
    assert run(["-c", str(config_file), "show", "keymap", "km"]) == 0
    assert json.loads(capsys.readouterr().out)["layers"][0]["customNames"] == {"0": "Alpha"}

    assert run(["-c", str(config_file), "rename", "km", "0", "0"]) == 0
    assert "cleared" in capsys.readouterr().out
    assert run(["-c", str(config_file), "list", "keymaps"]) == 0
    assert capsys.readouterr().out.split() == ["km"]


@pytest.mark.parametrize(
    "args,message",
    [
        (["keymap", "missing.keymap"], "Keymap file not found"),
        (["layout", "missing.json"], "Layout file not found"),
        (["import", "missing.json"], "Keymap JSON file not found"),
        (["show", "keymap", "nope"], "Keymap not found: nope"),
        (["rename", "nope", "0", "0", "X"], "Keymap not found: nope"),
    ],
)
def test_errors(tmp_path, config_file, args, message, capsys) -> None:
    assert run(["-c", str(config_file)] + args) == 1
    assert f"Error: {message}" in capsys.readouterr().err


def test_invalid_layout_json(tmp_path, capsys) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    assert run(["layout", str(path)]) == 1
    assert "Error: Invalid layout JSON" in capsys.readouterr().err


def test_keymap_save_rejects_path_name(tmp_path, config_file, keymap_file, capsys) -> None:
    args = ["-c", str(config_file), "keymap", str(keymap_file), "--name", "../x", "--save"]
    assert run(args) == 1

    assert "Error: Invalid keymap name" in capsys.readouterr().err
    assert not (tmp_path / "store" / "x.json").exists()
    assert not (tmp_path / "store" / "keymaps").exists()


@pytest.mark.parametrize(
    "content",
    ["indent: 20\n", "- keymaps_dir\n- layouts_dir\n", "indent: [1\n"],
)
def test_invalid_config(tmp_path, content, capsys) -> None:
    path = tmp_path / "keyviewer.yaml"
    path.write_text(content)

    assert run(["-c", str(path), "list", "keymaps"]) == 1
    assert "Error: Invalid config" in capsys.readouterr().err
