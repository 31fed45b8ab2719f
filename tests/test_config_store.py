from __future__ import annotations

from pathlib import Path

from config import JsonConfigStore


def test_config_read_write(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(path=path)

    assert store.get_api_key() == ""
    assert store.get_hotkey() == "<ctrl>+<alt>+<space>"
    assert store.get_model() == "qwen-turbo"

    store.set_api_key("abc")
    store.set_hotkey("<cmd>+<shift>+k")
    store.set_model("qwen-plus")

    reloaded = JsonConfigStore(path=path)
    assert reloaded.get_api_key() == "abc"
    assert reloaded.get_hotkey() == "<cmd>+<shift>+k"
    assert reloaded.get_model() == "qwen-plus"


def test_config_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{invalid", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.get_api_key() == ""
    assert store.get_hotkey() == "<ctrl>+<alt>+<space>"


def test_config_non_object_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.get_model() == "qwen-turbo"
    store.set_api_key("k")
    assert JsonConfigStore(path=path).get_api_key() == "k"


def test_config_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "config.json"
    JsonConfigStore(path=path).set_hotkey("<f9>")

    assert path.exists()


def test_blank_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"hotkey": "  ", "model": null, "api_key": "", "theme": "dark"}', encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.path == path
    assert store.get_hotkey() == "<ctrl>+<alt>+<space>"
    assert store.get_model() == "qwen-turbo"
    assert store.get_api_key() == ""

    store.set_model("qwen-max")
    assert '"theme": "dark"' in path.read_text(encoding="utf-8")
