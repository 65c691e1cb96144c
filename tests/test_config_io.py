from __future__ import annotations

import pytest

from config_io import load_json_config


def test_load_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"map": {"rounds": 4}}', encoding="utf-8")
    assert load_json_config(path) == {"map": {"rounds": 4}}


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_invalid_json_exits_with_location(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"map": {"rounds": 4,}}', encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        load_json_config(path)
    assert "Line 1" in str(exc.value)


def test_non_object_config_exits(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_shipped_config_parses():
    from pathlib import Path

    from config_parsing import parse_map_config, parse_render_config

    cfg = load_json_config(Path(__file__).resolve().parents[1] / "config.json")
    assert parse_map_config(cfg["map"]).rounds == 10
    assert parse_render_config(cfg["render"]).mode == "flat"
