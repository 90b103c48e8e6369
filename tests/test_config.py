"""Unit tests for config loading and project name resolution."""

import json
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.config import DEFAULT_CONFIG, load_config, resolve_project_name, save_config


class TestConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "config.json") == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"table_format": "csv", "unknown_key": 1}))
        cfg = load_config(path)
        assert cfg["table_format"] == "csv"
        assert cfg["refresh_interval_ms"] == DEFAULT_CONFIG["refresh_interval_ms"]
        assert "unknown_key" not in cfg

    def test_bad_json_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(path) == DEFAULT_CONFIG

    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.json"
        cfg = load_config(path)
        cfg["project_name"] = "client-site"
        save_config(cfg, path)
        assert load_config(path)["project_name"] == "client-site"


class TestProjectName:
    def test_configured_name_wins(self, tmp_path: Path):
        assert resolve_project_name({"project_name": "x"}, cwd=tmp_path) == "x"

    def test_falls_back_to_folder_name(self, tmp_path: Path):
        folder = tmp_path / "my-repo"
        folder.mkdir()
        assert resolve_project_name({"project_name": None}, cwd=folder) == "my-repo"

    def test_root_folder_is_unknown(self):
        assert resolve_project_name({}, cwd=Path("/")) == "unknown-project"
