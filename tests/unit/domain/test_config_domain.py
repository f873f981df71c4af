from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against missing and corrupted config files.
3. Legacy flat schema reading.
4. Persistence (Save/Load) without touching real user data.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from duvis.domain.config import get_config_path, get_default_config, load_config, save_config
from duvis.domain.constants import CURRENT_CONFIG_VERSION


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "duvis" / "config.json"


def test_defaults_shape() -> None:
    conf = get_default_config()

    assert conf["order"] == "postorder"
    assert conf["output_mode"] == "tree"
    assert conf["indent_width"] == 2
    assert conf["zero_terminated"] is False
    assert get_default_config() is not conf


def test_missing_file_returns_defaults(config_file: Path) -> None:
    assert load_config(str(config_file)) == get_default_config()


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_corrupted_file_returns_defaults(config_file: Path, content: str) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text(content, encoding="utf-8")

    assert load_config(str(config_file)) == get_default_config()


def test_legacy_flat_schema_is_read(config_file: Path) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text(json.dumps({"order": "preorder", "unknown": 1}), encoding="utf-8")

    conf = load_config(str(config_file))

    assert conf["order"] == "preorder"
    assert "unknown" not in conf


def test_save_then_load(config_file: Path) -> None:
    conf = get_default_config()
    conf["indent_width"] = 4

    save_config(conf, str(config_file))

    stored = json.loads(config_file.read_text(encoding="utf-8"))
    assert stored["version"] == CURRENT_CONFIG_VERSION
    assert stored["settings"]["indent_width"] == 4
    assert load_config(str(config_file))["indent_width"] == 4


def test_default_path_lives_in_user_data_dir(tmp_path: Path) -> None:
    with patch("duvis.domain.config.get_user_data_dir", return_value=str(tmp_path)):
        assert get_config_path() == str(tmp_path / "config.json")
