from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Persistence (Save/Load) without touching real user data.
4. Validation and coercion of untrusted values.
"""

import json

import pytest

from treefs.domain.config import (
    get_default_config,
    load_config,
    save_config,
    validate_config,
)
from treefs.domain.constants import CURRENT_CONFIG_VERSION


def test_default_config_values() -> None:
    cfg = get_default_config()

    assert cfg["snapshot_path"] == "backup.fs"
    assert cfg["autosave_on_quit"] is True
    assert cfg["sort_listing"] is True
    assert cfg["prompt"] == "$ "


def test_load_fresh_state_returns_defaults(mock_user_data_dir) -> None:
    assert not (mock_user_data_dir / "config.json").exists()

    assert load_config() == get_default_config()


def test_load_corrupted_file_returns_defaults(mock_user_data_dir) -> None:
    (mock_user_data_dir / "config.json").write_text("{ incomplete json ", encoding="utf-8")

    assert load_config() == get_default_config()


def test_load_non_dict_file_returns_defaults(mock_user_data_dir) -> None:
    (mock_user_data_dir / "config.json").write_text("[1, 2]", encoding="utf-8")

    assert load_config() == get_default_config()


def test_save_and_load_round_trip(mock_user_data_dir) -> None:
    cfg = get_default_config()
    cfg["snapshot_path"] = "/tmp/custom.fs"
    cfg["sort_listing"] = False

    save_config(cfg)

    data = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert data["version"] == CURRENT_CONFIG_VERSION
    loaded = load_config()
    assert loaded["snapshot_path"] == "/tmp/custom.fs"
    assert loaded["sort_listing"] is False


def test_load_drops_unknown_keys(mock_user_data_dir) -> None:
    payload = {"settings": {"prompt": "> ", "colour": "red"}}
    (mock_user_data_dir / "config.json").write_text(json.dumps(payload), encoding="utf-8")

    loaded = load_config()

    assert loaded["prompt"] == "> "
    assert "colour" not in loaded


def test_validate_coerces_types() -> None:
    clean, warnings = validate_config({
        "autosave_on_quit": "no",
        "sort_listing": 1,
        "log_level": "debug",
        "snapshot_path": "  ",
    })

    assert clean["autosave_on_quit"] is False
    assert clean["sort_listing"] is True
    assert clean["log_level"] == "DEBUG"
    assert clean["snapshot_path"] == "backup.fs"
    assert len(warnings) == 3


def test_validate_rejects_non_dict() -> None:
    clean, warnings = validate_config("nope")

    assert clean == get_default_config()
    assert warnings


def test_validate_strict_mode_raises() -> None:
    with pytest.raises(TypeError):
        validate_config({"sort_listing": "yes"}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"log_level": "LOUD"}, strict=True)
