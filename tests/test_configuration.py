# SPDX-License-Identifier: MIT

from pathlib import Path

import pytest

from timecard.configuration import (
    DEFAULT_BASE_URL,
    get_cache_path,
    get_default_configuration,
    get_ledger_path,
    load_configuration_file,
    resolve_timewarrior_path,
)


def test_existing_xdg_directory_wins(tmp_path: Path) -> None:
    xdg = tmp_path / "share" / "timewarrior"
    xdg.mkdir(parents=True)
    (tmp_path / "home" / ".timewarrior").mkdir(parents=True)

    assert resolve_timewarrior_path(xdg, tmp_path / "home") == xdg


def test_legacy_home_directory_is_used(tmp_path: Path) -> None:
    xdg = tmp_path / "share" / "timewarrior"
    legacy = tmp_path / "home" / ".timewarrior"
    legacy.mkdir(parents=True)

    assert resolve_timewarrior_path(xdg, tmp_path / "home") == legacy
    assert not xdg.exists()


def test_xdg_directory_is_created(tmp_path: Path) -> None:
    xdg = tmp_path / "share" / "timewarrior"

    assert resolve_timewarrior_path(xdg, tmp_path / "home") == xdg
    assert xdg.is_dir()


def test_cache_and_ledger_live_together(tmp_path: Path) -> None:
    config = get_default_configuration()
    config["timewarrior_path"] = str(tmp_path)

    assert get_cache_path(config) == tmp_path / "celoxis_cache.json"
    assert get_ledger_path(config) == tmp_path / "celoxis_ledger.json"

    config["cache_path"] = str(tmp_path / "elsewhere" / "cache.json")
    assert get_ledger_path(config) == tmp_path / "elsewhere" / "celoxis_ledger.json"


def test_missing_configuration_file_gives_defaults(tmp_path: Path) -> None:
    assert load_configuration_file(tmp_path / "config.yaml") == (
        get_default_configuration()
    )


def test_configuration_file_overrides_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("source: data\nlog_level: DEBUG\nunknown: ignored\n")

    config = load_configuration_file(path)

    assert config["source"] == "data"
    assert config["log_level"] == "DEBUG"
    assert config["base_url"] == DEFAULT_BASE_URL
    assert "unknown" not in config


def test_configuration_file_must_be_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        load_configuration_file(path)
