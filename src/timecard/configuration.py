# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "timecard"
TIMEWARRIOR_NAME = "timewarrior"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"
DEFAULT_CREDENTIAL_PATH = CONFIG_PATH / "key.txt"

CACHE_FILE_NAME = "celoxis_cache.json"
LEDGER_FILE_NAME = "celoxis_ledger.json"

DEFAULT_BASE_URL = "https://app.celoxis.com/psa/api/v2"
DEFAULT_PROJECT_FILTER = "{state : Active}"
DEFAULT_TIME_CODE = "engineering_labor"

SourceType = Literal["export", "data"]


class Configuration(TypedDict):
    base_url: str
    project_filter: str
    default_time_code: str
    source: SourceType
    timewarrior_path: Optional[str]
    cache_path: Optional[str]
    credential_path: Optional[str]
    timezone: Optional[str]
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "base_url": DEFAULT_BASE_URL,
        "project_filter": DEFAULT_PROJECT_FILTER,
        "default_time_code": DEFAULT_TIME_CODE,
        "source": "export",
        "timewarrior_path": None,
        "cache_path": None,
        "credential_path": None,
        "timezone": None,
        "log_level": "WARNING",
    }


def resolve_timewarrior_path(
    xdg_data_path: Optional[Path] = None, home_path: Optional[Path] = None
) -> Path:
    """
    Locate the Timewarrior data directory the same way Timewarrior does.

    Preference order:
    1. <platform data dir>/timewarrior if it exists
    2. ~/.timewarrior if it exists
    3. <platform data dir>/timewarrior, created
    """
    if xdg_data_path is None:
        xdg_data_path = platformdirs.user_data_path(TIMEWARRIOR_NAME)
    if home_path is None:
        home_path = Path.home()

    if xdg_data_path.is_dir():
        return xdg_data_path

    legacy_path = home_path / f".{TIMEWARRIOR_NAME}"
    if legacy_path.is_dir():
        return legacy_path

    xdg_data_path.mkdir(parents=True, exist_ok=True)
    return xdg_data_path


def get_timewarrior_path(config: Configuration) -> Path:
    if config["timewarrior_path"] is not None:
        return Path(config["timewarrior_path"]).expanduser()
    return resolve_timewarrior_path()


def get_cache_path(config: Configuration) -> Path:
    if config["cache_path"] is not None:
        return Path(config["cache_path"]).expanduser()
    return get_timewarrior_path(config) / CACHE_FILE_NAME


def get_ledger_path(config: Configuration) -> Path:
    return get_cache_path(config).parent / LEDGER_FILE_NAME


def get_credential_path(config: Configuration) -> Path:
    if config["credential_path"] is not None:
        return Path(config["credential_path"]).expanduser()
    return DEFAULT_CREDENTIAL_PATH


def load_configuration_file(path: Path = APP_CONFIG_PATH) -> Configuration:
    """
    Read the configuration file, filling in defaults for any missing keys.

    A missing or empty file yields the default configuration.
    """
    config = get_default_configuration()
    if not path.is_file():
        return config

    raw_config = load(path.read_text(), Loader=Loader)
    if raw_config is None:
        return config
    if not isinstance(raw_config, dict):
        raise ValueError(f"configuration file {path} is not a mapping")

    for key in config:
        if key in raw_config:
            config[key] = raw_config[key]  # type: ignore[literal-required]
    return config
