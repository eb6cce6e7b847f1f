# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from timecard import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = configuration.load_configuration_file(
            configuration.APP_CONFIG_PATH
        )

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        base_url: Optional[str] = None,
        project_filter: Optional[str] = None,
        default_time_code: Optional[str] = None,
        source: Optional[configuration.SourceType] = None,
        timewarrior_path: Optional[str] = None,
        remove_timewarrior_path: bool = False,
        cache_path: Optional[str] = None,
        remove_cache_path: bool = False,
        credential_path: Optional[str] = None,
        remove_credential_path: bool = False,
        timezone: Optional[str] = None,
        remove_timezone: bool = False,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if base_url is not None:
            self.config["base_url"] = base_url.rstrip("/")
        if project_filter is not None:
            self.config["project_filter"] = project_filter
        if default_time_code is not None:
            self.config["default_time_code"] = default_time_code
        if source is not None:
            self.config["source"] = source
        if timewarrior_path is not None:
            self.config["timewarrior_path"] = timewarrior_path
        if remove_timewarrior_path:
            self.config["timewarrior_path"] = None
        if cache_path is not None:
            self.config["cache_path"] = cache_path
        if remove_cache_path:
            self.config["cache_path"] = None
        if credential_path is not None:
            self.config["credential_path"] = credential_path
        if remove_credential_path:
            self.config["credential_path"] = None
        if timezone is not None:
            self.config["timezone"] = timezone
        if remove_timezone:
            self.config["timezone"] = None
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
