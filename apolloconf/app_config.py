"""Loading the application settings from a JSON file."""

from __future__ import annotations

import functools
import json
import os
from typing import Callable

from apolloconf.config import AppConfig
from apolloconf.json_file import ConfigFile

APP_CONFIG_FILE = "app.properties"
APP_CONFIG_FILE_PATH_ENV = "AGOLLO_CONF"

DEFAULT_CLUSTER = "default"
DEFAULT_NAMESPACE = "application"


def init_file_config() -> AppConfig | None:
    """Load the settings from the default file, or return None if that fails."""
    try:
        return init_config(None)
    except (OSError, ValueError, TypeError):
        return None


def init_config(load_app_config: Callable[[], AppConfig] | None) -> AppConfig:
    """Return the settings produced by ``load_app_config``, or read them from file.

    Without a loader the file named by the ``AGOLLO_CONF`` environment variable
    is read, falling back to ``app.properties`` in the working directory.
    """
    if load_app_config is not None:
        return load_app_config()
    config_path = os.environ.get(APP_CONFIG_FILE_PATH_ENV) or APP_CONFIG_FILE
    return get_config_file_executor().load(config_path, unmarshal)


@functools.cache
def get_config_file_executor() -> ConfigFile:
    """Return the shared reader for settings files."""
    return ConfigFile()


def unmarshal(data: bytes | str) -> AppConfig:
    """Decode settings from JSON, filling in defaults, and initialise them."""
    app_config = AppConfig.from_dict(
        json.loads(data),
        cluster=DEFAULT_CLUSTER,
        namespace_name=DEFAULT_NAMESPACE,
        is_backup_config=True,
    )
    app_config.init()
    return app_config