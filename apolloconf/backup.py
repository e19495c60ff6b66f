"""Backup files holding the last configuration fetched for each namespace."""

from __future__ import annotations

import functools
import json
import os
from abc import ABC, abstractmethod

from apolloconf import log
from apolloconf.config import ApolloConfig
from apolloconf.json_file import ConfigFile

SUFFIX = ".json"

_json_file_config = ConfigFile()


class FileHandler(ABC):
    """Reads and writes backup files."""

    @abstractmethod
    def write_config_file(self, config: ApolloConfig, config_path: str) -> None:
        """Write ``config`` into the directory ``config_path``."""

    @abstractmethod
    def get_config_file(self, config_dir: str, app_id: str, namespace: str) -> str:
        """Return the path of the backup file for a namespace."""

    @abstractmethod
    def load_config_file(self, config_dir: str, app_id: str, namespace: str) -> ApolloConfig:
        """Read the backup file for a namespace."""


def _create_dir(config_path: str) -> None:
    if not config_path:
        return
    try:
        os.makedirs(config_path, exist_ok=True)
    except OSError as exc:
        log.errorf("Create backup dir:%s fail, error:%s", config_path, exc)
        raise


def _decode_apollo_config(data: bytes) -> ApolloConfig:
    return ApolloConfig.from_dict(json.loads(data))


class JSONFileHandler(FileHandler):
    """Stores each namespace as ``<app id>-<namespace>.json``."""

    def write_config_file(self, config: ApolloConfig, config_path: str) -> None:
        _create_dir(config_path)
        _json_file_config.write(
            config, self.get_config_file(config_path, config.app_id, config.namespace_name)
        )

    def get_config_file(self, config_dir: str, app_id: str, namespace: str) -> str:
        file_name = f"{app_id}-{namespace}{SUFFIX}"
        return f"{config_dir}/{file_name}" if config_dir else file_name

    def load_config_file(self, config_dir: str, app_id: str, namespace: str) -> ApolloConfig:
        path = self.get_config_file(config_dir, app_id, namespace)
        log.infof("load config file from: %s", path)
        try:
            return _json_file_config.load(path, _decode_apollo_config)
        except Exception as exc:
            log.errorf("loadConfigFile fail, error:%s", exc)
            raise


def _write_with_raw(config: ApolloConfig, config_dir: str) -> None:
    path = f"{config_dir}/{config.namespace_name}" if config_dir else config.namespace_name
    content = config.configurations.get("content")
    with open(path, "w", encoding="utf-8") as handle:
        if content is not None:
            if not isinstance(content, str):
                raise TypeError("raw content must be a string")
            handle.write(content)


class RawFileHandler(JSONFileHandler):
    """Also writes the raw ``content`` of a namespace to a file named after it."""

    def write_config_file(self, config: ApolloConfig, config_path: str) -> None:
        _create_dir(config_path)
        try:
            _write_with_raw(config, config_path)
        except (OSError, TypeError) as exc:
            log.errorf("writeWithRaw fail! error:%s", exc)
        _json_file_config.write(
            config, self.get_config_file(config_path, config.app_id, config.namespace_name)
        )


@functools.cache
def get_raw_file_handler() -> RawFileHandler:
    """Return the shared raw file handler."""
    return RawFileHandler()