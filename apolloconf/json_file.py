"""Reading and writing JSON configuration files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from apolloconf import log


class ConfigFileError(Exception):
    """Raised when a configuration file cannot be read, parsed or encoded."""


def _to_jsonable(content: Any) -> Any:
    to_dict = getattr(content, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return content


class ConfigFile:
    """Loads and stores configuration as JSON files."""

    def load(self, file_name: str | Path, unmarshal: Callable[[bytes], Any]) -> Any:
        """Read ``file_name`` and return what ``unmarshal`` makes of its bytes."""
        try:
            data = Path(file_name).read_bytes()
        except OSError as exc:
            raise ConfigFileError(f"Fail to read config file:{exc}") from exc

        try:
            return unmarshal(data)
        except (ValueError, TypeError, KeyError) as exc:
            raise ConfigFileError(f"Load Json Config fail:{exc}") from exc

    def write(self, content: Any, config_path: str | Path) -> None:
        """Encode ``content`` as JSON and write it, newline-terminated, to ``config_path``."""
        if content is None:
            log.error("content is null can not write backup file")
            raise ConfigFileError("content is null can not write backup file")

        try:
            text = json.dumps(
                _to_jsonable(content), ensure_ascii=False, separators=(",", ":")
            )
        except (TypeError, ValueError) as exc:
            raise ConfigFileError(f"encode config fail:{exc}") from exc

        try:
            with open(config_path, "w", encoding="utf-8") as handle:
                handle.write(text + "\n")
        except OSError as exc:
            log.errorf("writeConfigFile fail, error: %s", exc)
            raise