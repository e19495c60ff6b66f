"""Periodic components and decoding of the config server list."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod

from apolloconf import log
from apolloconf.config import ServerInfo


class Component(ABC):
    """A background task of the client."""

    @abstractmethod
    def start(self) -> None:
        """Run the task."""


def start_refresh_config(component: Component) -> None:
    """Start ``component``."""
    component.start()


def parse_server_list(response_body: bytes | str) -> dict[str, ServerInfo]:
    """Decode the meta server's answer into servers keyed by homepage URL.

    Null entries are skipped; an empty list gives an empty mapping.
    """
    text = response_body.decode() if isinstance(response_body, bytes) else response_body
    log.debug("get all server info:", text)
    try:
        entries = json.loads(text)
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ValueError("server list must be a JSON array")
        servers = [ServerInfo.from_dict(entry) for entry in entries if entry is not None]
    except (ValueError, TypeError) as exc:
        log.errorf("Unmarshal json Fail, error: %s", exc)
        raise ValueError(f"invalid server list: {exc}") from exc

    if not servers:
        log.info("get no real server!")
        return {}
    return {server.homepage_url: server for server in servers}