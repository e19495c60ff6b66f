"""Registry of known config servers and the load balancer choosing between them."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping

from apolloconf.config import ServerInfo

NEXT_TRY_CONNECT_PERIOD = 30


@dataclass
class _Info:
    server_map: dict[str, ServerInfo] | None = None
    next_try_conn_time: int = 0


_ip_map: dict[str, _Info] = {}
_lock = threading.Lock()


def _now() -> int:
    return int(time.time())


def get_servers(config_ip: str) -> dict[str, ServerInfo] | None:
    """Return the servers registered for ``config_ip``."""
    with _lock:
        info = _ip_map.get(config_ip)
        return info.server_map if info is not None else None


def get_servers_len(config_ip: str) -> int:
    with _lock:
        info = _ip_map.get(config_ip)
        if info is None or not info.server_map:
            return 0
        return len(info.server_map)


def set_servers(config_ip: str, server_map: dict[str, ServerInfo] | None) -> None:
    """Replace the servers registered for ``config_ip``."""
    with _lock:
        _ip_map[config_ip] = _Info(server_map=server_map)


def set_down_node(config_service: str, server_host: str) -> None:
    """Mark every server whose address contains ``server_host`` as down."""
    with _lock:
        if not server_host:
            return
        info = _ip_map.get(config_service)
        if info is None or not info.server_map:
            info = _Info(server_map={server_host: ServerInfo(homepage_url=server_host)})
            _ip_map[config_service] = info

        if server_host == config_service:
            info.next_try_conn_time = _now() + NEXT_TRY_CONNECT_PERIOD

        for address, server in info.server_map.items():
            if server_host in address:
                server.is_down = True


def is_connect_directly(config_ip: str) -> bool:
    """Tell whether requests should go to ``config_ip`` itself for now."""
    with _lock:
        info = _ip_map.get(config_ip)
        if info is None or not info.server_map:
            return False
        return info.next_try_conn_time >= 0 and info.next_try_conn_time > _now()


def set_next_try_conn_time(config_ip: str, next_period: int) -> None:
    """Postpone the next direct connection by ``next_period`` seconds (0 for the default)."""
    with _lock:
        info = _ip_map.get(config_ip)
        if info is None or not info.server_map:
            info = _Info()
            _ip_map[config_ip] = info
        info.next_try_conn_time = _now() + (next_period or NEXT_TRY_CONNECT_PERIOD)


class LoadBalance(ABC):
    """Chooses a server among the registered ones."""

    @abstractmethod
    def load(self, servers: Mapping[str, ServerInfo] | None) -> ServerInfo | None:
        """Return the chosen server, or None when none is available."""


class RoundRobin(LoadBalance):
    """Picks the first server that is not marked down."""

    def load(self, servers: Mapping[str, ServerInfo] | None) -> ServerInfo | None:
        if not servers:
            return None
        return next((server for server in servers.values() if not server.is_down), None)