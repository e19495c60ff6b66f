"""Application settings, server descriptions and configuration snapshots."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlsplit

DEFAULT_NOTIFICATION_ID = -1
_COMMA = ","
_MISSING = object()


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find ``key`` in ``data``, preferring an exact match over a case-insensitive one."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == lowered:
            return value
    return _MISSING


def _read(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    """Return ``data[key]`` checked against ``kind``; missing or null gives ``default``."""
    value = _lookup(data, key)
    if value is _MISSING or value is None:
        return default
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise TypeError(
            f"cannot unmarshal {type(value).__name__} into field {key} "
            f"of type {kind.__name__}"
        )
    return value


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"cannot unmarshal {type(data).__name__} into an object")
    return data


def split_namespaces(
    namespaces: str, callback: Callable[[str], None] | None
) -> dict[str, int]:
    """Split a comma separated namespace list, calling ``callback`` for each part.

    Every namespace is mapped to the default notification id.
    """
    result: dict[str, int] = {}
    for namespace in namespaces.split(_COMMA):
        if callback is not None:
            callback(namespace)
        result[namespace] = DEFAULT_NOTIFICATION_ID
    return result


@dataclass
class ServerInfo:
    """A config service instance as reported by the meta server."""

    app_name: str = ""
    instance_id: str = ""
    homepage_url: str = ""
    is_down: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServerInfo":
        """Build from a JSON object; the down flag is never read from input."""
        data = _require_mapping(data)
        return cls(
            app_name=_read(data, "appName", str, ""),
            instance_id=_read(data, "instanceId", str, ""),
            homepage_url=_read(data, "homepageUrl", str, ""),
        )


@dataclass
class Notification:
    """The latest notification id known for a namespace."""

    namespace_name: str = ""
    notification_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Notification":
        data = _require_mapping(data)
        return cls(
            namespace_name=_read(data, "namespaceName", str, ""),
            notification_id=_read(data, "notificationId", int, 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespaceName": self.namespace_name,
            "notificationId": self.notification_id,
        }


class NotificationsMap:
    """Thread-safe map from namespace to its last notification id."""

    def __init__(self, notifications: Mapping[str, int] | None = None) -> None:
        self._lock = threading.Lock()
        self._notifications: dict[str, int] = dict(notifications or {})

    def update_all_notifications(self, remote_configs: Iterable[Notification]) -> None:
        """Take over ids for namespaces that are already known."""
        for remote in remote_configs:
            if not remote.namespace_name:
                continue
            if self.get_notify(remote.namespace_name) == 0:
                continue
            self._set(remote.namespace_name, remote.notification_id)

    def update_notify(self, namespace_name: str, notification_id: int) -> None:
        """Record ``notification_id`` for a non-empty namespace."""
        if namespace_name:
            self._set(namespace_name, notification_id)

    def _set(self, namespace_name: str, notification_id: int) -> None:
        with self._lock:
            self._notifications[namespace_name] = notification_id

    def get_notify(self, namespace: str) -> int:
        """Return the id for ``namespace``, or 0 when it is unknown."""
        with self._lock:
            return self._notifications.get(namespace, 0)

    def get_notifies(self, namespace: str) -> str:
        """Return the notifications to send to the server as a JSON array.

        With an empty ``namespace`` every known namespace is included; otherwise
        only ``namespace``, which is registered with the default id if unknown.
        """
        with self._lock:
            if namespace:
                notification_id = self._notifications.setdefault(
                    namespace, DEFAULT_NOTIFICATION_ID
                )
                entries = [Notification(namespace, notification_id)]
            else:
                entries = [
                    Notification(name, notification_id)
                    for name, notification_id in self._notifications.items()
                ]
        return json.dumps([entry.to_dict() for entry in entries], separators=(",", ":"))

    def __len__(self) -> int:
        with self._lock:
            return len(self._notifications)


@dataclass
class ApolloConnConfig:
    """Identity of a configuration release."""

    app_id: str = ""
    cluster: str = ""
    namespace_name: str = ""
    release_key: str = ""


@dataclass
class ApolloConfig(ApolloConnConfig):
    """A configuration release together with its key/value pairs."""

    configurations: dict[str, Any] = field(default_factory=dict)

    def init(self, app_id: str, cluster: str, namespace: str) -> None:
        self.app_id = app_id
        self.cluster = cluster
        self.namespace_name = namespace

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApolloConfig":
        data = _require_mapping(data)
        configurations = _read(data, "configurations", dict, {})
        return cls(
            app_id=_read(data, "appId", str, ""),
            cluster=_read(data, "cluster", str, ""),
            namespace_name=_read(data, "namespaceName", str, ""),
            release_key=_read(data, "releaseKey", str, ""),
            configurations=dict(configurations),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "appId": self.app_id,
            "cluster": self.cluster,
            "namespaceName": self.namespace_name,
            "releaseKey": self.release_key,
            "configurations": self.configurations,
        }


class CurrentApolloConfig:
    """The release currently held for each namespace."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._configs: dict[str, ApolloConnConfig] = {}

    def set(self, namespace: str, conn_config: ApolloConnConfig) -> None:
        with self._lock:
            self._configs[namespace] = conn_config

    def get(self) -> dict[str, ApolloConnConfig]:
        """Return a snapshot of the namespace to release mapping."""
        with self._lock:
            return dict(self._configs)

    def get_release_key(self, namespace: str) -> str:
        """Return the release key for ``namespace``, or an empty string."""
        with self._lock:
            config = self._configs.get(namespace)
        return config.release_key if config is not None else ""


_APP_CONFIG_FIELDS: tuple[tuple[str, str, type], ...] = (
    ("appId", "app_id", str),
    ("cluster", "cluster", str),
    ("namespaceName", "namespace_name", str),
    ("ip", "ip", str),
    ("isBackupConfig", "is_backup_config", bool),
    ("backupConfigPath", "backup_config_path", str),
    ("secret", "secret", str),
    ("label", "label", str),
    ("syncServerTimeout", "sync_server_timeout", int),
    ("MustStart", "must_start", bool),
)


@dataclass
class AppConfig:
    """Settings of the client application."""

    app_id: str = ""
    cluster: str = ""
    namespace_name: str = ""
    ip: str = ""
    is_backup_config: bool = True
    backup_config_path: str = ""
    secret: str = ""
    label: str = ""
    sync_server_timeout: int = 0
    must_start: bool = False
    notifications_map: NotificationsMap | None = field(
        default=None, init=False, repr=False, compare=False
    )
    current_apollo_config: CurrentApolloConfig | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], **defaults: Any) -> "AppConfig":
        """Build from a JSON object; fields it lacks take ``defaults``."""
        data = _require_mapping(data)
        values = dict(defaults)
        for key, attr, kind in _APP_CONFIG_FIELDS:
            value = _read(data, key, kind, _MISSING)
            if value is not _MISSING:
                values[attr] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for key, attr, _ in _APP_CONFIG_FIELDS}

    def get_host(self) -> str:
        """Return the configured server address, ending with a slash."""
        try:
            parts = urlsplit(self.ip)
        except ValueError:
            return self.ip
        if parts.path.endswith("/"):
            return self.ip
        return self.ip + "/"

    def init(self) -> None:
        """Reset the current releases and the notification ids of all namespaces."""
        self.current_apollo_config = CurrentApolloConfig()
        self.notifications_map = NotificationsMap(
            split_namespaces(self.namespace_name, None)
        )

    def set_current_apollo_config(self, conn_config: ApolloConnConfig) -> None:
        if self.current_apollo_config is None:
            self.current_apollo_config = CurrentApolloConfig()
        self.current_apollo_config.set(conn_config.namespace_name, conn_config)


@dataclass
class ConnectConfig:
    """Settings of one request to a config server."""

    timeout: float = 0.0
    uri: str = ""
    is_retry: bool = False
    app_id: str = ""
    secret: str = ""