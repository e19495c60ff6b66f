# apolloconf

Client-side building blocks for working with an Apollo-style configuration
service: loading the application's own settings, tracking namespace
notification ids, choosing a live config server, caching values in memory
and writing backups of fetched configuration to disk.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Application settings

`apolloconf.app_config` reads the application settings from a JSON file.
The file name is taken from the `AGOLLO_CONF` environment variable, or
`app.properties` in the working directory if that is unset or empty.

```python
from apolloconf.app_config import init_config, init_file_config, unmarshal

app = init_config(None)           # reads the settings file
app = init_file_config()          # the same, through init_config(None)

app = unmarshal(b'{"appId": "demo", "ip": "http://localhost:8080"}')
app.cluster           # "default"
app.namespace_name    # "application"
app.is_backup_config  # True
app.get_host()        # "http://localhost:8080/"
```

A file that cannot be read, or whose content cannot be decoded, raises
`apolloconf.json_file.ConfigFileError`. `init_config` also accepts a
callable returning an `AppConfig`; it is then called instead of reading
the file.

`unmarshal` accepts bytes or text, fills in the defaults shown above for
missing fields, raises `TypeError` for fields of the wrong JSON type, and
calls `AppConfig.init()` on the result. `AppConfig.from_dict` and
`AppConfig.to_dict` convert to and from the JSON field names (`appId`,
`cluster`, `namespaceName`, `ip`, `isBackupConfig`, `backupConfigPath`,
`secret`, `label`, `syncServerTimeout`, `MustStart`).

## Namespaces and notifications

```python
from apolloconf.config import Notification, split_namespaces

split_namespaces("a,b,c", None)   # {"a": -1, "b": -1, "c": -1}

app.namespace_name = "application,abc1"
app.init()
notifications = app.notifications_map
notifications.get_notify("application")     # -1 until updated
notifications.update_notify("application", 3)
notifications.get_notify("unknown")         # 0
len(notifications)                          # 2
notifications.get_notifies("")              # JSON array of every namespace
notifications.update_all_notifications([Notification("abc1", 7)])
```

`update_all_notifications` only takes over ids of namespaces that are
already known; `get_notifies(namespace)` with a non-empty name registers
that namespace with id -1 if it was unknown.

`AppConfig.init()` also creates `app.current_apollo_config`, a
`CurrentApolloConfig` holding the release (`ApolloConnConfig`) last seen
for each namespace; `get_release_key(namespace)` returns an empty string
for a namespace without one.

`ApolloConfig` is a release together with its `configurations`
dictionary, with `from_dict` and `to_dict` for its JSON form.
`ConnectConfig` groups the settings of one request (timeout, URI, retry
flag, app id, secret).

## Server selection

```python
from apolloconf.server import (
    RoundRobin, get_servers, is_connect_directly, set_down_node,
    set_next_try_conn_time, set_servers,
)
from apolloconf.serverlist import parse_server_list

servers = parse_server_list(response_body)   # keyed by homepage URL
set_servers(app.get_host(), servers)
server = RoundRobin().load(get_servers(app.get_host()))
set_down_node(app.get_host(), server.homepage_url)
```

`parse_server_list` raises `ValueError` for a body that is not a JSON
array of server objects and returns an empty dictionary for an empty list.
`RoundRobin.load` returns the first server that is not marked down, or
`None` when there are no servers or every one is down. `set_down_node`
marks every server whose address contains the given host as down.
`set_next_try_conn_time(host, seconds)` postpones the next direct
connection (30 seconds when `seconds` is 0), and `is_connect_directly`
reports whether that time is still in the future for a host with servers.

`apolloconf.serverlist.Component` is the base for background tasks, and
`start_refresh_config(component)` calls its `start()`.

## In-memory cache

```python
from apolloconf.cache import CacheMissError, DefaultCacheFactory

cache = DefaultCacheFactory().create()
cache.set("a", "b", 100)
cache.get("a")          # "b"
cache.entry_count()     # 1
cache.range(lambda key, value: True)
cache.delete("a")       # True
cache.clear()
cache.get("missing")    # raises CacheMissError
```

The entry count goes up on every `set` and down on every `delete`,
whether or not the key was present; `clear` resets it to 0. The expiry
argument is accepted but not enforced.

## Backups

```python
from apolloconf.backup import JSONFileHandler, get_raw_file_handler

handler = JSONFileHandler()
handler.write_config_file(apollo_config, "backup-dir")
restored = handler.load_config_file(
    "backup-dir", apollo_config.app_id, apollo_config.namespace_name
)
```

Each namespace is stored as `<app id>-<namespace>.json` in the given
directory (or the working directory when it is empty); the directory is
created if needed. `load_config_file` raises `ConfigFileError` when the
file cannot be read or decoded.

`get_raw_file_handler()` returns a shared `RawFileHandler`, which in
addition writes the string under the `content` key of the configuration
to a file named after the namespace.

`apolloconf.json_file.ConfigFile` is the underlying reader and writer:
`load(path, unmarshal)` passes the file's bytes to `unmarshal`, and
`write(content, path)` writes `content` (or its `to_dict()`) as one line
of JSON.

## Logging

All diagnostics go through `apolloconf.log`. By default they are passed
to the `apolloconf` logger of the standard `logging` module. Install a
different logger with `init_logger`, passing an instance of a subclass of
`apolloconf.log.LoggerInterface` (anything else raises `TypeError`);
`get_logger()` returns the one in use.

## What this package does not do

It contains no network client: it does not fetch configuration or server
lists from a config service, does not long-poll for changes and offers no
client object that keeps a namespace cache up to date. It provides the
settings, bookkeeping, server selection, caching and backup pieces that
such a client is built from.