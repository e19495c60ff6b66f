import json

import pytest

from apolloconf.config import AppConfig
from apolloconf.server import RoundRobin, get_servers, set_servers
from apolloconf.serverlist import Component, parse_server_list, start_refresh_config

_SERVER_ENTRIES = [
    {
        "appName": "CONFIG-SERVICE",
        "instanceId": f"192.0.2.{n}:config-service:8080",
        "homepageUrl": f"http://192.0.2.{n}:8080/",
    }
    for n in range(1, 10)
] + [
    {
        "appName": "CONFIG-SERVICE",
        "instanceId": "localhost:config-service:8080",
        "homepageUrl": "http://192.0.2.50:8080/",
    }
]

SERVICES_CONFIG_RESPONSE = json.dumps(_SERVER_ENTRIES)


def test_parse_server_list_counts_all():
    servers = parse_server_list(SERVICES_CONFIG_RESPONSE.encode())
    assert len(servers) == 10
    first = servers["http://192.0.2.1:8080/"]
    assert first.app_name == "CONFIG-SERVICE"
    assert first.instance_id == "192.0.2.1:config-service:8080"
    assert first.is_down is False
    assert servers["http://192.0.2.50:8080/"].instance_id == "localhost:config-service:8080"


def test_parse_server_list_skips_null_entries():
    servers = parse_server_list('[null, {"homepageUrl": "http://a/"}]')
    assert list(servers) == ["http://a/"]


def test_parse_server_list_empty():
    assert parse_server_list("[]") == {}


def test_parse_server_list_invalid():
    with pytest.raises(ValueError):
        parse_server_list("jaskldfjaskl")


def test_select_only_one_host():
    app_config = AppConfig(ip="http://localhost:18888")
    host = "http://localhost:18888/"
    assert app_config.get_host() == host
    set_servers(app_config.get_host(), parse_server_list(SERVICES_CONFIG_RESPONSE))

    chosen = RoundRobin().load(get_servers(app_config.get_host()))
    assert chosen.homepage_url != host
    assert chosen.homepage_url.startswith("http://192.0.2.")

    app_config.ip = host
    assert app_config.get_host() == host
    assert RoundRobin().load(get_servers(app_config.get_host())).homepage_url != host

    app_config.ip = "https://localhost:18888"
    assert app_config.get_host() == "https://localhost:18888/"
    assert RoundRobin().load(get_servers(app_config.get_host())) is None


class _RecordingComponent(Component):
    def __init__(self):
        self.started = 0

    def start(self):
        self.started += 1


def test_start_refresh_config_starts_component():
    component = _RecordingComponent()
    start_refresh_config(component)
    assert component.started == 1