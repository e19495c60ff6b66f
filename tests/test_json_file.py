import json

import pytest

from apolloconf.json_file import ConfigFile, ConfigFileError

APP_PROPERTIES = """{
    "appId": "test",
    "cluster": "dev",
    "namespaceName": "application,abc1",
    "ip": "localhost:8888",
    "backupConfigPath": ""
}"""

SAMPLE = (
    '{"appId":"100004458","cluster":"default","namespaceName":"application",'
    '"releaseKey":"20170430092936-dee2d58e74515ff3",'
    '"configurations":{"key1":"value1","key2":"value2"}}'
)


def unmarshal(data):
    config = {"cluster": "default", "namespaceName": "application", "isBackupConfig": True}
    parsed = json.loads(data)
    if not isinstance(parsed, dict):
        raise ValueError("expected an object")
    config.update(parsed)
    return config


@pytest.fixture
def config_file():
    return ConfigFile()


def test_load_json_config(tmp_path, config_file):
    path = tmp_path / "app.properties"
    path.write_text(APP_PROPERTIES, encoding="utf-8")
    config = config_file.load(path, unmarshal)
    assert config["appId"] == "test"
    assert config["cluster"] == "dev"
    assert config["namespaceName"] == "application,abc1"
    assert config["ip"] == "localhost:8888"


def test_load_json_config_wrong_file(config_file):
    with pytest.raises(ConfigFileError) as info:
        config_file.load("", unmarshal)
    assert str(info.value).startswith("Fail to read config file")


def test_load_json_config_wrong_type(tmp_path, config_file):
    path = tmp_path / "json_config.go"
    path.write_text("package json\n\nimport (\n\t\"os\"\n)\n", encoding="utf-8")
    with pytest.raises(ConfigFileError) as info:
        config_file.load(path, unmarshal)
    assert str(info.value).startswith("Load Json Config fail")


def test_unmarshal_defaults(tmp_path, config_file):
    path = tmp_path / "app.properties"
    path.write_text('{"appId": "testDefault", "ip": "localhost:9999"}', encoding="utf-8")
    config = config_file.load(path, unmarshal)
    assert config["appId"] == "testDefault"
    assert config["cluster"] == "default"
    assert config["namespaceName"] == "application"
    assert config["ip"] == "localhost:9999"


def test_write_then_read(tmp_path, config_file):
    path = tmp_path / "test.json"
    config_file.write(SAMPLE, path)
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text) == SAMPLE


def test_write_dict_round_trip(tmp_path, config_file):
    path = tmp_path / "data.json"
    content = {"appId": "100004458", "configurations": {"key1": "value1"}}
    config_file.write(content, path)
    assert config_file.load(path, json.loads) == content


def test_write_uses_to_dict(tmp_path, config_file):
    class Holder:
        def to_dict(self):
            return {"namespaceName": "application"}

    path = tmp_path / "holder.json"
    config_file.write(Holder(), path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"namespaceName": "application"}


def test_write_bad_path(tmp_path, config_file):
    path = tmp_path / "a" / "a" / "a" / "s.k"
    with pytest.raises(OSError):
        config_file.write(SAMPLE, path)
    assert not path.exists()
    with pytest.raises(OSError):
        config_file.write("", path)
    assert not path.exists()


def test_write_none(tmp_path, config_file):
    path = tmp_path / "none.json"
    with pytest.raises(ConfigFileError, match="content is null"):
        config_file.write(None, path)
    assert not path.exists()


def test_write_unencodable(tmp_path, config_file):
    path = tmp_path / "bad.json"
    with pytest.raises(ConfigFileError):
        config_file.write({"key": object()}, path)
    assert not path.exists()