import json
import pytest
from pathlib import Path

from warden import DocumentError, PermissionDenied, Permission, Store, registry
from warden.config import WardenConfig
from warden.loaders import (
    JsonHandler,
    YamlHandler,
    build_store,
    load_document,
    load_store,
)


@pytest.fixture
def settings_data():
    return {
        "app": "demo",
        "secret": "s3cr3t",
        "database": {"host": "localhost", "password": "hunter2"},
        "servers": [{"name": "a"}, {"name": "b"}],
    }


def test_json_handler(tmp_path: Path, settings_data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings_data))

    handler = JsonHandler()
    assert handler.match(path)
    assert not handler.match(tmp_path / "settings.yaml")
    assert handler.load(path) == settings_data


def test_json_handler_rejects_non_object(tmp_path: Path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")

    with pytest.raises(DocumentError) as excinfo:
        JsonHandler().load(path)
    assert excinfo.value.path == path


def test_json_handler_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(DocumentError, match="invalid JSON"):
        JsonHandler().load(path)


def test_yaml_handler(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text("app: demo\n1: one\ndatabase:\n  host: localhost\n")

    handler = YamlHandler()
    assert handler.match(path)
    assert handler.match(tmp_path / "x.YAML")
    assert handler.load(path) == {
        "app": "demo",
        "1": "one",
        "database": {"host": "localhost"},
    }


def test_yaml_handler_empty_file_is_empty_document(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert YamlHandler().load(path) == {}


def test_load_document_rejects_unknown_format(tmp_path: Path):
    path = tmp_path / "settings.ini"
    path.write_text("[a]\n")

    with pytest.raises(DocumentError, match="unsupported format"):
        load_document(path)


def test_load_document_missing_file(tmp_path: Path):
    with pytest.raises(DocumentError):
        load_document(tmp_path / "nope.json")


def test_build_store_without_config_is_fully_open(settings_data):
    store = build_store(settings_data)

    assert type(store) is Store
    assert store.read("database:password") == "hunter2"
    assert isinstance(store.read("servers:1"), Store)
    assert store.read("servers:1:name") == "b"


def test_build_store_applies_configured_permissions(settings_data):
    config = WardenConfig(
        permissions={
            "secret": Permission.NONE,
            "database:password": Permission.WRITE,
        }
    )
    store = build_store(settings_data, config)

    assert store.read("app") == "demo"
    with pytest.raises(PermissionDenied):
        store.read("secret")
    with pytest.raises(PermissionDenied):
        store.read("database:password")

    database = store.read("database")
    assert registry.declared_permission(type(database), "password") is Permission.WRITE
    # Write-only still accepts writes
    database.write("password", "rotated")
    assert database.entries() == {"host": "localhost"}


def test_build_store_applies_default_policy_to_every_node(settings_data):
    store = build_store(settings_data, WardenConfig(default_policy=Permission.READ))

    assert store.read("database:host") == "localhost"
    with pytest.raises(PermissionDenied):
        store.write("app", "other")
    with pytest.raises(PermissionDenied):
        store.read("database").write("host", "remote")


def test_build_store_node_types_are_isolated(settings_data):
    config = WardenConfig(permissions={"database:password": Permission.NONE})
    first = build_store(settings_data, config)
    second = build_store(settings_data)

    assert not first.read("database").allowed_to_read("password")
    assert second.read("database").allowed_to_read("password")


def test_load_store(tmp_path: Path, settings_data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings_data))

    store = load_store(path, WardenConfig(permissions={"secret": Permission.NONE}))
    assert "secret" not in store.entries()
    assert store.read("app") == "demo"


def test_build_store_applies_permissions_inside_lists():
    data = {
        "servers": [
            {"name": "a", "password": "x"},
            {"name": "b", "password": "y"},
            [{"token": "t"}],
        ]
    }
    config = WardenConfig(
        permissions={
            "servers:0:password": Permission.NONE,
            "servers:2:0:token": Permission.WRITE,
        }
    )
    store = build_store(data, config)

    assert store.read("servers:0:name") == "a"
    with pytest.raises(PermissionDenied) as excinfo:
        store.read("servers:0:password")
    assert excinfo.value.key == "password"
    # Only the configured element is restricted
    assert store.read("servers:1:password") == "y"
    # Nested lists are addressed by index too
    with pytest.raises(PermissionDenied):
        store.read("servers:2:0:token")
    assert store.entries()["servers"][0].entries() == {"name": "a"}
