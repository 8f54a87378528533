# tests/core/test_cursor.py
"""
Testes do Path Resolver (ConfigCursor).

Os testes asseguram que:
- navegação por chave, índice e caminho pontuado produz o caminho exato
- chaves ausentes falham com MISSING_KEY, exceto quando opcionais
- inspeção de forma falha com TYPE_MISMATCH (esperado vs encontrado)
- toda falha carrega caminho e origem

Invariantes:
    - O cursor nunca levanta exceções para falhas de navegação
"""

from atlas_config.core.cursor import ConfigCursor
from atlas_config.core.errors import FailureReason
from atlas_config.core.source.parser import parse_source


TEXT = """\
server:
  host: localhost
  port: 8080
servers:
  - host: a
    port: 1
  - host: b
    port: 2
name: First Test
"""


def _root() -> ConfigCursor:
    return ConfigCursor.root(parse_source(TEXT, source_name="app.yaml", env={}))


def test_at_key_extends_the_path():
    result = _root().at_key("server").and_then(lambda c: c.at_key("port"))

    assert result.ok
    assert result.value.path == ("server", "port")
    assert result.value.dotted_path == "server.port"
    assert result.value.origin.line == 3


def test_missing_key_fails_with_path_and_origin():
    result = _root().at_key("server").and_then(lambda c: c.at_key("timeout"))

    assert not result.ok
    (failure,) = result.failures
    assert failure.reason is FailureReason.MISSING_KEY
    assert failure.path == ("server", "timeout")
    assert failure.message == "Key not found: 'timeout'."
    assert failure.origin.source == "app.yaml"


def test_at_key_on_non_object_is_missing_key_with_found_kind():
    result = _root().at_path("name").and_then(lambda c: c.at_key("first"))

    (failure,) = result.failures
    assert failure.reason is FailureReason.MISSING_KEY
    assert failure.path == ("name", "first")
    assert failure.details["found"] == "string"
    assert "not an object" in failure.message


def test_optional_missing_key_yields_absent_cursor():
    result = _root().at_key("timeout", optional=True)

    assert result.ok
    cursor = result.value
    assert cursor.is_absent
    assert cursor.is_null
    assert cursor.path == ("timeout",)
    assert cursor.origin is not None


def test_reading_an_absent_cursor_is_missing_key():
    absent = _root().at_key("timeout", optional=True).value

    (failure,) = absent.as_string().failures
    assert failure.reason is FailureReason.MISSING_KEY
    assert failure.path == ("timeout",)


def test_shape_mismatch_reports_expected_and_found():
    port = _root().at_path("server.port").value

    (failure,) = port.as_string().failures
    assert failure.reason is FailureReason.TYPE_MISMATCH
    assert failure.details == {"expected": ["string"], "found": "number"}
    assert failure.message == "Expected type string. Found number instead."
    assert failure.describe() == "server.port: Expected type string. Found number instead. (app.yaml:3)"


def test_scalar_accessors():
    root = _root()

    assert root.at_path("server.host").value.as_string().value == "localhost"
    assert root.at_path("server.port").value.as_number().value == 8080
    assert not root.at_path("server.port").value.as_boolean().ok


def test_at_path_indexes_arrays_with_numeric_segments():
    result = _root().at_path("servers.1.port")

    assert result.ok
    assert result.value.dotted_path == "servers[1].port"
    assert result.value.as_number().value == 2


def test_at_path_accepts_a_sequence():
    result = _root().at_path(["servers", 0, "host"])

    assert result.value.as_string().value == "a"


def test_at_path_stops_at_first_missing_segment():
    result = _root().at_path("database.primary.host")

    (failure,) = result.failures
    assert failure.path == ("database",)


def test_empty_path_is_the_cursor_itself():
    root = _root()

    assert root.at_path(None).value is root
    assert root.at_path("").value is root


def test_at_index_out_of_range():
    servers = _root().at_key("servers").value

    (failure,) = servers.at_index(5).failures
    assert failure.reason is FailureReason.MISSING_KEY
    assert failure.dotted_path == "servers[5]"


def test_negative_index_is_normalized_in_the_path():
    servers = _root().at_key("servers").value

    assert servers.at_index(-1).value.path == ("servers", 1)


def test_as_object_and_as_array_return_child_cursors():
    root = _root()

    children = root.at_key("server").value.as_object().value
    assert list(children) == ["host", "port"]
    assert children["port"].path == ("server", "port")

    items = root.at_key("servers").value.as_array().value
    assert [c.dotted_path for c in items] == ["servers[0]", "servers[1]"]


def test_keys_of_object_cursor():
    assert _root().keys() == ["server", "servers", "name"]


def test_as_array_on_object_is_type_mismatch():
    (failure,) = _root().at_key("server").value.as_array().failures

    assert failure.reason is FailureReason.TYPE_MISMATCH
    assert failure.details["found"] == "object"
