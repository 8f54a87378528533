# tests/core/test_failures.py
"""
Testes do padrão canônico de falhas de decodificação.

Valida:
- renderização de caminhos (`a.b[0].c`)
- mensagens e detalhes das fábricas de falha
- DecodeResult (sucesso determinado pela ausência de falhas)
- ConfigReaderError (uma linha por falha, com caminho e origem)
"""

import pytest

from atlas_config.core.errors import (
    FailureReason,
    cannot_convert,
    missing_key,
    render_path,
    type_mismatch,
    unknown_key,
)
from atlas_config.core.exceptions import ConfigReaderError
from atlas_config.core.source.errors import ConfigError
from atlas_config.core.source.node import NodeKind, Origin
from atlas_config.core.types import DecodeResult


def test_render_path():
    assert render_path(()) == "<root>"
    assert render_path(("app1", "audit-mode", "start-date")) == "app1.audit-mode.start-date"
    assert render_path(("servers", 0, "port")) == "servers[0].port"
    assert render_path(("matrix", 1, 2)) == "matrix[1][2]"


def test_cannot_convert_carries_value_type_and_reason():
    failure = cannot_convert(
        path=("server", "port"),
        value="-1",
        to_type="Port",
        because="Invalid port number",
        origin=Origin("app.yaml", 4),
    )

    assert failure.reason is FailureReason.CANNOT_CONVERT
    assert failure.details == {"value": "-1", "to_type": "Port", "because": "Invalid port number"}
    assert failure.describe() == "server.port: Cannot convert '-1' to Port: Invalid port number. (app.yaml:4)"


def test_type_mismatch_message_appends_hint():
    failure = type_mismatch(
        path=("mode",),
        expected=[NodeKind.STRING],
        found=NodeKind.OBJECT,
        hint="Use a bare string.",
    )

    assert failure.message == "Expected type string. Found object instead. Use a bare string."


def test_missing_and_unknown_key_messages():
    assert missing_key(path=("a", "b")).message == "Key not found: 'b'."
    assert unknown_key(path=("a", "extra")).message == "Unknown key 'extra'."


def test_failures_compare_without_origin():
    a = missing_key(path=("a",), origin=Origin("x.yaml", 1))
    b = missing_key(path=("a",), origin=Origin("y.yaml", 7))

    assert a == b


def test_to_dict_is_serializable():
    failure = missing_key(path=("servers", 0, "host"), origin=Origin("app.yaml", 5))

    assert failure.to_dict() == {
        "reason": "missing_key",
        "path": "servers[0].host",
        "message": "Key not found: 'host'.",
        "details": {"key": "host"},
        "origin": "app.yaml:5",
    }


def test_decode_result_success_may_hold_none():
    result = DecodeResult.success(None)

    assert result.ok
    assert result.get_or_raise() is None


def test_decode_result_map_and_and_then_skip_failures():
    failed = DecodeResult.failure(missing_key(path=("a",)))

    assert failed.map(lambda v: v + 1) is failed
    assert failed.and_then(lambda v: DecodeResult.success(v)) is failed
    assert DecodeResult.success(1).map(lambda v: v + 1).value == 2


def test_get_or_raise_lists_every_failure():
    result = DecodeResult.from_failures(
        [
            missing_key(path=("app1", "name"), origin=Origin("app.yaml", 1)),
            cannot_convert(
                path=("app1", "audit-mode", "start-date"),
                value="tomorrow",
                to_type="Date",
                because="Invalid isoformat string",
                origin=Origin("app.yaml", 4),
            ),
        ]
    )

    with pytest.raises(ConfigReaderError) as exc:
        result.get_or_raise()

    err = exc.value
    assert isinstance(err, ConfigError)
    assert len(err.failures) == 2
    assert str(err).splitlines() == [
        "Cannot load configuration (2 failure(s)):",
        "  - app1.name: Key not found: 'name'. (app.yaml:1)",
        "  - app1.audit-mode.start-date: Cannot convert 'tomorrow' to Date: Invalid isoformat string. (app.yaml:4)",
    ]
