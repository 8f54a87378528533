# tests/core/decoding/test_decoder_combinators.py
"""
Testes de composição de decoders: map, emap e or_else.

Inclui o caso canônico de validação de porta:
- `-1` é rejeitado com CANNOT_CONVERT("-1", "Port", "Invalid port number")
- `8080` é aceito
"""

from atlas_config.api import load
from atlas_config.core.cursor import ConfigCursor
from atlas_config.core.decoding import Decoder, delimited, integer, list_of, string
from atlas_config.core.errors import FailureReason
from atlas_config.core.source.node import ConfigNode
from atlas_config.core.source.parser import parse_source
from atlas_config.core.types import DecodeResult
from tests.fixtures.audit_model import port


def _at(text: str, path: str) -> ConfigCursor:
    return ConfigCursor.root(parse_source(text, source_name="app.yaml", env={})).at_path(path).value


def test_port_rejects_negative_number():
    result = port.decode(_at("server:\n  port: -1\n", "server.port"))

    (failure,) = result.failures
    assert failure.reason is FailureReason.CANNOT_CONVERT
    assert failure.details == {"value": "-1", "to_type": "Port", "because": "Invalid port number"}
    assert failure.path == ("server", "port")
    assert failure.origin.line == 2


def test_port_accepts_8080():
    result = port.decode(_at("server:\n  port: 8080\n", "server.port"))

    assert result.ok
    assert result.value == 8080


def test_port_upper_bound_is_exclusive():
    assert not port.decode(_at("port: 65536\n", "port")).ok
    assert port.decode(_at("port: 65535\n", "port")).value == 65535


def test_emap_keeps_upstream_failure_untouched():
    (failure,) = port.decode(_at("port: eighty\n", "port")).failures

    assert failure.reason is FailureReason.TYPE_MISMATCH


def test_emap_turns_value_error_into_cannot_convert():
    upper_only = string.emap(_require_upper, "Upper")

    (failure,) = upper_only.decode(_at("code: abc\n", "code")).failures

    assert failure.reason is FailureReason.CANNOT_CONVERT
    assert failure.details["because"] == "must be upper case"
    assert failure.details["to_type"] == "Upper"


def _require_upper(text: str) -> str:
    if text != text.upper():
        raise ValueError("must be upper case")
    return text


def test_map_post_processes_success_only():
    shouted = string.map(str.upper)

    assert shouted.decode(_at("a: hi\n", "a")).value == "HI"
    assert shouted.decode(_at("a: 1\n", "a")).failures[0].reason is FailureReason.TYPE_MISMATCH


def test_map_turns_value_error_into_cannot_convert():
    """
    Verifica que uma exceção de conversão em `map` vira falha estruturada.

    Invariantes:
        - `load` nunca levanta por falhas de decodificação
        - A falha aponta o caminho e o texto bruto do valor
    """
    as_int = string.map(int, "Int")

    result = load(parse_source("v: abc\n", source_name="app.yaml", env={}), as_int, "v")

    (failure,) = result.failures
    assert failure.reason is FailureReason.CANNOT_CONVERT
    assert failure.path == ("v",)
    assert failure.details["value"] == "abc"
    assert failure.details["to_type"] == "Int"
    assert failure.origin.line == 1
    assert as_int.decode(_at("v: '42'\n", "v")).value == 42


def test_or_else_accepts_array_or_delimited_string():
    hosts = list_of(string).or_else(delimited(string))

    assert hosts.decode(_at("hosts: [a, b]\n", "hosts")).value == ["a", "b"]
    assert hosts.decode(_at("hosts: 'a, b,c'\n", "hosts")).value == ["a", "b", "c"]


def test_or_else_reports_both_failures_when_both_fail():
    ports = list_of(integer).or_else(delimited(integer))

    result = ports.decode(_at("ports: true\n", "ports"))

    assert [f.reason for f in result.failures] == [FailureReason.TYPE_MISMATCH, FailureReason.TYPE_MISMATCH]
    assert ports.name == "List[Int] | Delimited[Int]"


def test_decoder_is_callable_and_named():
    always = Decoder(lambda c: DecodeResult.success(42), "Answer")

    assert always(ConfigCursor.root(ConfigNode.null())).value == 42
    assert repr(always) == "Decoder(Answer)"
