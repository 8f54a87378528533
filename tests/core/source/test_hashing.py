# tests/core/source/test_hashing.py
"""
Testes do hash canônico da árvore de configuração.

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - A ordem das chaves e a origem não afetam o hash
"""

import pytest

from atlas_config.core.source.hashing import compute_config_hash
from atlas_config.core.source.node import ConfigNode
from atlas_config.core.source.parser import parse_source


def test_hash_is_sha256_hex():
    h = compute_config_hash(ConfigNode.from_plain({"a": 1}))

    assert len(h) == 64
    int(h, 16)


def test_hash_ignores_key_order():
    a = ConfigNode.from_plain({"a": 1, "b": {"x": [1, 2]}})
    b = ConfigNode.from_plain({"b": {"x": [1, 2]}, "a": 1})

    assert compute_config_hash(a) == compute_config_hash(b)


def test_hash_ignores_origin():
    parsed = parse_source("a: 1\nb: text\n", source_name="x.yaml", env={})
    built = ConfigNode.from_plain({"a": 1, "b": "text"})

    assert compute_config_hash(parsed) == compute_config_hash(built)


def test_hash_changes_with_values():
    a = ConfigNode.from_plain({"port": 8080})
    b = ConfigNode.from_plain({"port": 9090})

    assert compute_config_hash(a) != compute_config_hash(b)


def test_hash_rejects_plain_dicts():
    with pytest.raises(TypeError):
        compute_config_hash({"a": 1})
