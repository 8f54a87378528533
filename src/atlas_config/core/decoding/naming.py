# src/atlas_config/core/decoding/naming.py
"""Convenções de nomes para chaves de registro e discriminantes de variantes."""

import re


_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[-_\s]+")


def kebab_case(name: str) -> str:
    """`start_date` → `start-date`, `startDate` → `start-date`, `HTTPServer` → `http-server`."""
    spaced = _BOUNDARY.sub("-", name.strip("_"))
    return _SEPARATORS.sub("-", spaced).lower()


def canonical_name(name: str) -> str:
    """Forma canônica de um discriminante: minúsculas, sem separadores.

    `FullMode`, `full-mode`, `full_mode` e `fullmode` coincidem.
    """
    return _SEPARATORS.sub("", name).lower()
