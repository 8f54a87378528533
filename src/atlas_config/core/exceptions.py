"""
Atlas Config — Canonical Exceptions (v1)

Este módulo define a exceção levantada pelo entry point que encerra o
programa em caso de configuração inválida.

Regras:
- Resolvers e decoders nunca levantam; retornam falhas estruturadas.
- Apenas `load_or_raise` converte a lista agregada em exceção.
- A mensagem lista todas as falhas, com caminho e origem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import DecodeFailure
from .source.errors import ConfigError


@dataclass(frozen=True)
class ConfigReaderError(ConfigError):
    """Falhas agregadas de decodificação.

    Importante:
    - `failures` preserva a ordem em que as falhas foram produzidas
    - A mensagem é uma linha por falha, pronta para o operador
    """

    failures: Tuple[DecodeFailure, ...]

    def __str__(self) -> str:
        lines = [f"Cannot load configuration ({len(self.failures)} failure(s)):"]
        lines.extend(f"  - {f.describe()}" for f in self.failures)
        return "\n".join(lines)
