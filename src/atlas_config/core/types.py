# src/atlas_config/core/types.py
"""
Tipos canônicos de decodificação do Atlas Config.

Este módulo define as estruturas que padronizam a comunicação entre
cursores, decoders e o entry point de load.

Componentes principais:
    - DecodeResult → resultado imutável (valor ou falhas acumuladas)
    - CannotConvert → rejeição retornada por funções de `Decoder.emap`

Invariantes:
    - Um resultado é sucesso se, e somente se, não possui falhas
    - Um resultado nunca é alterado após criado
    - Combinar resultados preserva a ordem das falhas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, Tuple, TypeVar

from .errors import DecodeFailure
from .exceptions import ConfigReaderError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """
    Resultado imutável de uma decodificação.

    Campos:
        - value: valor decodificado (pode ser None legitimamente, ex.: campo opcional)
        - failures: falhas estruturadas acumuladas

    Decisões arquiteturais:
        - Sucesso é determinado pela ausência de falhas, não pelo valor
        - Resolvers e decoders retornam este tipo e nunca levantam exceções
    """

    value: Optional[T] = None
    failures: Tuple[DecodeFailure, ...] = ()

    @classmethod
    def success(cls, value: T) -> "DecodeResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, *failures: DecodeFailure) -> "DecodeResult[Any]":
        return cls(failures=tuple(failures))

    @classmethod
    def from_failures(cls, failures: Iterable[DecodeFailure]) -> "DecodeResult[Any]":
        return cls(failures=tuple(failures))

    @property
    def ok(self) -> bool:
        return not self.failures

    def map(self, f: Callable[[T], U]) -> "DecodeResult[U]":
        if not self.ok:
            return self  # type: ignore[return-value]
        return DecodeResult.success(f(self.value))  # type: ignore[arg-type]

    def and_then(self, f: Callable[[T], "DecodeResult[U]"]) -> "DecodeResult[U]":
        if not self.ok:
            return self  # type: ignore[return-value]
        return f(self.value)  # type: ignore[arg-type]

    def get_or_raise(self) -> T:
        """Retorna o valor ou levanta `ConfigReaderError` com todas as falhas."""
        if not self.ok:
            raise ConfigReaderError(failures=self.failures)
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True)
class CannotConvert:
    """Rejeição retornada por uma função de validação em `Decoder.emap`.

    O decoder completa a falha com o valor bruto, o caminho e a origem.
    """

    to_type: str
    because: str
