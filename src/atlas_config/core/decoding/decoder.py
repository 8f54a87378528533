# src/atlas_config/core/decoding/decoder.py
"""
Decoder canônico do Atlas Config.

Um `Decoder[T]` encapsula uma função pura `ConfigCursor -> DecodeResult[T]`.
Decoders são sempre construídos e passados explicitamente: não existe
resolução implícita ou ambiente global que possa trocar o decoder usado
em um ponto de chamada.

Composição:
    - map(f)     → pós-processa um valor decodificado; falhas passam inalteradas
    - emap(f)    → valida e transforma; `f` retorna valor ou `CannotConvert`
    - or_else(d) → em caso de falha, tenta `d` sobre o mesmo cursor

Princípios fundamentais:
    - Decoders nunca levantam exceções; retornam falhas estruturadas
    - Decoders nunca mutam a árvore e podem ser usados em paralelo
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar, Union

from ..cursor import ConfigCursor
from ..errors import cannot_convert
from ..types import CannotConvert, DecodeResult


T = TypeVar("T")
U = TypeVar("U")


def _raw(cursor: ConfigCursor) -> str:
    return cursor.node.render() if cursor.node is not None else ""


class Decoder(Generic[T]):
    """
    Decoder composável de valores de configuração.

    Args:
        fn: função pura que recebe um cursor e retorna um `DecodeResult`.
        name: nome do tipo alvo, usado em mensagens de falha.
    """

    def __init__(self, fn: Callable[[ConfigCursor], DecodeResult[T]], name: str = "value"):
        self._fn = fn
        self.name = name

    def __repr__(self) -> str:
        return f"Decoder({self.name})"

    def decode(self, cursor: ConfigCursor) -> DecodeResult[T]:
        return self._fn(cursor)

    __call__ = decode

    def map(self, f: Callable[[T], U], name: str | None = None) -> "Decoder[U]":
        """
        Pós-processa o valor decodificado.

        Um `ValueError` ou `TypeError` levantado por `f` vira CANNOT_CONVERT
        no caminho do cursor, como em `emap`.
        """
        target = name or self.name

        def _decode(cursor: ConfigCursor) -> DecodeResult[U]:
            result = self.decode(cursor)
            if not result.ok:
                return result  # type: ignore[return-value]
            try:
                return DecodeResult.success(f(result.value))  # type: ignore[arg-type]
            except (ValueError, TypeError) as e:
                return DecodeResult.failure(
                    cannot_convert(
                        path=cursor.path,
                        value=_raw(cursor),
                        to_type=target,
                        because=str(e) or type(e).__name__,
                        origin=cursor.origin,
                    )
                )

        return Decoder(_decode, target)

    def emap(self, f: Callable[[T], Union[U, CannotConvert]], name: str | None = None) -> "Decoder[U]":
        """
        Valida e transforma o valor decodificado.

        `f` retorna o novo valor ou um `CannotConvert(to_type, because)`.
        `ValueError` e `TypeError` levantados por `f` também viram
        CANNOT_CONVERT, com a mensagem da exceção como motivo.
        """
        target = name or self.name

        def _decode(cursor: ConfigCursor) -> DecodeResult[U]:
            result = self.decode(cursor)
            if not result.ok:
                return result  # type: ignore[return-value]
            try:
                out = f(result.value)  # type: ignore[arg-type]
            except (ValueError, TypeError) as e:
                out = CannotConvert(to_type=target, because=str(e) or type(e).__name__)
            if isinstance(out, CannotConvert):
                return DecodeResult.failure(
                    cannot_convert(
                        path=cursor.path,
                        value=_raw(cursor),
                        to_type=out.to_type,
                        because=out.because,
                        origin=cursor.origin,
                    )
                )
            return DecodeResult.success(out)

        return Decoder(_decode, target)

    def or_else(self, alt: "Decoder[Any]") -> "Decoder[Any]":
        """Tenta `alt` sobre o mesmo cursor quando este decoder falha.

        Se ambos falharem, as falhas dos dois são reportadas, nesta ordem.
        """

        def _decode(cursor: ConfigCursor) -> DecodeResult[Any]:
            first = self.decode(cursor)
            if first.ok:
                return first
            second = alt.decode(cursor)
            if second.ok:
                return second
            return DecodeResult.from_failures(first.failures + second.failures)

        return Decoder(_decode, f"{self.name} | {alt.name}")
