# src/atlas_config/core/decoding/primitives.py
"""
Decoders primitivos e combinadores de coleção.

Decoders de escalares são estritos quanto à forma do nó: `string` exige
STRING, `integer` exige NUMBER, etc. Conversões a partir de texto (datas,
caminhos, enums, listas delimitadas) são expressas com `emap`/`map` sobre
`string`, para que a falha seja sempre CANNOT_CONVERT com o valor bruto.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from ..cursor import ConfigCursor
from ..errors import DecodeFailure
from ..source.node import ConfigNode
from ..types import CannotConvert, DecodeResult
from .decoder import Decoder
from .naming import canonical_name


T = TypeVar("T")
E = TypeVar("E", bound=Enum)


# -----------------------------
# Escalares
# -----------------------------

string: Decoder[str] = Decoder(lambda c: c.as_string(), "String")

boolean: Decoder[bool] = Decoder(lambda c: c.as_boolean(), "Boolean")


def _to_int(value: Union[int, float]) -> Union[int, CannotConvert]:
    if isinstance(value, float):
        if not value.is_integer():
            return CannotConvert(to_type="Int", because="not an integral number")
        return int(value)
    return value


integer: Decoder[int] = Decoder(lambda c: c.as_number(), "Int").emap(_to_int)

number: Decoder[float] = Decoder(lambda c: c.as_number(), "Number").map(float)

date: Decoder[dt.date] = string.emap(dt.date.fromisoformat, "Date")

path: Decoder[Path] = string.map(Path, "Path")


# -----------------------------
# Combinadores
# -----------------------------

def optional(decoder: Decoder[T]) -> Decoder[Optional[T]]:
    """Chave ausente ou `null` → None; caso contrário delega a `decoder`."""

    def _decode(cursor: ConfigCursor) -> DecodeResult[Optional[T]]:
        if cursor.is_null:
            return DecodeResult.success(None)
        return decoder.decode(cursor)

    return Decoder(_decode, f"Optional[{decoder.name}]")


def _collect(results: List[DecodeResult[Any]]) -> List[DecodeFailure]:
    failures: List[DecodeFailure] = []
    for r in results:
        failures.extend(r.failures)
    return failures


def list_of(decoder: Decoder[T]) -> Decoder[List[T]]:
    """Decodifica um ARRAY elemento a elemento, acumulando falhas de todos os índices."""

    def _decode(cursor: ConfigCursor) -> DecodeResult[List[T]]:
        items = cursor.as_array()
        if not items.ok:
            return items  # type: ignore[return-value]
        results = [decoder.decode(item) for item in items.value]  # type: ignore[union-attr]
        failures = _collect(results)
        if failures:
            return DecodeResult.from_failures(failures)
        return DecodeResult.success([r.value for r in results])  # type: ignore[misc]

    return Decoder(_decode, f"List[{decoder.name}]")


def dict_of(decoder: Decoder[T]) -> Decoder[Dict[str, T]]:
    """Decodifica um OBJECT com chaves livres, preservando a ordem das chaves."""

    def _decode(cursor: ConfigCursor) -> DecodeResult[Dict[str, T]]:
        entries = cursor.as_object()
        if not entries.ok:
            return entries  # type: ignore[return-value]
        results = {k: decoder.decode(c) for k, c in entries.value.items()}  # type: ignore[union-attr]
        failures = _collect(list(results.values()))
        if failures:
            return DecodeResult.from_failures(failures)
        return DecodeResult.success({k: r.value for k, r in results.items()})  # type: ignore[misc]

    return Decoder(_decode, f"Dict[{decoder.name}]")


def delimited(decoder: Decoder[T], sep: str = ",") -> Decoder[List[T]]:
    """
    Decodifica uma STRING delimitada (`"a, b, c"`) como lista.

    Cada parte é decodificada por `decoder` como um nó STRING posicionado em
    `path[i]`, de modo que falhas apontem para o elemento exato. Usado com
    `or_else` para aceitar tanto um array quanto sua forma textual.
    """

    def _decode(cursor: ConfigCursor) -> DecodeResult[List[T]]:
        text = cursor.as_string()
        if not text.ok:
            return text  # type: ignore[return-value]
        parts = [p.strip() for p in text.value.split(sep)] if text.value.strip() else []  # type: ignore[union-attr]
        results = [
            decoder.decode(
                ConfigCursor(
                    node=ConfigNode.string(part, cursor.origin),
                    path=cursor.path + (i,),
                    parent_origin=cursor.origin,
                )
            )
            for i, part in enumerate(parts)
        ]
        failures = _collect(results)
        if failures:
            return DecodeResult.from_failures(failures)
        return DecodeResult.success([r.value for r in results])  # type: ignore[misc]

    return Decoder(_decode, f"Delimited[{decoder.name}]")


def enum_of(enum_type: Type[E]) -> Decoder[E]:
    """Decodifica uma STRING pelo nome canônico do membro ou pelo seu valor textual."""
    table: Dict[str, E] = {}
    for member in enum_type:
        table.setdefault(canonical_name(member.name), member)
        if isinstance(member.value, str):
            table.setdefault(canonical_name(member.value), member)
    expected = ", ".join(canonical_name(m.name) for m in enum_type)

    def _lookup(text: str) -> Union[E, CannotConvert]:
        member = table.get(canonical_name(text))
        if member is None:
            return CannotConvert(to_type=enum_type.__name__, because=f"expected one of [{expected}]")
        return member

    return string.emap(_lookup, enum_type.__name__)
