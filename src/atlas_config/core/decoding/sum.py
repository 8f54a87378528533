# src/atlas_config/core/decoding/sum.py
"""
Decodificação de tipos soma (uniões etiquetadas).

Um tipo soma é descrito por uma tabela explícita de variantes, indexada pelo
nome canônico de cada variante e construída no momento do registro.

Etapas:
    1. Resolver o discriminante segundo a política (`VariantHint`)
    2. Selecionar a variante na tabela
    3. Decodificar os campos específicos da variante

Políticas (uma por tipo soma):
    - BareStringHint → o nó inteiro é uma STRING com o nome da variante;
      apenas variantes sem campos são alcançáveis
    - FieldHint      → o nó é um OBJECT; o campo `type` (configurável) contém
      o nome da variante, e os demais campos formam o payload (o decoder da
      variante recebe o objeto sem o discriminante, qualquer que seja seu tipo)

Distinção de falhas (obrigatória):
    - forma do nó incompatível com a política → TYPE_MISMATCH
    - discriminante desconhecido → CANNOT_CONVERT
    Um OBJECT sob BareStringHint é sempre TYPE_MISMATCH, com mensagem que
    indica a política ativa, e nunca uma falha genérica.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from ..cursor import ConfigCursor
from ..errors import cannot_convert, missing_key, type_mismatch
from ..source.node import ConfigNode, NodeKind
from ..types import DecodeResult
from .decoder import Decoder
from .naming import canonical_name


class DuplicateVariantError(ValueError):
    """Duas variantes do mesmo tipo soma possuem o mesmo nome canônico."""


@dataclass(frozen=True)
class Variant:
    """
    Entrada da tabela de variantes.

    Campos:
        - name: nome da variante (ex.: `DeltaMode`)
        - decoder: decoder do payload; None para variantes sem campos
        - value: valor retornado por variantes sem campos
    """

    name: str
    decoder: Optional[Decoder[Any]] = None
    value: Any = None

    @property
    def is_nullary(self) -> bool:
        return self.decoder is None


def nullary(name: str, value: Any) -> Variant:
    """Variante sem campos, representada por um valor fixo."""
    return Variant(name=name, value=value)


def variant(name: str, decoder: Decoder[Any]) -> Variant:
    """Variante com payload decodificado por `decoder` (tipicamente um RecordDecoder)."""
    return Variant(name=name, decoder=decoder)


@dataclass(frozen=True)
class VariantTable:
    """Tabela nome canônico → variante, validada na construção."""

    type_name: str
    variants: Dict[str, Variant]
    naming: Callable[[str], str]

    def lookup(self, discriminant: str) -> Optional[Variant]:
        return self.variants.get(self.naming(discriminant))

    def names(self) -> str:
        return ", ".join(self.variants)


class VariantHint(ABC):
    """Política de resolução do discriminante de um tipo soma."""

    naming: Callable[[str], str]

    def table(self, type_name: str, variants: Sequence[Variant]) -> VariantTable:
        entries: Dict[str, Variant] = {}
        for v in variants:
            key = self.naming(v.name)
            if key in entries:
                raise DuplicateVariantError(
                    f"{type_name}: variants '{entries[key].name}' and '{v.name}' share the name '{key}'"
                )
            entries[key] = v
        return VariantTable(type_name=type_name, variants=entries, naming=self.naming)

    @abstractmethod
    def decode(self, cursor: ConfigCursor, table: VariantTable) -> DecodeResult[Any]:
        raise NotImplementedError

    def _unknown(self, cursor: ConfigCursor, value: str, table: VariantTable) -> DecodeResult[Any]:
        return DecodeResult.failure(
            cannot_convert(
                path=cursor.path,
                value=value,
                to_type=table.type_name,
                because=f"unknown variant, expected one of [{table.names()}]",
                origin=cursor.origin,
            )
        )


@dataclass(frozen=True)
class BareStringHint(VariantHint):
    """A variante é dada por uma STRING solta (ex.: `audit-mode: fullmode`)."""

    naming: Callable[[str], str] = canonical_name

    def decode(self, cursor: ConfigCursor, table: VariantTable) -> DecodeResult[Any]:
        if cursor.node is not None and cursor.node.kind is not NodeKind.STRING:
            return DecodeResult.failure(
                type_mismatch(
                    path=cursor.path,
                    expected=[NodeKind.STRING],
                    found=cursor.node.kind,
                    origin=cursor.origin,
                    hint=(
                        f"{table.type_name} is read as a bare string naming one of "
                        f"[{table.names()}]; variants with fields need a field discriminant."
                    ),
                )
            )

        text = cursor.as_string()
        if not text.ok:
            return text

        chosen = table.lookup(text.value)  # type: ignore[arg-type]
        if chosen is None:
            return self._unknown(cursor, text.value, table)  # type: ignore[arg-type]
        if not chosen.is_nullary:
            return DecodeResult.failure(
                cannot_convert(
                    path=cursor.path,
                    value=text.value,  # type: ignore[arg-type]
                    to_type=table.type_name,
                    because=f"variant '{chosen.name}' has fields and cannot be written as a bare string",
                    origin=cursor.origin,
                )
            )
        return DecodeResult.success(chosen.value)


@dataclass(frozen=True)
class FieldHint(VariantHint):
    """A variante é dada por um campo discriminante dentro de um OBJECT (padrão `type`)."""

    field: str = "type"
    naming: Callable[[str], str] = canonical_name

    def decode(self, cursor: ConfigCursor, table: VariantTable) -> DecodeResult[Any]:
        if cursor.node is not None and cursor.node.kind is not NodeKind.OBJECT:
            return DecodeResult.failure(
                type_mismatch(
                    path=cursor.path,
                    expected=[NodeKind.OBJECT],
                    found=cursor.node.kind,
                    origin=cursor.origin,
                    hint=f"{table.type_name} is read as an object with a '{self.field}' field.",
                )
            )
        if cursor.node is None:
            return DecodeResult.failure(missing_key(path=cursor.path, origin=cursor.origin))

        tag_cursor = cursor.at_key(self.field)
        if not tag_cursor.ok:
            return tag_cursor
        tag = tag_cursor.value.as_string()  # type: ignore[union-attr]
        if not tag.ok:
            return tag

        chosen = table.lookup(tag.value)  # type: ignore[arg-type]
        if chosen is None:
            return self._unknown(tag_cursor.value, tag.value, table)  # type: ignore[arg-type]
        if chosen.is_nullary:
            return DecodeResult.success(chosen.value)
        return chosen.decoder.decode(self.payload(cursor))  # type: ignore[union-attr]

    def payload(self, cursor: ConfigCursor) -> ConfigCursor:
        """Cursor sobre o mesmo objeto sem o campo discriminante, no mesmo caminho."""
        node = cursor.node
        entries = ((k, v) for k, v in node.value.items() if k != self.field)  # type: ignore[union-attr]
        return ConfigCursor(
            node=ConfigNode.obj(entries, node.origin),  # type: ignore[union-attr]
            path=cursor.path,
            parent_origin=cursor.parent_origin,
        )


class SumDecoder(Decoder[Any]):
    """Decoder de tipo soma: uma tabela de variantes e exatamente uma política."""

    def __init__(self, type_name: str, variants: Sequence[Variant], hint: VariantHint):
        self.hint = hint
        self.table = hint.table(type_name, variants)
        super().__init__(lambda c: self.hint.decode(c, self.table), type_name)


def derive_sum_decoder(
    type_name: str,
    variants: Sequence[Variant],
    hint: Optional[VariantHint] = None,
) -> SumDecoder:
    """Constrói o decoder de um tipo soma. Sem `hint`, usa `FieldHint()` (campo `type`)."""
    return SumDecoder(type_name, variants, hint if hint is not None else FieldHint())
