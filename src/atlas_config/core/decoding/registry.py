# src/atlas_config/core/decoding/registry.py
"""
Registro explícito de decoders por tipo alvo.

Este módulo define o `DecoderRegistry`, responsável por associar cada tipo
alvo a exatamente um decoder, construído e registrado explicitamente pela
aplicação.

O registry substitui qualquer forma de resolução implícita: o decoder usado
para um tipo é sempre aquele que foi registrado de forma visível, e
adicionar um import não altera qual decoder é escolhido.

Responsabilidades do módulo:
    - Registrar decoders por tipo alvo
    - Derivar e registrar decoders de registros e de tipos soma
    - Rejeitar registros duplicados (exceto com `replace=True`)
    - Preservar a ordem de registro

Invariantes:
    - Cada tipo alvo possui no máximo um decoder
    - Um tipo soma possui exatamente uma política de variantes ativa
    - A lista de tipos reflete exatamente a ordem de registro

Limites explícitos:
    - Não lê fontes de configuração
    - Não resolve tipos por herança ou por anotações
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import primitives
from .decoder import Decoder
from .record import FieldSpec, RecordDecoder, RecordHint, derive_record_decoder
from .sum import SumDecoder, Variant, VariantHint, derive_sum_decoder


class DuplicateDecoderError(ValueError):
    """
    Exceção levantada quando um tipo alvo já possui decoder registrado.

    Decisões arquiteturais:
        - Substituir um decoder exige intenção explícita (`replace=True`)
        - Para tipos soma, garante uma única política de variantes por tipo
    """


class DecoderNotFoundError(KeyError):
    """Exceção levantada quando nenhum decoder foi registrado para o tipo pedido."""


@dataclass
class DecoderRegistry:
    """
    Registro canônico de decoders por tipo alvo.

    Decisões arquiteturais:
        - A resolução é por identidade de tipo (sem subclasses, sem MRO)
        - A ordem de inserção é preservada separadamente
        - Erros de registro são tratados como falhas fatais
    """

    _decoders: Dict[Any, Decoder[Any]] = field(default_factory=dict, init=False, repr=False)
    _order: List[Any] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def with_primitives(cls) -> "DecoderRegistry":
        """Registry pré-populado com str, int, float, bool, date e Path."""
        registry = cls()
        registry.register_decoder(str, primitives.string)
        registry.register_decoder(int, primitives.integer)
        registry.register_decoder(float, primitives.number)
        registry.register_decoder(bool, primitives.boolean)
        registry.register_decoder(dt.date, primitives.date)
        registry.register_decoder(Path, primitives.path)
        return registry

    def register_decoder(self, target: Any, decoder: Decoder[Any], *, replace: bool = False) -> Decoder[Any]:
        if not isinstance(decoder, Decoder):
            raise TypeError(f"decoder for {_type_name(target)} must be a Decoder, got {type(decoder).__name__}")

        if target in self._decoders and not replace:
            raise DuplicateDecoderError(f"Duplicate decoder for type: {_type_name(target)}")

        if target not in self._decoders:
            self._order.append(target)
        self._decoders[target] = decoder
        return decoder

    def derive_record_decoder(
        self,
        target: Callable[..., Any],
        fields: Sequence[FieldSpec],
        hint: RecordHint = RecordHint(),
        *,
        replace: bool = False,
    ) -> RecordDecoder[Any]:
        decoder = derive_record_decoder(target, fields, hint)
        self.register_decoder(target, decoder, replace=replace)
        return decoder

    def derive_sum_decoder(
        self,
        target: Any,
        variants: Sequence[Variant],
        hint: Optional[VariantHint] = None,
        *,
        replace: bool = False,
    ) -> SumDecoder:
        decoder = derive_sum_decoder(_type_name(target), variants, hint)
        self.register_decoder(target, decoder, replace=replace)
        return decoder

    def has(self, target: Any) -> bool:
        return target in self._decoders

    def get(self, target: Any) -> Decoder[Any]:
        if target not in self._decoders:
            raise DecoderNotFoundError(f"No decoder registered for type: {_type_name(target)}")
        return self._decoders[target]

    def targets(self) -> List[Any]:
        return list(self._order)


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))
