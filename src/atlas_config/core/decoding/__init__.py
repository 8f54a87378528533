# src/atlas_config/core/decoding/__init__.py
"""
# Decoding Core — Atlas Config

Este pacote define os **decoders canônicos** que convertem cursores da
árvore de configuração em valores tipados.

## Componentes

- **decoder**: `Decoder` com `map`, `emap` e `or_else`
- **primitives**: escalares (`string`, `integer`, `number`, `boolean`, `date`,
  `path`) e combinadores (`optional`, `list_of`, `dict_of`, `delimited`, `enum_of`)
- **record**: `FieldSpec`, `RecordHint`, `derive_record_decoder`
- **sum**: `Variant`, `BareStringHint`, `FieldHint`, `derive_sum_decoder`
- **registry**: `DecoderRegistry`, registro explícito por tipo alvo

## Princípios Fundamentais

- Todo decoder é construído e passado explicitamente
- Decoders são puros: não levantam, não mutam, não registram eventos
- Falhas de campos independentes são acumuladas
"""

from .decoder import Decoder
from .naming import canonical_name, kebab_case
from .primitives import (
    boolean,
    date,
    delimited,
    dict_of,
    enum_of,
    integer,
    list_of,
    number,
    optional,
    path,
    string,
)
from .record import MISSING, FieldSpec, RecordDecoder, RecordHint, derive_record_decoder
from .registry import DecoderNotFoundError, DecoderRegistry, DuplicateDecoderError
from .sum import (
    BareStringHint,
    DuplicateVariantError,
    FieldHint,
    SumDecoder,
    Variant,
    VariantHint,
    derive_sum_decoder,
    nullary,
    variant,
)

__all__ = [
    "BareStringHint",
    "Decoder",
    "DecoderNotFoundError",
    "DecoderRegistry",
    "DuplicateDecoderError",
    "DuplicateVariantError",
    "FieldHint",
    "FieldSpec",
    "MISSING",
    "RecordDecoder",
    "RecordHint",
    "SumDecoder",
    "Variant",
    "VariantHint",
    "boolean",
    "canonical_name",
    "date",
    "delimited",
    "derive_record_decoder",
    "derive_sum_decoder",
    "dict_of",
    "enum_of",
    "integer",
    "kebab_case",
    "list_of",
    "nullary",
    "number",
    "optional",
    "path",
    "string",
    "variant",
]
