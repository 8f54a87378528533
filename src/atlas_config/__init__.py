# src/atlas_config/__init__.py
"""
Atlas Config — loader tipado de configuração hierárquica.

Este pacote raiz define o namespace público do Atlas Config, uma biblioteca
para carregar configuração em camadas (YAML + variáveis de ambiente) e
decodificá-la em valores Python tipados através de decoders explícitos.

Princípios centrais:
    - A árvore de configuração é imutável após a construção
    - Todo decoder é construído e registrado de forma visível
    - Falhas de decodificação são acumuladas e carregam caminho e origem
    - Falhas de fonte (parse, arquivo ausente) são fatais

Arquitetura em alto nível:
    - core.source   → leitura, substituição, parse, merge e hashing de fontes
    - core.cursor   → navegação por caminho com diagnóstico
    - core.decoding → decoders, registros, tipos soma e registry
    - api           → entry points `load`, `load_or_raise`, `load_text`, `load_files`
"""

from .api import load, load_files, load_or_raise, load_text
from .core.cursor import ConfigCursor
from .core.decoding import (
    BareStringHint,
    Decoder,
    DecoderRegistry,
    FieldHint,
    FieldSpec,
    RecordHint,
    Variant,
    VariantHint,
    derive_record_decoder,
    derive_sum_decoder,
    nullary,
    variant,
)
from .core.errors import DecodeFailure, FailureReason
from .core.exceptions import ConfigReaderError
from .core.load_context import LoadContext
from .core.source import ConfigError, ConfigNode, NodeKind, Origin, ParseError, load_source, parse_source
from .core.types import CannotConvert, DecodeResult

__all__ = [
    "BareStringHint",
    "CannotConvert",
    "ConfigCursor",
    "ConfigError",
    "ConfigNode",
    "ConfigReaderError",
    "DecodeFailure",
    "DecodeResult",
    "Decoder",
    "DecoderRegistry",
    "FailureReason",
    "FieldHint",
    "FieldSpec",
    "LoadContext",
    "NodeKind",
    "Origin",
    "ParseError",
    "RecordHint",
    "Variant",
    "VariantHint",
    "derive_record_decoder",
    "derive_sum_decoder",
    "load",
    "load_files",
    "load_or_raise",
    "load_source",
    "load_text",
    "nullary",
    "parse_source",
    "variant",
]
