# src/atlas_config/core/source/__init__.py
"""
Source Tree Builder do Atlas Config.

Este pacote contém as estruturas e utilitários responsáveis por ler,
substituir, parsear, mesclar e identificar fontes de configuração,
produzindo uma árvore imutável de `ConfigNode`.

Responsabilidades do pacote:
    - Substituição textual de variáveis de ambiente (`${VAR}`, `${?VAR}`)
    - Parse de YAML/JSON com linhas de origem
    - Resolução de defaults + overrides locais via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade

Invariantes:
    - A árvore final é imutável
    - Erros de fonte são fatais e nunca acumulados
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    ParseError,
    SourceNotFoundError,
    UnresolvedSubstitutionError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_source
from .merge import deep_merge
from .node import ConfigNode, NodeKind, Origin
from .parser import parse_source
from .substitution import substitute

__all__ = [
    "ConfigError",
    "ConfigNode",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "NodeKind",
    "Origin",
    "ParseError",
    "SourceNotFoundError",
    "UnresolvedSubstitutionError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_source",
    "parse_source",
    "substitute",
]
