# src/atlas_config/core/source/loader.py
"""
Loader canônico de fontes de configuração do Atlas Config.

Este módulo é responsável por ler arquivos de configuração do disco,
validar estruturalmente cada camada e resolver a árvore efetiva.

A árvore é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)
    - variáveis de ambiente, via substituição `${VAR}` em ambos

Responsabilidades do módulo:
    - Carregar arquivos YAML ou JSON
    - Validar requisitos estruturais mínimos (raiz objeto)
    - Resolver a árvore final via deep-merge determinístico
    - Registrar hash e eventos no LoadContext

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um `ConfigNode` do tipo OBJECT
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não decodifica valores tipados
    - Não mantém cache (o chamador decide reutilizar a árvore)
"""

from pathlib import Path
from typing import Mapping, Optional

from ..load_context import LoadContext
from .errors import (
    InvalidConfigRootTypeError,
    SourceNotFoundError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge
from .node import ConfigNode
from .parser import parse_source


SUPPORTED_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


def _load_file(
    path: Path,
    *,
    env: Optional[Mapping[str, str]],
    context: Optional[LoadContext],
) -> ConfigNode:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - JSON é lido pelo mesmo parser YAML para preservar linhas de origem
        - Arquivos vazios são interpretados como objetos vazios
        - Formatos não suportados geram erro explícito

    Raises:
        SourceNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um objeto.
        ParseError: Se o conteúdo for malformado.
    """
    if not path.exists():
        raise SourceNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    text = path.read_text(encoding="utf-8")
    root = parse_source(text, source_name=str(path), env=env, context=context)

    if not root.is_object:
        raise InvalidConfigRootTypeError(
            f"Config root deve ser objeto, recebido: {root.kind.value} ({path})"
        )

    return root


def load_source(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    context: Optional[LoadContext] = None,
) -> ConfigNode:
    """
    Carrega e resolve a árvore de configuração efetiva.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; quando ausente no disco é ignorado
        - Quando presente, o local sempre tem prioridade sobre defaults
        - A resolução utiliza `deep_merge` com política determinística

    Args:
        defaults_path: Caminho para o arquivo de configuração base.
        local_path: Caminho opcional para overrides locais.
        env: variáveis para substituição; `os.environ` quando omitido.
        context: LoadContext opcional para eventos e hash.

    Returns:
        ConfigNode: árvore final resolvida.

    Raises:
        SourceNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um objeto.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        ParseError: Se algum arquivo for malformado.
    """
    effective = _load_file(Path(defaults_path), env=env, context=context)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            local = _load_file(local_file, env=env, context=context)
            effective = deep_merge(effective, local)
            if context is not None:
                context.log(
                    stage="source.merged",
                    level="DEBUG",
                    message=f"merged {local_file} over {defaults_path}",
                )
        elif context is not None:
            context.log(
                stage="source.merged",
                level="DEBUG",
                message=f"local override {local_file} not found; using defaults only",
            )

    if context is not None:
        context.config_hash = compute_config_hash(effective)
        context.log(stage="source.hashed", level="DEBUG", message="config hash computed", config_hash=context.config_hash)

    return effective
