# src/atlas_config/core/source/merge.py
"""
Utilitário canônico de deep-merge de árvores de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
Atlas Config para resolver a árvore final a partir de uma fonte base
(defaults) e overrides explícitos (arquivo local).

Política de merge (v1):
    - OBJECT + OBJECT → merge recursivo por chave
    - ARRAY           → sobrescrita total (sem merge elemento a elemento)
    - escalar         → sobrescrita direta
    - NULL            → substituível em qualquer lado
    - conflito de formas → erro estrutural explícito

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado (nós são imutáveis)
    - Não existem heurísticas implícitas

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não realiza coerção de tipos
"""

from typing import Dict, Tuple

from .errors import ConfigTypeConflictError
from .node import ConfigNode


def _dotted(path: Tuple[str, ...]) -> str:
    return ".".join(path) if path else "<root>"


def deep_merge(base: ConfigNode, override: ConfigNode, _path: Tuple[str, ...] = ()) -> ConfigNode:
    """
    Realiza um deep-merge determinístico entre duas árvores de configuração.

    A ordem das chaves da base é preservada; chaves novas do override são
    acrescentadas ao final. A origem de cada nó resultante é a do nó que
    prevaleceu, de modo que mensagens de erro apontem para o arquivo correto.

    Args:
        base: árvore base (ex.: defaults).
        override: árvore com overrides explícitos.

    Returns:
        ConfigNode: nova árvore resultante.

    Raises:
        ConfigTypeConflictError: se uma mesma chave possuir formas incompatíveis.
    """
    if not base.is_object or not override.is_object:
        raise ConfigTypeConflictError(
            f"Deep-merge requer objetos no nível raiz, recebido: "
            f"{base.kind.value} vs {override.kind.value}"
        )

    result: Dict[str, ConfigNode] = dict(base.value)

    for key, override_value in override.value.items():
        if key not in result:
            result[key] = override_value
            continue

        base_value = result[key]
        path = _path + (key,)

        # objeto -> merge recursivo
        if base_value.is_object and override_value.is_object:
            result[key] = deep_merge(base_value, override_value, path)
            continue

        # null -> sobrescrita livre
        if base_value.is_null or override_value.is_null:
            result[key] = override_value
            continue

        # conflito de forma (inclui objeto vs escalar e array vs escalar)
        if base_value.kind is not override_value.kind:
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{_dotted(path)}': "
                f"{base_value.kind.value} vs {override_value.kind.value}"
            )

        # array ou escalar -> sobrescrita
        result[key] = override_value

    return ConfigNode.obj(result, base.origin)
