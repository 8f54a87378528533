# src/atlas_config/core/source/hashing.py
"""
Hashing canônico de configuração do Atlas Config.

O hash representa a **identidade estrutural** da árvore efetiva e é
registrado no LoadContext para rastreabilidade (qual configuração
exatamente uma aplicação carregou).

Política de hashing (v1):
    - Serialização JSON canônica do valor simples (`to_plain`)
    - Ordenação estável de chaves
    - Separadores compactos
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Árvores estruturalmente equivalentes produzem o mesmo hash
    - A origem (arquivo, linha) não participa do hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json

from .node import ConfigNode


def compute_config_hash(node: ConfigNode) -> str:
    """
    Gera um hash determinístico da árvore de configuração.

    Raises:
        TypeError: se o objeto fornecido não for um `ConfigNode`.
    """
    if not isinstance(node, ConfigNode):
        raise TypeError(
            f"Config para hashing deve ser ConfigNode, recebido: {type(node).__name__}"
        )

    canonical_json = json.dumps(
        node.to_plain(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
