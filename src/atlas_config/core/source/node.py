# src/atlas_config/core/source/node.py
"""
Árvore canônica de configuração do Atlas Config.

Este módulo define o `ConfigNode`, a unidade imutável de dados de configuração
produzida pelo Source Tree Builder e consumida pelo Path Resolver e pelos
decoders.

Tipos de nó (NodeKind):
    - STRING  → texto
    - NUMBER  → int ou float (bool nunca é número)
    - BOOLEAN → true/false
    - NULL    → ausência explícita de valor
    - ARRAY   → sequência ordenada de nós
    - OBJECT  → mapa chave → nó (chaves únicas, ordem de inserção preservada)

Princípios fundamentais:
    - O nó é imutável após a construção
    - A origem (arquivo, linha) é metadado de diagnóstico e não participa
      da igualdade estrutural
    - Nenhuma coerção de tipo ocorre neste módulo

Invariantes:
    - ARRAY sempre armazena uma tupla de `ConfigNode`
    - OBJECT sempre armazena um mapa somente-leitura
    - Dois nós com o mesmo conteúdo são iguais, independente da origem

Limites explícitos:
    - Não faz parse de texto
    - Não resolve substituições
    - Não decodifica valores tipados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple


class NodeKind(str, Enum):
    """Forma de um `ConfigNode`. Valores textuais são estáveis e usados em mensagens."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class Origin:
    """
    Localização de um nó na fonte de configuração.

    Campos:
        - source: nome da fonte (caminho do arquivo, `<string>`, `env:VAR`)
        - line: linha 1-based, quando conhecida
    """

    source: str
    line: Optional[int] = None

    def describe(self) -> str:
        if self.line is None:
            return self.source
        return f"{self.source}:{self.line}"


@dataclass(frozen=True)
class ConfigNode:
    """
    Nó imutável da árvore de configuração.

    Decisões arquiteturais:
        - `origin` é excluído da comparação (`compare=False`), de modo que
          uma árvore construída a partir de texto substituído é igual à
          mesma árvore escrita inline
        - Construção via fábricas (`string`, `number`, `obj`, ...) garante
          que ARRAY e OBJECT nunca exponham coleções mutáveis

    Invariantes:
        - `kind` determina o tipo Python de `value`
        - Instâncias nunca são alteradas após criadas
    """

    kind: NodeKind
    value: Any
    origin: Optional[Origin] = field(default=None, compare=False)

    # -----------------------------
    # Fábricas
    # -----------------------------
    @classmethod
    def string(cls, value: str, origin: Optional[Origin] = None) -> "ConfigNode":
        return cls(NodeKind.STRING, value, origin)

    @classmethod
    def number(cls, value: Any, origin: Optional[Origin] = None) -> "ConfigNode":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"NUMBER node requires int or float, got {type(value).__name__}")
        return cls(NodeKind.NUMBER, value, origin)

    @classmethod
    def boolean(cls, value: bool, origin: Optional[Origin] = None) -> "ConfigNode":
        return cls(NodeKind.BOOLEAN, bool(value), origin)

    @classmethod
    def null(cls, origin: Optional[Origin] = None) -> "ConfigNode":
        return cls(NodeKind.NULL, None, origin)

    @classmethod
    def array(cls, items: Iterable["ConfigNode"], origin: Optional[Origin] = None) -> "ConfigNode":
        return cls(NodeKind.ARRAY, tuple(items), origin)

    @classmethod
    def obj(
        cls,
        entries: Iterable[Tuple[str, "ConfigNode"]] | Mapping[str, "ConfigNode"],
        origin: Optional[Origin] = None,
    ) -> "ConfigNode":
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        return cls(NodeKind.OBJECT, MappingProxyType(dict(pairs)), origin)

    @classmethod
    def from_plain(cls, value: Any, origin: Optional[Origin] = None) -> "ConfigNode":
        """Constrói uma árvore a partir de valores Python simples (dict, list, escalares)."""
        if value is None:
            return cls.null(origin)
        if isinstance(value, bool):
            return cls.boolean(value, origin)
        if isinstance(value, (int, float)):
            return cls.number(value, origin)
        if isinstance(value, str):
            return cls.string(value, origin)
        if isinstance(value, Mapping):
            return cls.obj(((str(k), cls.from_plain(v, origin)) for k, v in value.items()), origin)
        if isinstance(value, (list, tuple)):
            return cls.array((cls.from_plain(v, origin) for v in value), origin)
        raise TypeError(f"Unsupported config value type: {type(value).__name__}")

    # -----------------------------
    # Consulta
    # -----------------------------
    @property
    def is_object(self) -> bool:
        return self.kind is NodeKind.OBJECT

    @property
    def is_null(self) -> bool:
        return self.kind is NodeKind.NULL

    def get(self, key: str) -> Optional["ConfigNode"]:
        if self.kind is not NodeKind.OBJECT:
            return None
        return self.value.get(key)

    def keys(self) -> Tuple[str, ...]:
        if self.kind is not NodeKind.OBJECT:
            return ()
        return tuple(self.value.keys())

    def to_plain(self) -> Any:
        """Retorna a representação Python simples (dict/list/escalares) do nó."""
        if self.kind is NodeKind.OBJECT:
            return {k: v.to_plain() for k, v in self.value.items()}
        if self.kind is NodeKind.ARRAY:
            return [v.to_plain() for v in self.value]
        return self.value

    def render(self) -> str:
        """Texto curto do valor, usado em mensagens de falha."""
        if self.kind is NodeKind.STRING:
            return self.value
        if self.kind is NodeKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is NodeKind.NULL:
            return "null"
        if self.kind is NodeKind.NUMBER:
            return str(self.value)
        return self.kind.value
