# src/atlas_config/core/cursor.py
"""
Path Resolver do Atlas Config.

Este módulo define o `ConfigCursor`, uma visão somente-leitura de um nó da
árvore de configuração junto do caminho completo desde a raiz.

Todo acesso estrutural feito por decoders passa por um cursor, garantindo
que qualquer falha carregue exatamente o caminho e a origem que devem ser
reportados ao operador.

Operações:
    - at_key / at_index / at_path → navegação
    - as_object / as_array / as_string / as_number / as_boolean → inspeção de forma

Decisões arquiteturais:
    - Operações retornam `DecodeResult` e nunca levantam exceções
    - Uma chave opcional ausente gera um cursor *ausente* (node=None),
      e não uma falha; a falha só surge se alguém tentar ler o valor
    - Cursores ausentes herdam a origem do pai para diagnóstico

Invariantes:
    - O cursor nunca muta o nó subjacente
    - `path` é exatamente a sequência de chaves/índices a ser reportada
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Union

from .errors import Path, PathElement, missing_key, render_path, type_mismatch
from .source.node import ConfigNode, NodeKind, Origin
from .types import DecodeResult


@dataclass(frozen=True)
class ConfigCursor:
    """
    Visão de um nó da árvore com caminho e origem.

    Campos:
        - node: nó apontado, ou None quando a chave está ausente
        - path: chaves/índices desde a raiz
        - parent_origin: origem usada quando o cursor está ausente
    """

    node: Optional[ConfigNode]
    path: Path = ()
    parent_origin: Optional[Origin] = None

    @classmethod
    def root(cls, node: ConfigNode) -> "ConfigCursor":
        return cls(node=node)

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def is_absent(self) -> bool:
        return self.node is None

    @property
    def is_null(self) -> bool:
        """Verdadeiro para chaves ausentes e para valores `null` explícitos."""
        return self.node is None or self.node.is_null

    @property
    def origin(self) -> Optional[Origin]:
        if self.node is not None and self.node.origin is not None:
            return self.node.origin
        return self.parent_origin

    @property
    def dotted_path(self) -> str:
        return render_path(self.path)

    def _child(self, element: PathElement, node: Optional[ConfigNode]) -> "ConfigCursor":
        return ConfigCursor(node=node, path=self.path + (element,), parent_origin=self.origin)

    def _missing(self) -> DecodeResult:
        return DecodeResult.failure(missing_key(path=self.path, origin=self.origin))

    def _expect(self, kind: NodeKind) -> Optional[DecodeResult]:
        if self.node is None:
            return self._missing()
        if self.node.kind is not kind:
            return DecodeResult.failure(
                type_mismatch(path=self.path, expected=[kind], found=self.node.kind, origin=self.origin)
            )
        return None

    # -----------------------------
    # Navegação
    # -----------------------------
    def at_key(self, key: str, *, optional: bool = False) -> DecodeResult["ConfigCursor"]:
        """
        Navega para `key`.

        Falha com MISSING_KEY se o nó não for um objeto ou não possuir a chave,
        exceto quando `optional=True`: nesse caso retorna um cursor ausente.
        """
        if self.node is None:
            if optional:
                return DecodeResult.success(self._child(key, None))
            return self._missing()

        if self.node.kind is not NodeKind.OBJECT:
            failure = missing_key(path=self.path + (key,), origin=self.origin)
            hint = f" The value at '{self.dotted_path}' is {self.node.kind.value}, not an object."
            return DecodeResult.failure(
                replace(
                    failure,
                    message=failure.message + hint,
                    details={**failure.details, "found": self.node.kind.value},
                )
            )

        child = self.node.get(key)
        if child is None:
            if optional:
                return DecodeResult.success(self._child(key, None))
            return DecodeResult.failure(missing_key(path=self.path + (key,), origin=self.origin))
        return DecodeResult.success(self._child(key, child))

    def at_index(self, index: int) -> DecodeResult["ConfigCursor"]:
        mismatch = self._expect(NodeKind.ARRAY)
        if mismatch is not None:
            return mismatch
        items = self.node.value  # type: ignore[union-attr]
        if not -len(items) <= index < len(items):
            return DecodeResult.failure(missing_key(path=self.path + (index,), origin=self.origin))
        return DecodeResult.success(self._child(index % len(items), items[index]))

    def at_path(self, path: Union[str, Sequence[PathElement], None]) -> DecodeResult["ConfigCursor"]:
        """Navega por um caminho pontuado (`app.server.port`) ou por uma sequência de chaves/índices."""
        if path is None or path == "":
            return DecodeResult.success(self)
        elements: Sequence[PathElement] = path.split(".") if isinstance(path, str) else path

        result: DecodeResult[ConfigCursor] = DecodeResult.success(self)
        for element in elements:
            result = result.and_then(lambda c, e=element: c._step(e))
        return result

    def _step(self, element: PathElement) -> DecodeResult["ConfigCursor"]:
        # segmentos numéricos de um caminho pontuado indexam arrays
        if isinstance(element, str) and element.isdigit() and self.node is not None and self.node.kind is NodeKind.ARRAY:
            element = int(element)
        if isinstance(element, int):
            return self.at_index(element)
        return self.at_key(element)

    # -----------------------------
    # Inspeção de forma
    # -----------------------------
    def keys(self) -> List[str]:
        return list(self.node.keys()) if self.node is not None else []

    def as_object(self) -> DecodeResult[Dict[str, "ConfigCursor"]]:
        mismatch = self._expect(NodeKind.OBJECT)
        if mismatch is not None:
            return mismatch
        return DecodeResult.success(
            {k: self._child(k, v) for k, v in self.node.value.items()}  # type: ignore[union-attr]
        )

    def as_array(self) -> DecodeResult[List["ConfigCursor"]]:
        mismatch = self._expect(NodeKind.ARRAY)
        if mismatch is not None:
            return mismatch
        return DecodeResult.success(
            [self._child(i, v) for i, v in enumerate(self.node.value)]  # type: ignore[union-attr]
        )

    def as_string(self) -> DecodeResult[str]:
        return self._expect(NodeKind.STRING) or DecodeResult.success(self.node.value)  # type: ignore[union-attr]

    def as_number(self) -> DecodeResult[Union[int, float]]:
        return self._expect(NodeKind.NUMBER) or DecodeResult.success(self.node.value)  # type: ignore[union-attr]

    def as_boolean(self) -> DecodeResult[bool]:
        return self._expect(NodeKind.BOOLEAN) or DecodeResult.success(self.node.value)  # type: ignore[union-attr]
