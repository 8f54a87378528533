# src/atlas_config/core/source/parser.py
"""
Parser canônico de texto de configuração.

Este módulo transforma texto YAML (JSON é aceito como YAML) em uma árvore
de `ConfigNode`, preservando a linha de origem de cada nó para diagnóstico.

Etapas:
    1. Substituição textual de `${VAR}` (ver `substitution.py`)
    2. Composição YAML (PyYAML `compose`) — sem construir objetos Python
    3. Conversão dos nós YAML em `ConfigNode` imutáveis

Decisões arquiteturais:
    - Chaves de mapa são sempre o texto bruto da chave (`yes:` continua "yes")
    - Apenas int, float, bool e null viram escalares tipados; timestamps e
      tags desconhecidas permanecem STRING com o texto original, e a
      conversão fica a cargo dos decoders
    - Chaves duplicadas são erro de parse (não há "última vence" silencioso)
    - Merge keys (`<<`) são suportadas, com precedência para as chaves locais
    - Texto vazio é interpretado como objeto vazio
    - Linhas de origem referem-se ao texto original, antes da substituição
    - Aliases recursivos (`a: &x [*x]`) são erro de parse

Limites explícitos:
    - Não lê arquivos (ver `loader.py`)
    - Não aplica merge entre fontes
    - Não decodifica valores tipados
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Set, Tuple

import yaml  # PyYAML

from ..load_context import LoadContext
from .errors import ParseError
from .node import ConfigNode, Origin
from .substitution import map_line, substitute


_TAG_PREFIX = "tag:yaml.org,2002:"
_TYPED_SCALARS = {f"{_TAG_PREFIX}{t}" for t in ("int", "float", "bool", "null")}
_MERGE_TAG = f"{_TAG_PREFIX}merge"


class _TreeBuilder:
    """
    Converte nós YAML compostos em `ConfigNode`.

    Linhas das marcas YAML referem-se ao texto já substituído; `line_map`
    as devolve para o texto original.
    """

    def __init__(self, loader: yaml.SafeLoader, source: str, line_map: Tuple[int, ...] = ()):
        self.loader = loader
        self.source = source
        self.line_map = line_map
        self._open: Set[int] = set()

    def line(self, mark: yaml.Mark) -> int:
        return map_line(self.line_map, mark.line + 1)

    def error(self, message: str, node: yaml.Node) -> ParseError:
        return ParseError(message, source=self.source, line=self.line(node.start_mark))

    def build(self, node: yaml.Node) -> ConfigNode:
        origin = Origin(source=self.source, line=self.line(node.start_mark))

        if isinstance(node, (yaml.MappingNode, yaml.SequenceNode)):
            # um alias pode apontar para um ancestral ainda em construção
            if id(node) in self._open:
                raise self.error("recursive alias", node)
            self._open.add(id(node))
            try:
                if isinstance(node, yaml.MappingNode):
                    return ConfigNode.obj(self.entries(node), origin)
                return ConfigNode.array((self.build(item) for item in node.value), origin)
            finally:
                self._open.discard(id(node))

        if node.tag in _TYPED_SCALARS:
            return ConfigNode.from_plain(self.loader.construct_object(node), origin)

        return ConfigNode.string(node.value, origin)

    def entries(self, node: yaml.MappingNode) -> Dict[str, ConfigNode]:
        merged: Dict[str, ConfigNode] = {}
        own: Dict[str, ConfigNode] = {}

        for key_node, value_node in node.value:
            if key_node.tag == _MERGE_TAG:
                parents = value_node.value if isinstance(value_node, yaml.SequenceNode) else [value_node]
                for parent in parents:
                    if not isinstance(parent, yaml.MappingNode):
                        raise self.error("merge key '<<' requires a mapping or a list of mappings", parent)
                    if id(parent) in self._open:
                        raise self.error("recursive alias", parent)
                    self._open.add(id(parent))
                    try:
                        inherited = self.entries(parent)
                    finally:
                        self._open.discard(id(parent))
                    for k, v in inherited.items():
                        merged.setdefault(k, v)
                continue

            if not isinstance(key_node, yaml.ScalarNode):
                raise self.error("mapping keys must be scalars", key_node)

            key = key_node.value
            if key in own:
                raise self.error(f"duplicate key '{key}'", key_node)
            own[key] = self.build(value_node)

        # chaves locais têm precedência sobre as herdadas via merge
        result = {k: v for k, v in merged.items() if k not in own}
        result.update(own)
        return result


def compose_text(
    text: str,
    *,
    source_name: str = "<string>",
    line_map: Tuple[int, ...] = (),
) -> ConfigNode:
    """
    Compõe texto YAML já substituído em uma árvore de `ConfigNode`.

    `line_map` (ver `SubstitutionReport.line_map`) traduz linhas do texto
    substituído para linhas do texto original; vazio significa identidade.

    Raises:
        ParseError: texto malformado ou alias recursivo.
    """
    loader = yaml.SafeLoader(text)
    try:
        try:
            root = loader.get_single_node()
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark or e.context_mark
            raise ParseError(
                e.problem or str(e),
                source=source_name,
                line=map_line(line_map, mark.line + 1) if mark is not None else None,
            ) from e
        except yaml.YAMLError as e:
            raise ParseError(str(e), source=source_name) from e

        if root is None:
            return ConfigNode.obj({}, Origin(source_name, 1))
        return _TreeBuilder(loader, source_name, line_map).build(root)
    finally:
        loader.dispose()


def parse_source(
    text: str,
    *,
    source_name: str = "<string>",
    env: Optional[Mapping[str, str]] = None,
    context: Optional[LoadContext] = None,
) -> ConfigNode:
    """
    Constrói a árvore de configuração a partir de texto.

    A substituição de variáveis é textual e ocorre antes do parse: um valor
    de ambiente que seja ele próprio um literal de objeto é parseado como
    OBJECT.

    Args:
        text: texto YAML/JSON com placeholders opcionais.
        source_name: nome da fonte para origens e mensagens.
        env: variáveis disponíveis; `os.environ` quando omitido.
        context: LoadContext opcional para registro de eventos.

    Returns:
        ConfigNode raiz (objeto vazio para texto vazio).

    Raises:
        ParseError: se o texto for malformado.
        UnresolvedSubstitutionError: se `${VAR}` obrigatório não tiver valor.
    """
    report = substitute(text, os.environ if env is None else env, source=source_name)

    if context is not None:
        if report.resolved:
            context.log(
                stage="source.substituted",
                level="DEBUG",
                message=f"{len(report.resolved)} placeholder(s) resolved in {source_name}",
                variables=list(report.resolved),
            )
        for name in report.missing_optional:
            context.add_warning(
                stage="source.substituted",
                message=f"optional variable ${{?{name}}} is not set in {source_name}",
            )

    root = compose_text(report.text, source_name=source_name, line_map=report.line_map)

    if context is not None:
        context.log(stage="source.parsed", level="DEBUG", message=f"parsed {source_name}", kind=root.kind.value)
    return root
