# src/atlas_config/core/source/substitution.py
"""
Substituição textual de variáveis de ambiente.

Placeholders são substituídos pelo valor bruto da variável **antes** do parse
estrutural. Desta forma, um valor que contém um literal de objeto
(ex.: `{type: deltamode, start-date: "2020-04-25"}`) é lido como OBJECT, e
não como uma string opaca.

Sintaxe suportada:
    - ${VAR}   → obrigatório; ausência levanta `UnresolvedSubstitutionError`
    - ${?VAR}  → opcional; ausência resulta em texto vazio (null em YAML)
    - $$       → `$` literal (ex.: `$${VAR}` produz `${VAR}`)

Comentários (`# ...`), de linha inteira ou ao final de uma linha, são
preservados sem substituição. Um `#` dentro de aspas ou colado a um texto
(`a#b`) não inicia comentário.

Invariantes:
    - `SubstitutionReport.line_map` associa cada linha do texto resultante à
      linha do texto original, mesmo quando um valor contém quebras de linha
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Tuple

from .errors import UnresolvedSubstitutionError


_PLACEHOLDER = re.compile(r"\$\$|\$\{(\?)?([A-Za-z_][A-Za-z0-9_]*)\}")
_QUOTE_OPENERS = " \t:[{,"


@dataclass(frozen=True)
class SubstitutionReport:
    """Resumo das substituições aplicadas a uma fonte."""

    text: str
    resolved: Tuple[str, ...] = ()
    missing_optional: Tuple[str, ...] = field(default=())
    line_map: Tuple[int, ...] = field(default=())

    def source_line(self, line: int) -> int:
        """Linha (1-based) do texto original que gerou a linha `line` do texto resultante."""
        return map_line(self.line_map, line)


def map_line(line_map: Tuple[int, ...], line: int) -> int:
    if not line_map:
        return line
    if 0 < line <= len(line_map):
        return line_map[line - 1]
    # marcas de fim de texto caem além da última linha
    return line_map[-1] + (line - len(line_map))


def _comment_start(line: str) -> int:
    """
    Posição do `#` que inicia um comentário na linha, ou -1.

    Um `#` só inicia comentário no começo da linha ou após espaço, e fora
    de aspas. Aspas só abrem um escalar no início de um token.
    """
    quote = ""
    escaped = False
    prev = ""
    for i, ch in enumerate(line):
        if escaped:
            escaped = False
        elif quote == '"':
            if ch == "\\":
                escaped = True
            elif ch == '"':
                quote = ""
        elif quote == "'":
            if ch == "'" and line[i + 1 : i + 2] == "'":
                escaped = True
            elif ch == "'":
                quote = ""
        elif ch in "\"'" and (not prev or prev in _QUOTE_OPENERS):
            quote = ch
        elif ch == "#" and (not prev or prev in " \t"):
            return i
        prev = ch
    return -1


def substitute(text: str, env: Mapping[str, str], *, source: str = "<string>") -> SubstitutionReport:
    """
    Substitui placeholders `${VAR}` no texto pela string bruta de `env[VAR]`.

    Args:
        text: texto de configuração original.
        env: mapa de variáveis disponíveis (tipicamente `os.environ`).
        source: nome da fonte, usado em mensagens de erro.

    Returns:
        SubstitutionReport com o texto resultante, as variáveis usadas e o
        mapa de linhas resultantes para linhas originais.

    Raises:
        UnresolvedSubstitutionError: se um placeholder obrigatório não tiver valor.
    """
    resolved: List[str] = []
    missing_optional: List[str] = []
    out_lines: List[str] = []
    line_map: List[int] = []

    for lineno, line in enumerate(text.splitlines(keepends=True), start=1):
        cut = _comment_start(line)
        if cut == -1:
            head, tail = line, ""
        else:
            head, tail = line[:cut], line[cut:]

        def _replace(match: "re.Match[str]") -> str:
            if match.group(0) == "$$":
                return "$"
            optional, name = match.group(1), match.group(2)
            if name in env:
                resolved.append(name)
                return env[name]
            if optional:
                missing_optional.append(name)
                return ""
            raise UnresolvedSubstitutionError(name, source=source, line=lineno)

        rendered = _PLACEHOLDER.sub(_replace, head) + tail
        out_lines.append(rendered)
        line_map.extend([lineno] * max(1, len(rendered.splitlines())))

    return SubstitutionReport(
        text="".join(out_lines),
        resolved=tuple(resolved),
        missing_optional=tuple(missing_optional),
        line_map=tuple(line_map),
    )
