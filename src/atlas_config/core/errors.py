"""
Atlas Config — Canonical Decode Failures (v1)

Este módulo define o padrão canônico de falhas de decodificação do Atlas Config.
Falhas são valores (não exceções) e fazem parte do contrato de todo decoder,
devendo ser:

- explícitas
- acumuláveis
- rastreáveis (caminho completo + origem)
- acionáveis

Falhas de campos independentes de um registro são acumuladas, nunca
interrompidas na primeira ocorrência.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

from .source.node import NodeKind, Origin


PathElement = Union[str, int]
Path = Tuple[PathElement, ...]


class FailureReason(str, Enum):
    """Catálogo canônico de motivos de falha (v1)."""

    MISSING_KEY = "missing_key"
    TYPE_MISMATCH = "type_mismatch"
    CANNOT_CONVERT = "cannot_convert"
    UNKNOWN_KEY = "unknown_key"


def render_path(path: Iterable[PathElement]) -> str:
    """Renderiza um caminho como `app1.audit-mode.start-date` ou `servers[0].port`."""
    out = ""
    for element in path:
        if isinstance(element, int):
            out += f"[{element}]"
        else:
            out += f".{element}" if out else element
    return out or "<root>"


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DecodeFailure:
    """
    Falha canônica de decodificação.

    Campos:
    - reason: código estável da falha (não é texto livre)
    - path: sequência de chaves/índices desde a raiz
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - origin: localização na fonte, quando conhecida
    """

    reason: FailureReason
    path: Path
    message: str
    details: Dict[str, Any] = field(default_factory=dict, compare=False)
    origin: Optional[Origin] = field(default=None, compare=False)

    @property
    def dotted_path(self) -> str:
        return render_path(self.path)

    def describe(self) -> str:
        where = f" ({self.origin.describe()})" if self.origin is not None else ""
        return f"{self.dotted_path}: {self.message}{where}"

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável da falha."""
        return {
            "reason": self.reason.value,
            "path": self.dotted_path,
            "message": self.message,
            "details": dict(self.details),
            "origin": self.origin.describe() if self.origin is not None else None,
        }


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def missing_key(*, path: Path, origin: Optional[Origin] = None) -> DecodeFailure:
    key = path[-1] if path else None
    return DecodeFailure(
        reason=FailureReason.MISSING_KEY,
        path=tuple(path),
        message=f"Key not found: '{key}'." if key is not None else "Value not found.",
        details={"key": key},
        origin=origin,
    )


def type_mismatch(
    *,
    path: Path,
    expected: Sequence[NodeKind],
    found: NodeKind,
    origin: Optional[Origin] = None,
    hint: Optional[str] = None,
) -> DecodeFailure:
    names = ", ".join(k.value for k in expected)
    message = f"Expected type {names}. Found {found.value} instead."
    if hint:
        message = f"{message} {hint}"
    return DecodeFailure(
        reason=FailureReason.TYPE_MISMATCH,
        path=tuple(path),
        message=message,
        details={"expected": [k.value for k in expected], "found": found.value},
        origin=origin,
    )


def cannot_convert(
    *,
    path: Path,
    value: str,
    to_type: str,
    because: str,
    origin: Optional[Origin] = None,
) -> DecodeFailure:
    return DecodeFailure(
        reason=FailureReason.CANNOT_CONVERT,
        path=tuple(path),
        message=f"Cannot convert '{value}' to {to_type}: {because}.",
        details={"value": value, "to_type": to_type, "because": because},
        origin=origin,
    )


def unknown_key(*, path: Path, origin: Optional[Origin] = None) -> DecodeFailure:
    key = path[-1] if path else None
    return DecodeFailure(
        reason=FailureReason.UNKNOWN_KEY,
        path=tuple(path),
        message=f"Unknown key '{key}'.",
        details={"key": key},
        origin=origin,
    )
