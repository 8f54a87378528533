# src/atlas_config/core/decoding/record.py
"""
Decodificação de registros (tipos com campos nomeados).

Um registro é descrito por uma tabela explícita de `FieldSpec`: nome do
campo, decoder, chave opcional e default opcional. Não há reflexão nem
parâmetros default da linguagem envolvidos: o default de um campo é o
declarado na sua especificação.

Política de decodificação (v1):
    - O nó deve ser um OBJECT (senão TYPE_MISMATCH)
    - Chave de cada campo: `spec.key`, ou `hint.key_mapping(spec.name)`
      (kebab-case por padrão)
    - Chave ausente ou `null` com default declarado → default
    - Chave ausente sem default → o decoder do campo recebe um cursor
      ausente (MISSING_KEY, ou None para `optional(...)`)
    - Chaves sem campo correspondente → UNKNOWN_KEY apenas quando
      `allow_unknown_keys=False` (padrão: permitidas)
    - Falhas de todos os campos são acumuladas

Invariantes:
    - O construtor alvo só é chamado quando todos os campos decodificam
    - A ordem das falhas segue a ordem de declaração dos campos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    TypeVar,
)

from ..cursor import ConfigCursor
from ..errors import DecodeFailure, cannot_convert, unknown_key
from ..types import DecodeResult
from .decoder import Decoder
from .naming import kebab_case


T = TypeVar("T")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldSpec:
    """
    Especificação de um campo de registro.

    Campos:
        - name: nome do argumento no construtor alvo
        - decoder: decoder do valor
        - key: chave explícita na fonte (sobrepõe o key mapping)
        - default: valor usado quando a chave está ausente ou é `null`
        - default_factory: alternativa a `default` para valores mutáveis
    """

    name: str
    decoder: Decoder[Any]
    key: Optional[str] = None
    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None

    def __post_init__(self) -> None:
        if self.default is not MISSING and self.default_factory is not None:
            raise ValueError(f"field '{self.name}' cannot declare both default and default_factory")

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass(frozen=True)
class RecordHint:
    """Política de mapeamento de chaves de um registro."""

    key_mapping: Callable[[str], str] = kebab_case
    allow_unknown_keys: bool = True


class RecordDecoder(Decoder[T]):
    """Decoder de registro com tabela de campos explícita."""

    def __init__(
        self,
        target: Callable[..., T],
        fields: Sequence[FieldSpec],
        hint: RecordHint = RecordHint(),
        name: Optional[str] = None,
    ):
        self.target = target
        self.fields = tuple(fields)
        self.hint = hint
        self._keys = tuple(f.key or hint.key_mapping(f.name) for f in self.fields)

        seen: Dict[str, str] = {}
        for spec, key in zip(self.fields, self._keys):
            if key in seen:
                raise ValueError(f"fields '{seen[key]}' and '{spec.name}' map to the same key '{key}'")
            seen[key] = spec.name

        super().__init__(self._decode, name or getattr(target, "__name__", "record"))

    @property
    def keys(self) -> tuple:
        return self._keys

    def _decode(self, cursor: ConfigCursor) -> DecodeResult[T]:
        entries = cursor.as_object()
        if not entries.ok:
            return entries  # type: ignore[return-value]

        failures: List[DecodeFailure] = []
        values: Dict[str, Any] = {}

        for spec, key in zip(self.fields, self._keys):
            child = cursor.at_key(key, optional=True).value
            if child.is_null and spec.has_default:  # type: ignore[union-attr]
                values[spec.name] = spec.default_value()
                continue
            result = spec.decoder.decode(child)  # type: ignore[arg-type]
            if result.ok:
                values[spec.name] = result.value
            else:
                failures.extend(result.failures)

        if not self.hint.allow_unknown_keys:
            known = set(self._keys)
            for key, child in entries.value.items():  # type: ignore[union-attr]
                if key not in known:
                    failures.append(unknown_key(path=child.path, origin=child.origin))

        if failures:
            return DecodeResult.from_failures(failures)

        try:
            return DecodeResult.success(self.target(**values))
        except (ValueError, TypeError) as e:
            return DecodeResult.failure(
                cannot_convert(
                    path=cursor.path,
                    value="object",
                    to_type=self.name,
                    because=str(e) or type(e).__name__,
                    origin=cursor.origin,
                )
            )


def derive_record_decoder(
    target: Callable[..., T],
    fields: Sequence[FieldSpec],
    hint: RecordHint = RecordHint(),
    *,
    name: Optional[str] = None,
) -> RecordDecoder[T]:
    """Constrói o decoder de um registro a partir da sua tabela de campos."""
    return RecordDecoder(target, fields, hint, name)
