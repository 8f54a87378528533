# src/atlas_config/api.py
"""
Entry points de carregamento do Atlas Config.

Fluxo:
    Source Tree Builder → Path Resolver → Decoder (registry ou explícito)
    → DecodeResult (valor ou lista agregada de falhas)

`load` nunca levanta por falhas de decodificação: retorna todas elas no
`DecodeResult`. `load_or_raise` é a variante para término direto do
programa e levanta `ConfigReaderError` listando cada falha com caminho e
origem. Falhas de fonte (`ParseError` e demais) são sempre fatais.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from .core.cursor import ConfigCursor
from .core.decoding.decoder import Decoder
from .core.decoding.registry import DecoderRegistry
from .core.errors import PathElement
from .core.load_context import LoadContext
from .core.source.hashing import compute_config_hash
from .core.source.loader import load_source
from .core.source.node import ConfigNode
from .core.source.parser import parse_source
from .core.types import DecodeResult


Source = Union[ConfigNode, ConfigCursor]
Target = Any
PathSpec = Union[str, Sequence[PathElement], None]


def _resolve_decoder(target: Target, registry: Optional[DecoderRegistry]) -> Decoder[Any]:
    if isinstance(target, Decoder):
        return target
    if registry is None:
        raise TypeError(
            f"target {getattr(target, '__name__', target)!r} is not a Decoder; pass registry= to resolve it by type"
        )
    return registry.get(target)


def load(
    source: Source,
    target: Target,
    path: PathSpec = None,
    *,
    registry: Optional[DecoderRegistry] = None,
    context: Optional[LoadContext] = None,
) -> DecodeResult[Any]:
    """
    Decodifica `source` (no caminho `path`) com o decoder de `target`.

    Args:
        source: árvore (`ConfigNode`) ou cursor já posicionado.
        target: um `Decoder`, ou um tipo registrado em `registry`.
        path: caminho pontuado (`app1.audit-mode`) ou sequência de chaves.
        registry: registry usado quando `target` é um tipo.
        context: LoadContext opcional para eventos.

    Returns:
        DecodeResult com o valor ou todas as falhas encontradas.

    Raises:
        DecoderNotFoundError: se `target` for um tipo não registrado.
    """
    decoder = _resolve_decoder(target, registry)
    root = source if isinstance(source, ConfigCursor) else ConfigCursor.root(source)

    navigated = root.at_path(path)
    result = navigated.and_then(decoder.decode)

    if context is not None:
        if result.ok:
            where = navigated.value.dotted_path  # type: ignore[union-attr]
            context.log(stage="decode.succeeded", level="INFO", message=f"decoded {decoder.name} at {where}")
        else:
            context.log(
                stage="decode.failed",
                level="ERROR",
                message=f"{len(result.failures)} failure(s) decoding {decoder.name}",
                failures=[f.to_dict() for f in result.failures],
            )
    return result


def load_or_raise(
    source: Source,
    target: Target,
    path: PathSpec = None,
    *,
    registry: Optional[DecoderRegistry] = None,
    context: Optional[LoadContext] = None,
) -> Any:
    """Como `load`, mas levanta `ConfigReaderError` com todas as falhas agregadas."""
    return load(source, target, path, registry=registry, context=context).get_or_raise()


def load_text(
    text: str,
    target: Target,
    path: PathSpec = None,
    *,
    source_name: str = "<string>",
    env: Optional[Mapping[str, str]] = None,
    registry: Optional[DecoderRegistry] = None,
    context: Optional[LoadContext] = None,
) -> DecodeResult[Any]:
    """Constrói a árvore a partir de texto e decodifica `target`."""
    root = parse_source(text, source_name=source_name, env=env, context=context)
    if context is not None:
        context.config_hash = compute_config_hash(root)
    return load(root, target, path, registry=registry, context=context)


def load_files(
    defaults_path: str,
    target: Target,
    path: PathSpec = None,
    *,
    local_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    registry: Optional[DecoderRegistry] = None,
    context: Optional[LoadContext] = None,
) -> DecodeResult[Any]:
    """Resolve defaults + override local e decodifica `target`."""
    root = load_source(defaults_path=defaults_path, local_path=local_path, env=env, context=context)
    return load(root, target, path, registry=registry, context=context)
