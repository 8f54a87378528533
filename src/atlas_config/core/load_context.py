# src/atlas_config/core/load_context.py
"""
LoadContext — contexto canônico de um carregamento de configuração.

Este módulo define o **LoadContext**, a estrutura opcional passada às etapas
de leitura de fonte e ao entry point de load para registrar o que aconteceu
durante um carregamento.

O LoadContext é o meio de:
- registro de eventos estruturados (parse, substituição, merge, hash, decode)
- coleta de warnings não fatais por etapa
- exposição do hash da configuração efetiva

Princípios fundamentais:
- Isolamento por carregamento (cada load possui seu próprio contexto)
- Decoders permanecem puros e nunca recebem o contexto
- Cada evento também é emitido no logger `atlas_config`
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


logger = logging.getLogger("atlas_config")


@dataclass
class LoadContext:
    """
    Contexto de um carregamento de configuração.

    Campos canônicos:
    - load_id: identificador único do carregamento
    - created_at: timestamp UTC de criação do contexto
    - config_hash: hash da árvore efetiva (preenchido após a leitura das fontes)
    - warnings: warnings por etapa
    - events: log estruturado de eventos
    """

    load_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    config_hash: Optional[str] = None

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "load_id": self.load_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        logger.log(logging.getLevelName(level.upper()), "[%s] %s", stage, message)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
        self.log(stage=stage, level="WARNING", message=message)

    def events_for(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["stage"] == stage]
