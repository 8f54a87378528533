# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Config.

Este módulo define fixtures reutilizáveis que fornecem:
- textos YAML mínimos e determinísticos (defaults e override local)
- ambiente de variáveis controlado (sem depender de `os.environ`)
- registry de decoders já populado com o modelo de auditoria
- LoadContext isolado por teste

Decisões arquiteturais:
    - Textos de configuração são fornecidos como string para evitar I/O
    - O ambiente é sempre um dicionário explícito, nunca o do processo
    - Decoders do domínio de exemplo vivem em `tests/fixtures/audit_model.py`

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração (ver `test_api.py`)
    - Não conter lógica de decodificação
"""

import pytest

from atlas_config.core.decoding import DecoderRegistry, FieldHint, FieldSpec
from atlas_config.core.load_context import LoadContext
from tests.fixtures.audit_model import (
    AuditConf,
    AuditMode,
    DeltaMode,
    audit_mode_decoder,
    delta_mode_decoder,
)


# =====================================================
# Fontes de configuração
# =====================================================

@pytest.fixture
def defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Usado por:
        - Testes do loader de fontes
        - Testes de deep-merge (defaults + local)
        - Testes de hashing da árvore resolvida

    Returns:
        str: Conteúdo YAML representando a base completa.
    """
    return """\
app1:
  name: First Test
  audit-mode: fullmode
server:
  host: localhost
  port: 8080
  tags: [blue, green]
"""


@pytest.fixture
def local_yaml() -> str:
    """YAML de override local: troca o modo de auditoria e a porta."""
    return """\
app1:
  audit-mode:
    type: deltamode
    start-date: "2020-04-25"
    end-date: "2020-04-28"
server:
  port: 9090
"""


@pytest.fixture
def env() -> dict:
    """Ambiente de variáveis explícito e isolado do processo."""
    return {
        "APP_NAME": "First Test",
        "AUDIT_MODE": '{type: deltamode, start-date: "2020-04-25", end-date: "2020-04-28"}',
        "PORT": "8080",
    }


# =====================================================
# Decoders e contexto
# =====================================================

@pytest.fixture
def registry() -> DecoderRegistry:
    """
    Registry com primitivos e o modelo de auditoria registrados.

    O tipo soma `AuditMode` usa a política de campo discriminante (`type`).
    """
    reg = DecoderRegistry.with_primitives()
    reg.register_decoder(DeltaMode, delta_mode_decoder)
    reg.register_decoder(AuditMode, audit_mode_decoder(FieldHint()))
    reg.derive_record_decoder(
        AuditConf,
        [
            FieldSpec("name", reg.get(str)),
            FieldSpec("mode", reg.get(AuditMode), key="audit-mode"),
        ],
    )
    return reg


@pytest.fixture
def ctx() -> LoadContext:
    """LoadContext isolado por teste."""
    return LoadContext()
