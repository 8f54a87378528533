# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Config.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- o namespace público expõe os entry points de carregamento

Invariantes:
    - Estes testes devem sempre passar em um setup correto
    - Não dependem de filesystem, variáveis de ambiente ou I/O

Limites explícitos:
    - Não testar lógica de decodificação
    - Não acumular asserts funcionais
"""


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Valida que o pacote raiz importa e que cada nome em `__all__` existe.
    """
    import atlas_config

    missing = [name for name in atlas_config.__all__ if not hasattr(atlas_config, name)]
    assert missing == []
    assert callable(atlas_config.load)
