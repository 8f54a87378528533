# src/atlas_config/core/source/errors.py
"""
Exceções canônicas da camada de fontes do Atlas Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura, substituição, parse e merge das fontes de configuração.

As exceções aqui definidas representam **falhas fatais de carregamento**:
ao contrário das falhas de decodificação (que são acumuladas), qualquer
uma delas interrompe o load imediatamente.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de fonte são tratados como falhas fatais
    - Mensagens indicam fonte e linha sempre que conhecidas

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Falhas de decodificação nunca são representadas por estas classes

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não acumula múltiplas falhas
"""

from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas Config.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas de fonte e falhas de decodificação
    """


class ParseError(ConfigError):
    """
    Exceção levantada quando o texto de configuração é malformado.

    Carrega a fonte e a linha (1-based) do problema quando disponíveis,
    para que o operador saiba exatamente onde corrigir.
    """

    def __init__(self, message: str, *, source: str = "<string>", line: Optional[int] = None):
        self.source = source
        self.line = line
        where = source if line is None else f"{source}:{line}"
        super().__init__(f"{where}: {message}")


class UnresolvedSubstitutionError(ParseError):
    """
    Exceção levantada quando um placeholder obrigatório `${VAR}` referencia
    uma variável inexistente.

    Decisões arquiteturais:
        - Placeholders obrigatórios sem valor invalidam a fonte
        - Placeholders opcionais (`${?VAR}`) nunca levantam esta exceção
    """

    def __init__(self, variable: str, *, source: str = "<string>", line: Optional[int] = None):
        self.variable = variable
        super().__init__(
            f"Variável de ambiente não definida para substituição: ${{{variable}}}",
            source=source,
            line=line,
        )


class SourceNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de um arquivo de configuração
    não é um objeto.

    Decisões arquiteturais:
        - Arquivos de configuração devem ser sempre mapas chave-valor
        - Listas ou valores escalares no root são inválidos
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de formas durante o deep-merge.

    Exemplo de conflito:
        - base:     {server: {port: 80}}
        - override: {server: "localhost"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
