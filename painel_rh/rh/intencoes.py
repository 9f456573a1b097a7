# painel_rh/rh/intencoes.py

from dataclasses import dataclass, field
from typing import Any, Dict

from painel_rh import dados


@dataclass(frozen=True)
class Criar:
    rascunho: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Atualizar:
    id: str
    campos: Dict[str, Any] = field(default_factory=dict)


def intencao_para(alvo, rascunho):
    """Com alvo de edição vira Atualizar (mescla sobre o registro); sem alvo, Criar."""
    if alvo is not None:
        return Atualizar(alvo.id, dict(rascunho))
    return Criar(dict(rascunho))


def aplicar(tipo, intencao):
    if isinstance(intencao, Atualizar):
        return dados.atualizar(tipo, intencao.id, intencao.campos)
    if isinstance(intencao, Criar):
        return dados.adicionar(tipo, intencao.rascunho)
    raise TypeError(f'Intenção inválida: {intencao!r}')


def aplicar_funcionario(intencao, senha=None, foto=None):
    if isinstance(intencao, Atualizar):
        return dados.atualizar_funcionario(intencao.id, intencao.campos, foto)
    return dados.adicionar_funcionario(intencao.rascunho, senha, foto)
