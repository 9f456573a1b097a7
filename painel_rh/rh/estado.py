# painel_rh/rh/estado.py
"""
Estado de interface do painel de RH: aba ativa, termo de busca e modais.

Todas as mudanças passam por `despachar`, que devolve um novo estado e mantém
duas regras: no máximo um modal aberto, e só o modal aberto tem alvo de edição.
"""

from collections import namedtuple
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

Aba = namedtuple('Aba', ['id', 'rotulo', 'somente_admin'])

ABAS = (
    Aba('colaboradores', 'Colaboradores', False),
    Aba('freelancers', 'Freelancers', False),
    Aba('cargos', 'Cargos e Funções', True),
    Aba('formulario', 'Formulário Semanal', False),
    Aba('relatorios_admin', 'Relatórios Gerais', True),
    Aba('desempenho', 'Desempenho', False),
    Aba('assiduidade', 'Assiduidade', False),
    Aba('capacitacao', 'Capacitação', False),
    Aba('cultura', 'Cultura', False),
)
ABA_PADRAO = 'colaboradores'

MODAIS = ('cargo', 'freelancer', 'treinamento', 'cultura', 'funcionario', 'assiduidade')


@dataclass(frozen=True)
class EstadoModal:
    aberto: bool = False
    alvo_edicao: Optional[str] = None


def _modais_fechados():
    return {tipo: EstadoModal() for tipo in MODAIS}


@dataclass(frozen=True)
class EstadoPainel:
    aba_ativa: str = ABA_PADRAO
    busca: str = ''
    modais: Dict[str, EstadoModal] = field(default_factory=_modais_fechados)

    @property
    def modal_aberto(self):
        for tipo, modal in self.modais.items():
            if modal.aberto:
                return tipo
        return None

    @property
    def alvo_edicao(self):
        tipo = self.modal_aberto
        return self.modais[tipo].alvo_edicao if tipo else None

    def para_sessao(self):
        return {
            'aba_ativa': self.aba_ativa,
            'busca': self.busca,
            'modal_aberto': self.modal_aberto,
            'alvo_edicao': self.alvo_edicao,
        }

    @classmethod
    def da_sessao(cls, dados):
        """Reconstrói o estado; valores inválidos na sessão voltam ao padrão."""
        if not dados:
            return cls()
        estado = cls(busca=dados.get('busca') or '')
        try:
            estado = despachar(estado, 'selecionar_aba', aba=dados.get('aba_ativa') or ABA_PADRAO)
            if dados.get('modal_aberto'):
                estado = despachar(estado, 'abrir_modal', tipo=dados['modal_aberto'],
                                   alvo=dados.get('alvo_edicao'))
        except ValueError:
            return cls(busca=estado.busca)
        return estado


def abas_visiveis(is_admin):
    return [aba for aba in ABAS if not aba.somente_admin or is_admin]


def aba_permitida(aba_id, is_admin):
    return any(aba.id == aba_id for aba in abas_visiveis(is_admin))


def despachar(estado, acao, **dados):
    if acao == 'selecionar_aba':
        aba = dados.get('aba')
        if not any(a.id == aba for a in ABAS):
            raise ValueError(f'Aba desconhecida: {aba}')
        return replace(estado, aba_ativa=aba)

    if acao == 'buscar':
        return replace(estado, busca=dados.get('termo') or '')

    if acao == 'abrir_modal':
        tipo = dados.get('tipo')
        if tipo not in MODAIS:
            raise ValueError(f'Modal desconhecido: {tipo}')
        modais = _modais_fechados()
        modais[tipo] = EstadoModal(aberto=True, alvo_edicao=dados.get('alvo'))
        return replace(estado, modais=modais)

    if acao == 'fechar_modal':
        return replace(estado, modais=_modais_fechados())

    raise ValueError(f'Ação desconhecida: {acao}')
