# painel_rh/rh/modais.py
"""
Modais de cadastro/edição do painel de RH.

Cada modal guarda o rascunho de uma entidade. `abrir` semeia o rascunho a partir
do alvo de edição (ou dos valores padrão) e `enviar` entrega o rascunho ao handler
recebido. Qualquer que seja o desfecho, `enviando` volta a False: em caso de erro
o modal continua aberto com a mensagem em `erro`.
"""

from datetime import date, datetime

from painel_rh.models_rh import (ANONIMO, FREQUENCIAS_USO, TIPOS_ASSIDUIDADE,
                                 TIPOS_TREINAMENTO)
from .calculos import exibe_duracao


class ErroRegraNegocio(Exception):
    """Envio bloqueado por uma regra do formulário (o handler não é chamado)."""


def _inteiro(valor, padrao=0):
    try:
        return int(valor)
    except (TypeError, ValueError):
        return padrao


def _decimal(valor, padrao=0.0):
    try:
        return float(valor)
    except (TypeError, ValueError):
        return padrao


def _nota(valor, minimo=0, maximo=5):
    return max(minimo, min(maximo, _inteiro(valor)))


def _hoje_iso():
    return date.today().isoformat()


def _texto(form, campo, atual=''):
    valor = form.get(campo)
    return atual if valor is None else valor.strip()


class Modal:
    tipo = None
    titulo = ''
    campos_obrigatorios = ()
    rotulos = {}
    permite_edicao = True

    def __init__(self):
        self.aberto = False
        self.alvo = None
        self.rascunho = self.rascunho_inicial()
        self.erro = None
        self.excecao = None
        self.enviando = False

    def rascunho_inicial(self):
        return {}

    def rascunho_de(self, alvo):
        return self.rascunho_inicial()

    @property
    def em_edicao(self):
        return self.alvo is not None

    def abrir(self, alvo=None):
        if not self.permite_edicao:
            alvo = None
        self.alvo = alvo
        self.rascunho = self.rascunho_de(alvo) if alvo is not None else self.rascunho_inicial()
        self.erro = None
        self.excecao = None
        self.aberto = True
        return self

    def fechar(self):
        self.aberto = False

    def atualizar_de_formulario(self, form, arquivos=None):
        raise NotImplementedError

    def campos_faltando(self):
        faltando = []
        for campo in self.campos_obrigatorios:
            valor = self.rascunho.get(campo)
            if valor is None or (isinstance(valor, str) and not valor.strip()):
                faltando.append(self.rotulos.get(campo, campo))
        return faltando

    def montar_envio(self, usuario_atual=None):
        return dict(self.rascunho)

    def apos_envio(self):
        pass

    def enviar(self, handler, usuario_atual=None):
        """Devolve True quando o handler concluiu e o modal foi fechado."""
        if not self.aberto:
            return False

        faltando = self.campos_faltando()
        if faltando:
            self.erro = 'Preencha os campos obrigatórios: ' + ', '.join(faltando) + '.'
            return False

        try:
            envio = self.montar_envio(usuario_atual)
        except ErroRegraNegocio as e:
            self.erro = str(e)
            return False

        self.enviando = True
        try:
            handler(envio)
        except Exception as e:
            self.erro = str(e) or 'Erro ao salvar. Tente novamente.'
            self.excecao = e
            return False
        finally:
            self.enviando = False

        self.erro = None
        self.fechar()
        self.apos_envio()
        return True


class ModalCargo(Modal):
    tipo = 'cargo'
    titulo = 'Cargo'
    campos_obrigatorios = ('nome', 'descricao')
    rotulos = {'nome': 'Nome do cargo', 'descricao': 'Descrição'}

    def rascunho_inicial(self):
        return {'nome': '', 'descricao': '', 'kpis': []}

    def rascunho_de(self, cargo):
        return {
            'nome': cargo.nome,
            'descricao': cargo.descricao,
            # Cópia nova a cada abertura: editar o rascunho não toca o cargo
            'kpis': [{'nome': k.get('nome', ''), 'peso': k.get('peso', 0)} for k in (cargo.kpis or [])],
        }

    def adicionar_kpi(self):
        self.rascunho['kpis'] = self.rascunho['kpis'] + [{'nome': '', 'peso': 0}]

    def atualizar_kpi(self, indice, campo, valor):
        if campo not in ('nome', 'peso'):
            raise ValueError(f'Campo de KPI inválido: {campo}')
        kpis = [dict(k) for k in self.rascunho['kpis']]
        kpis[indice][campo] = _decimal(valor) if campo == 'peso' else valor
        self.rascunho['kpis'] = kpis

    def remover_kpi(self, indice):
        self.rascunho['kpis'] = [k for i, k in enumerate(self.rascunho['kpis']) if i != indice]

    def atualizar_de_formulario(self, form, arquivos=None):
        self.rascunho['nome'] = _texto(form, 'nome', self.rascunho['nome'])
        self.rascunho['descricao'] = _texto(form, 'descricao', self.rascunho['descricao'])
        if hasattr(form, 'getlist'):
            nomes = form.getlist('kpi_nome')
            pesos = form.getlist('kpi_peso')
            self.rascunho['kpis'] = [{'nome': n.strip(), 'peso': _decimal(p)} for n, p in zip(nomes, pesos)]

    def montar_envio(self, usuario_atual=None):
        return {
            'nome': self.rascunho['nome'],
            'descricao': self.rascunho['descricao'],
            'kpis': [dict(k) for k in self.rascunho['kpis']],
        }


class ModalFreelancer(Modal):
    tipo = 'freelancer'
    titulo = 'Freelancer'
    campos_obrigatorios = ('nome', 'funcao_principal')
    rotulos = {'nome': 'Nome', 'funcao_principal': 'Função principal'}

    def rascunho_inicial(self):
        return {
            'nome': '',
            'funcao_principal': '',
            'avaliacao_media': 0,
            'disponibilidade': 'Disponível',
            'frequencia_uso': 'baixo',
        }

    def rascunho_de(self, freelancer):
        return {
            'nome': freelancer.nome,
            'funcao_principal': freelancer.funcao_principal,
            'avaliacao_media': freelancer.avaliacao_media or 0,
            'disponibilidade': freelancer.disponibilidade,
            'frequencia_uso': freelancer.frequencia_uso,
        }

    def atualizar_de_formulario(self, form, arquivos=None):
        r = self.rascunho
        r['nome'] = _texto(form, 'nome', r['nome'])
        r['funcao_principal'] = _texto(form, 'funcao_principal', r['funcao_principal'])
        if form.get('avaliacao_media') is not None:
            r['avaliacao_media'] = _nota(form.get('avaliacao_media'))
        r['disponibilidade'] = _texto(form, 'disponibilidade', r['disponibilidade'])
        if form.get('frequencia_uso') in FREQUENCIAS_USO:
            r['frequencia_uso'] = form.get('frequencia_uso')

    def montar_envio(self, usuario_atual=None):
        envio = dict(self.rascunho)
        envio['projetos_associados'] = list(self.alvo.projetos_associados or []) if self.alvo else []
        return envio


class ModalTreinamento(Modal):
    tipo = 'treinamento'
    titulo = 'Evento de Capacitação'
    campos_obrigatorios = ('titulo', 'data')
    rotulos = {'titulo': 'Título', 'data': 'Data'}
    permite_edicao = False

    def rascunho_inicial(self):
        return {
            'titulo': '',
            'tipo': 'Treinamento',
            'data': _hoje_iso(),
            'funcionario_id': '',
            'nivel_impacto': 3,
            'observacoes': '',
        }

    def atualizar_de_formulario(self, form, arquivos=None):
        r = self.rascunho
        r['titulo'] = _texto(form, 'titulo', r['titulo'])
        if form.get('tipo') in TIPOS_TREINAMENTO:
            r['tipo'] = form.get('tipo')
        r['data'] = _texto(form, 'data', r['data'])
        r['funcionario_id'] = _texto(form, 'funcionario_id', r['funcionario_id'])
        if form.get('nivel_impacto') is not None:
            r['nivel_impacto'] = _nota(form.get('nivel_impacto'), minimo=1)
        r['observacoes'] = _texto(form, 'observacoes', r['observacoes'])

    def montar_envio(self, usuario_atual=None):
        envio = dict(self.rascunho)
        envio['funcionario_id'] = envio['funcionario_id'] or None
        return envio


class ModalFeedbackCultura(Modal):
    tipo = 'cultura'
    titulo = 'Feedback de Cultura'
    campos_obrigatorios = ('texto_feedback',)
    rotulos = {'texto_feedback': 'Feedback'}
    permite_edicao = False

    def rascunho_inicial(self):
        return {
            'anonimo': False,
            'nota_satisfacao': 0,
            'nota_motivacao': 0,
            'texto_feedback': '',
        }

    def atualizar_de_formulario(self, form, arquivos=None):
        r = self.rascunho
        r['anonimo'] = 'anonimo' in form
        if form.get('nota_satisfacao') is not None:
            r['nota_satisfacao'] = _nota(form.get('nota_satisfacao'))
        if form.get('nota_motivacao') is not None:
            r['nota_motivacao'] = _nota(form.get('nota_motivacao'))
        r['texto_feedback'] = _texto(form, 'texto_feedback', r['texto_feedback'])

    def montar_envio(self, usuario_atual=None):
        anonimo = self.rascunho['anonimo']
        if not anonimo and usuario_atual is None:
            raise ErroRegraNegocio('Erro: Usuário não identificado')
        envio = dict(self.rascunho)
        envio['funcionario_id'] = ANONIMO if anonimo else usuario_atual.id
        envio['data'] = datetime.utcnow().isoformat()
        return envio


class ModalAssiduidade(Modal):
    tipo = 'assiduidade'
    titulo = 'Registrar Presença'
    campos_obrigatorios = ('funcionario_id', 'data')
    rotulos = {'funcionario_id': 'Colaborador', 'data': 'Data'}
    permite_edicao = False

    def rascunho_inicial(self):
        return {
            'funcionario_id': '',
            'data': _hoje_iso(),
            'tipo': 'Falta',
            'motivo': '',
            'duracao_minutos': 0,
        }

    @property
    def exibe_duracao(self):
        return exibe_duracao(self.rascunho['tipo'])

    def atualizar_de_formulario(self, form, arquivos=None):
        r = self.rascunho
        r['funcionario_id'] = _texto(form, 'funcionario_id', r['funcionario_id'])
        r['data'] = _texto(form, 'data', r['data'])
        if form.get('tipo') in TIPOS_ASSIDUIDADE:
            r['tipo'] = form.get('tipo')
        r['motivo'] = _texto(form, 'motivo', r['motivo'])
        # O campo só aparece para atraso/saída antecipada; fora disso o valor anterior fica
        if form.get('duracao_minutos') is not None:
            r['duracao_minutos'] = _inteiro(form.get('duracao_minutos'))

    def montar_envio(self, usuario_atual=None):
        envio = dict(self.rascunho)
        envio['status'] = 'Pendente'
        return envio

    def apos_envio(self):
        self.rascunho = self.rascunho_inicial()


class ModalFuncionario(Modal):
    tipo = 'funcionario'
    titulo = 'Colaborador'
    campos_obrigatorios = ('nome', 'email', 'cargo')
    rotulos = {'nome': 'Nome completo', 'email': 'Email', 'cargo': 'Cargo'}
    TAMANHO_MINIMO_SENHA = 6

    def __init__(self):
        super().__init__()
        self.senha = ''
        self.foto = None

    def rascunho_inicial(self):
        return {
            'nome': '',
            'email': '',
            'cargo': '',
            'departamento': '',
            'tipo_contrato': 'CLT',
            'data_admissao': '',
            'is_admin': False,
        }

    def rascunho_de(self, usuario):
        return {
            'nome': usuario.nome,
            'email': usuario.email,
            'cargo': usuario.cargo or '',
            'departamento': usuario.departamento or '',
            'tipo_contrato': usuario.tipo_contrato or 'CLT',
            'data_admissao': usuario.data_admissao.isoformat() if usuario.data_admissao else '',
            'is_admin': bool(usuario.is_admin),
        }

    def atualizar_de_formulario(self, form, arquivos=None):
        r = self.rascunho
        for campo in ('nome', 'email', 'cargo', 'departamento', 'tipo_contrato', 'data_admissao'):
            r[campo] = _texto(form, campo, r[campo])
        r['is_admin'] = 'is_admin' in form
        self.senha = form.get('senha') or ''
        if arquivos is not None:
            self.foto = arquivos.get('foto')

    def montar_envio(self, usuario_atual=None):
        if not self.em_edicao:
            if not self.senha:
                raise ErroRegraNegocio('A senha é obrigatória para novos colaboradores.')
            if len(self.senha) < self.TAMANHO_MINIMO_SENHA:
                raise ErroRegraNegocio(f'A senha deve ter pelo menos {self.TAMANHO_MINIMO_SENHA} caracteres.')
        envio = dict(self.rascunho)
        envio['departamento'] = envio['departamento'] or None
        envio['data_admissao'] = envio['data_admissao'] or None
        return envio


MODAIS_POR_TIPO = {
    classe.tipo: classe
    for classe in (ModalCargo, ModalFreelancer, ModalTreinamento,
                   ModalFeedbackCultura, ModalAssiduidade, ModalFuncionario)
}
