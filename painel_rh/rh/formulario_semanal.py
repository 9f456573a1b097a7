# painel_rh/rh/formulario_semanal.py
"""
Formulário semanal de autoavaliação.

Estados: ocioso -> enviando -> ocioso. Depois de um envio bem-sucedido só os
campos da semana são limpos; cargo e data de início continuam preenchidos para
o próximo relatório.
"""

from datetime import date, timedelta

OCIOSO = 'ocioso'
ENVIANDO = 'enviando'

CAMPOS_OBRIGATORIOS = {
    'cargo_id': 'Cargo/Função',
    'data_inicio_semana': 'Início da semana',
    'projetos_trabalhados': 'Projetos trabalhados',
}
CAMPOS_DA_SEMANA = ('projetos_trabalhados', 'horas_trabalhadas', 'entregas_realizadas',
                    'principais_desafios', 'notas_melhoria')
CAMPOS_NOTA = ('nivel_dificuldade', 'autoavaliacao', 'nivel_motivacao')


def calcular_fim_semana(data_inicio):
    """Semana de 7 dias contando o início: fim = início + 6 dias, em YYYY-MM-DD."""
    inicio = date.fromisoformat(str(data_inicio)[:10])
    return (inicio + timedelta(days=6)).isoformat()


def rascunho_padrao():
    return {
        'data_inicio_semana': date.today().isoformat(),
        'cargo_id': '',
        'projetos_trabalhados': '',
        'horas_trabalhadas': 0,
        'entregas_realizadas': 0,
        'nivel_dificuldade': 3,
        'autoavaliacao': 3,
        'principais_desafios': '',
        'notas_melhoria': '',
        'nivel_motivacao': 3,
    }


def _inteiro(valor):
    try:
        return int(valor)
    except (TypeError, ValueError):
        return 0


class FormularioSemanal:

    def __init__(self, usuario_atual, is_admin=False, rascunho=None, funcionario_selecionado=None):
        self.usuario_atual = usuario_atual
        self.is_admin = is_admin
        self.rascunho = {**rascunho_padrao(), **(rascunho or {})}
        self.funcionario_selecionado = funcionario_selecionado or usuario_atual.id
        self.estado = OCIOSO
        self.erro = None
        self.excecao = None

    @property
    def enviando(self):
        return self.estado == ENVIANDO

    @property
    def funcionario_alvo(self):
        return self.funcionario_selecionado if self.is_admin else self.usuario_atual.id

    def atualizar_de_formulario(self, form):
        if self.is_admin and form.get('funcionario_id'):
            self.funcionario_selecionado = form.get('funcionario_id')
        for campo, padrao in rascunho_padrao().items():
            valor = form.get(campo)
            if valor is None:
                continue
            if isinstance(padrao, int):
                valor = _inteiro(valor)
                if campo in CAMPOS_NOTA:
                    valor = max(1, min(5, valor))
            else:
                valor = valor.strip()
            self.rascunho[campo] = valor

    def campos_faltando(self):
        return [rotulo for campo, rotulo in CAMPOS_OBRIGATORIOS.items()
                if not str(self.rascunho.get(campo) or '').strip()]

    def montar_relatorio(self):
        relatorio = dict(self.rascunho)
        relatorio['funcionario_id'] = self.funcionario_alvo
        relatorio['data_fim_semana'] = calcular_fim_semana(self.rascunho['data_inicio_semana'])
        relatorio['confirmado'] = True
        return relatorio

    def enviar(self, handler):
        """Envia o relatório; devolve True no sucesso. O estado sempre volta a ocioso."""
        faltando = self.campos_faltando()
        if faltando:
            self.erro = 'Preencha os campos obrigatórios: ' + ', '.join(faltando) + '.'
            return False
        if self.enviando:
            return False

        self.estado = ENVIANDO
        try:
            handler(self.montar_relatorio())
        except Exception as e:
            self.erro = 'Erro ao enviar relatório. Tente novamente.'
            self.excecao = e
            return False
        finally:
            self.estado = OCIOSO

        self.erro = None
        for campo in CAMPOS_DA_SEMANA:
            self.rascunho[campo] = rascunho_padrao()[campo]
        return True

    def para_sessao(self):
        return {'rascunho': dict(self.rascunho), 'funcionario_selecionado': self.funcionario_selecionado}

    @classmethod
    def da_sessao(cls, usuario_atual, is_admin, dados):
        dados = dados or {}
        return cls(usuario_atual, is_admin,
                   rascunho=dados.get('rascunho'),
                   funcionario_selecionado=dados.get('funcionario_selecionado'))
