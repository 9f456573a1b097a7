# tests/test_modais.py

from types import SimpleNamespace

import pytest
from werkzeug.datastructures import MultiDict

from painel_rh.models_rh import ANONIMO
from painel_rh.rh.modais import (ModalCargo, ModalFreelancer, ModalTreinamento, ModalFeedbackCultura,
                                 ModalAssiduidade, ModalFuncionario, MODAIS_POR_TIPO)

USUARIO = SimpleNamespace(id='u1', nome='Bruno')


def falhar(envio):
    raise RuntimeError('Falha de rede')


# --- Cargo ---

def test_kpis_adicionar_editar_remover():
    modal = ModalCargo().abrir()
    modal.adicionar_kpi()
    modal.adicionar_kpi()
    modal.atualizar_kpi(0, 'nome', 'Vídeos publicados')
    modal.atualizar_kpi(0, 'peso', '0.6')
    modal.remover_kpi(1)

    assert modal.rascunho['kpis'] == [{'nome': 'Vídeos publicados', 'peso': 0.6}]
    modal.remover_kpi(0)
    assert modal.rascunho['kpis'] == []

def test_abrir_duas_vezes_gera_o_mesmo_rascunho():
    cargo = SimpleNamespace(id='c1', nome='Editor', descricao='Edita vídeos',
                            kpis=[{'nome': 'Entregas', 'peso': 1}])
    primeiro = ModalCargo().abrir(cargo)
    primeiro.atualizar_kpi(0, 'nome', 'Alterado')
    segundo = ModalCargo().abrir(cargo)

    assert segundo.rascunho['kpis'] == [{'nome': 'Entregas', 'peso': 1}]
    assert cargo.kpis == [{'nome': 'Entregas', 'peso': 1}]

def test_kpis_lidos_do_formulario():
    modal = ModalCargo().abrir()
    modal.atualizar_de_formulario(MultiDict([('nome', ' Editor '), ('descricao', 'Edita'),
                                             ('kpi_nome', 'Entregas'), ('kpi_peso', '2'),
                                             ('kpi_nome', 'Qualidade'), ('kpi_peso', 'abc')]))
    assert modal.rascunho['nome'] == 'Editor'
    assert modal.rascunho['kpis'] == [{'nome': 'Entregas', 'peso': 2.0}, {'nome': 'Qualidade', 'peso': 0.0}]

def test_envio_com_sucesso_fecha_o_modal():
    modal = ModalCargo().abrir()
    modal.rascunho.update(nome='Editor', descricao='Edita vídeos')
    recebidos = []

    assert modal.enviar(recebidos.append)
    assert not modal.aberto
    assert not modal.enviando
    assert recebidos == [{'nome': 'Editor', 'descricao': 'Edita vídeos', 'kpis': []}]

def test_falha_no_envio_mantem_modal_aberto_e_reabilita():
    modal = ModalCargo().abrir()
    modal.rascunho.update(nome='Editor', descricao='Edita vídeos')

    assert not modal.enviar(falhar)
    assert modal.aberto
    assert not modal.enviando
    assert modal.erro == 'Falha de rede'
    assert isinstance(modal.excecao, RuntimeError)

def test_campos_obrigatorios():
    modal = ModalCargo().abrir()
    chamados = []
    assert not modal.enviar(chamados.append)
    assert chamados == []
    assert 'Nome do cargo' in modal.erro


# --- Freelancer ---

def test_freelancer_preserva_projetos_na_edicao():
    freelancer = SimpleNamespace(id='f1', nome='Diego', funcao_principal='Motion', avaliacao_media=4,
                                 disponibilidade='Parcial', frequencia_uso='alto', projetos_associados=['p1'])
    modal = ModalFreelancer().abrir(freelancer)
    modal.atualizar_de_formulario({'avaliacao_media': '9', 'frequencia_uso': 'invalida'})
    recebidos = []

    assert modal.enviar(recebidos.append)
    assert recebidos[0]['projetos_associados'] == ['p1']
    assert recebidos[0]['avaliacao_media'] == 5
    assert recebidos[0]['frequencia_uso'] == 'alto'

def test_freelancer_novo_comeca_sem_projetos():
    modal = ModalFreelancer().abrir()
    modal.atualizar_de_formulario({'nome': 'Elisa', 'funcao_principal': 'Locução'})
    recebidos = []
    modal.enviar(recebidos.append)
    assert recebidos[0]['projetos_associados'] == []


# --- Capacitação ---

def test_treinamento_sem_participante_vira_none():
    modal = ModalTreinamento().abrir(SimpleNamespace(id='t1'))
    assert not modal.em_edicao
    modal.atualizar_de_formulario({'titulo': 'Oficina de roteiro', 'tipo': 'Workshop', 'data': '2024-04-10'})
    recebidos = []

    assert modal.enviar(recebidos.append)
    assert recebidos[0]['funcionario_id'] is None
    assert recebidos[0]['tipo'] == 'Workshop'


# --- Cultura ---

def test_feedback_anonimo_sem_usuario_usa_o_marcador():
    modal = ModalFeedbackCultura().abrir()
    modal.atualizar_de_formulario({'anonimo': 'on', 'texto_feedback': 'Gosto da equipe', 'nota_satisfacao': '4'})
    recebidos = []

    assert modal.enviar(recebidos.append, usuario_atual=None)
    assert recebidos[0]['funcionario_id'] == ANONIMO
    assert recebidos[0]['anonimo'] is True

def test_feedback_identificado_sem_usuario_e_bloqueado():
    modal = ModalFeedbackCultura().abrir()
    modal.atualizar_de_formulario({'texto_feedback': 'Gosto da equipe'})
    chamados = []

    assert not modal.enviar(chamados.append, usuario_atual=None)
    assert chamados == []
    assert modal.aberto
    assert modal.erro == 'Erro: Usuário não identificado'

def test_feedback_identificado_usa_o_usuario_atual():
    modal = ModalFeedbackCultura().abrir()
    modal.atualizar_de_formulario({'texto_feedback': 'Ótimo mês', 'nota_motivacao': '5'})
    recebidos = []

    assert modal.enviar(recebidos.append, usuario_atual=USUARIO)
    assert recebidos[0]['funcionario_id'] == 'u1'
    assert recebidos[0]['nota_motivacao'] == 5


# --- Assiduidade ---

def test_assiduidade_sempre_pendente_e_rascunho_limpo():
    modal = ModalAssiduidade().abrir()
    modal.atualizar_de_formulario({'funcionario_id': 'u1', 'data': '2024-03-04', 'tipo': 'Atraso',
                                   'duracao_minutos': '25'})
    assert modal.exibe_duracao
    recebidos = []

    assert modal.enviar(recebidos.append)
    assert recebidos[0]['status'] == 'Pendente'
    assert recebidos[0]['duracao_minutos'] == 25
    assert modal.rascunho['funcionario_id'] == ''

def test_assiduidade_mantem_duracao_ao_trocar_tipo():
    modal = ModalAssiduidade().abrir()
    modal.atualizar_de_formulario({'tipo': 'Atraso', 'duracao_minutos': '10'})
    modal.atualizar_de_formulario({'tipo': 'Falta'})
    assert not modal.exibe_duracao
    assert modal.rascunho['duracao_minutos'] == 10


# --- Colaborador ---

def test_funcionario_novo_exige_senha():
    modal = ModalFuncionario().abrir()
    modal.atualizar_de_formulario({'nome': 'Carla', 'email': 'carla@test.com', 'cargo': 'Analista', 'senha': '123'})
    chamados = []

    assert not modal.enviar(chamados.append)
    assert chamados == []
    assert 'pelo menos 6' in modal.erro

def test_funcionario_em_edicao_dispensa_senha():
    usuario = SimpleNamespace(id='u9', nome='Carla', email='carla@test.com', cargo='Analista',
                              departamento=None, tipo_contrato='PJ', data_admissao=None, is_admin=False)
    modal = ModalFuncionario().abrir(usuario)
    modal.atualizar_de_formulario({'nome': 'Carla Dias', 'email': 'carla@test.com', 'cargo': 'Analista'})
    recebidos = []

    assert modal.enviar(recebidos.append)
    assert recebidos[0]['nome'] == 'Carla Dias'
    assert recebidos[0]['departamento'] is None
    assert recebidos[0]['is_admin'] is False


@pytest.mark.parametrize('tipo', sorted(MODAIS_POR_TIPO))
def test_todo_modal_reabilita_apos_falha(tipo):
    modal = MODAIS_POR_TIPO[tipo]().abrir()
    for campo in modal.campos_obrigatorios:
        modal.rascunho[campo] = 'x'
    if tipo == 'funcionario':
        modal.senha = 'segredo123'

    assert not modal.enviar(falhar, usuario_atual=USUARIO)
    assert modal.aberto
    assert not modal.enviando
    assert modal.erro
