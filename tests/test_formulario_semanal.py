# tests/test_formulario_semanal.py

from types import SimpleNamespace

import pytest

from painel_rh.rh.formulario_semanal import (FormularioSemanal, OCIOSO, ENVIANDO,
                                             calcular_fim_semana)

USUARIO = SimpleNamespace(id='u1', nome='Bruno')


def preencher(formulario, **extra):
    dados = {'data_inicio_semana': '2024-01-01', 'cargo_id': 'r1', 'projetos_trabalhados': 'Video A',
             'horas_trabalhadas': '38', 'entregas_realizadas': '4', 'principais_desafios': 'Prazo',
             'notas_melhoria': 'Planejar melhor'}
    dados.update(extra)
    formulario.atualizar_de_formulario(dados)


def test_fim_da_semana_e_seis_dias_depois():
    assert calcular_fim_semana('2024-01-01') == '2024-01-07'
    assert calcular_fim_semana('2024-02-26') == '2024-03-03'
    assert calcular_fim_semana('2023-12-29T00:00:00Z') == '2024-01-04'

def test_envio_de_colaborador_usa_o_proprio_id():
    formulario = FormularioSemanal(USUARIO)
    preencher(formulario, funcionario_id='outro')
    enviados = []

    assert formulario.enviar(enviados.append)

    relatorio = enviados[0]
    assert relatorio['funcionario_id'] == 'u1'
    assert relatorio['data_fim_semana'] == '2024-01-07'
    assert relatorio['confirmado'] is True
    assert relatorio['horas_trabalhadas'] == 38

def test_administrador_escolhe_o_colaborador():
    formulario = FormularioSemanal(USUARIO, is_admin=True)
    preencher(formulario, funcionario_id='u2')
    enviados = []

    assert formulario.enviar(enviados.append)
    assert enviados[0]['funcionario_id'] == 'u2'

def test_sucesso_limpa_so_os_campos_da_semana():
    formulario = FormularioSemanal(USUARIO)
    preencher(formulario)

    formulario.enviar(lambda relatorio: None)

    assert formulario.estado == OCIOSO
    assert formulario.rascunho['cargo_id'] == 'r1'
    assert formulario.rascunho['data_inicio_semana'] == '2024-01-01'
    assert formulario.rascunho['projetos_trabalhados'] == ''
    assert formulario.rascunho['horas_trabalhadas'] == 0

def test_falha_mantem_o_rascunho_e_volta_a_ocioso():
    formulario = FormularioSemanal(USUARIO)
    preencher(formulario)
    estados = []

    def handler(relatorio):
        estados.append(formulario.estado)
        raise RuntimeError('banco fora do ar')

    assert not formulario.enviar(handler)
    assert estados == [ENVIANDO]
    assert formulario.estado == OCIOSO
    assert formulario.erro == 'Erro ao enviar relatório. Tente novamente.'
    assert formulario.rascunho['projetos_trabalhados'] == 'Video A'

def test_campos_obrigatorios_bloqueiam_o_envio():
    formulario = FormularioSemanal(USUARIO)
    chamado = []

    assert not formulario.enviar(chamado.append)
    assert chamado == []
    assert 'Cargo/Função' in formulario.erro

@pytest.mark.parametrize('valor, esperado', [('0', 1), ('9', 5), ('4', 4), ('x', 1)])
def test_notas_ficam_entre_um_e_cinco(valor, esperado):
    formulario = FormularioSemanal(USUARIO)
    formulario.atualizar_de_formulario({'autoavaliacao': valor})
    assert formulario.rascunho['autoavaliacao'] == esperado

def test_rascunho_sobrevive_na_sessao():
    formulario = FormularioSemanal(USUARIO, is_admin=True)
    preencher(formulario, funcionario_id='u2')

    copia = FormularioSemanal.da_sessao(USUARIO, True, formulario.para_sessao())
    assert copia.rascunho == formulario.rascunho
    assert copia.funcionario_alvo == 'u2'
