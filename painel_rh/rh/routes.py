# painel_rh/rh/routes.py

from flask import (Blueprint, render_template, request, flash, redirect, url_for, current_app,
                   send_from_directory, session, abort, Response)
from flask_login import login_required, current_user
from io import BytesIO
import openpyxl

from painel_rh import db, dados
from painel_rh.dados import ErroPersistencia, EntidadeNaoEncontrada
from painel_rh.decorators import admin_required
from painel_rh.models import Usuario
from painel_rh.models_rh import RelatorioSemanal
from . import intencoes
from .calculos import (TODOS, filtrar_colaboradores, filtrar_freelancers, relatorios_do_colaborador,
                       filtrar_relatorios, totais_relatorios, resumo_desempenho, painel_assiduidade,
                       registros_recentes, rotulo_status_treinamento, treinamento_concluido,
                       nome_por_id, autor_feedback, normalizar_data)
from .estado import (EstadoPainel, MODAIS, ABA_PADRAO, abas_visiveis, aba_permitida, despachar)
from .formulario_semanal import FormularioSemanal
from .modais import MODAIS_POR_TIPO

rh = Blueprint('rh', __name__, url_prefix='/rh')

# Modais que só administradores podem abrir/enviar
MODAIS_ADMIN = {'cargo', 'funcionario'}

# Coleções removidas direto pela linha da aba (sem confirmação): coleção -> (tipo, só admin, aba)
REMOCAO_DIRETA = {
    'freelancers': ('freelancer', False, 'freelancers'),
    'cargos': ('cargo', True, 'cargos'),
    'treinamentos': ('treinamento', False, 'capacitacao'),
    'assiduidade': ('assiduidade', False, 'assiduidade'),
}

MENSAGENS_SUCESSO = {
    'cargo': 'Cargo salvo com sucesso!',
    'freelancer': 'Freelancer salvo com sucesso!',
    'treinamento': 'Evento de capacitação registrado com sucesso!',
    'cultura': 'Obrigado! O seu feedback foi enviado.',
    'assiduidade': 'Registro de assiduidade adicionado com sucesso!',
    'funcionario': 'Colaborador salvo com sucesso!',
}

# Tipo do modal -> tipo de entidade na camada de dados (só inclusão)
SOMENTE_INCLUSAO = {'treinamento': 'treinamento', 'cultura': 'feedback', 'assiduidade': 'assiduidade'}


@rh.context_processor
def utilitarios_templates():
    return dict(nome_por_id=nome_por_id, autor_feedback=autor_feedback,
                rotulo_status_treinamento=rotulo_status_treinamento,
                treinamento_concluido=treinamento_concluido, normalizar_data=normalizar_data)


# --- ESTADO DO PAINEL (SESSÃO) ---
def _estado_atual():
    return EstadoPainel.da_sessao(session.get('painel_rh'))

def _salvar_estado(estado):
    session['painel_rh'] = estado.para_sessao()

def _formulario_semanal():
    return FormularioSemanal.da_sessao(current_user, current_user.is_admin, session.get('formulario_semanal'))

def _carregar_alvo(tipo, alvo_id):
    if not alvo_id:
        return None
    if tipo == 'funcionario':
        return db.session.get(Usuario, alvo_id)
    if tipo in ('cargo', 'freelancer'):
        try:
            return dados.obter(tipo, alvo_id)
        except EntidadeNaoEncontrada:
            return None
    return None

def _montar_modal(estado):
    tipo = estado.modal_aberto
    if not tipo:
        return None
    return MODAIS_POR_TIPO[tipo]().abrir(_carregar_alvo(tipo, estado.alvo_edicao))


def _contexto_aba(aba, colecoes, estado, formulario):
    if aba == 'colaboradores':
        return {'colaboradores': filtrar_colaboradores(colecoes['funcionarios'], estado.busca)}
    if aba == 'freelancers':
        return {'freelancers_filtrados': filtrar_freelancers(colecoes['freelancers'], estado.busca)}
    if aba == 'formulario':
        return {'relatorios_colaborador': relatorios_do_colaborador(colecoes['relatorios'],
                                                                    formulario.funcionario_alvo)}
    if aba == 'relatorios_admin':
        filtro_funcionario = request.args.get('funcionario') or TODOS
        filtro_data = request.args.get('data', '')
        filtrados = filtrar_relatorios(colecoes['relatorios'], filtro_funcionario, filtro_data)
        return {
            'filtro_funcionario': filtro_funcionario,
            'filtro_data': filtro_data,
            'relatorios_filtrados': filtrados,
            'totais': totais_relatorios(filtrados),
        }
    if aba == 'desempenho':
        return {'resumo': resumo_desempenho(colecoes['relatorios'], colecoes['funcionarios'],
                                            colecoes['feedbacks'])}
    if aba == 'assiduidade':
        return {
            'estatisticas_assiduidade': painel_assiduidade(colecoes['funcionarios'],
                                                           colecoes['registros_assiduidade']),
            'registros_recentes': registros_recentes(colecoes['registros_assiduidade']),
        }
    return {}


def _renderizar_painel(estado, modal=None, formulario=None):
    colecoes = dados.carregar_colecoes()
    if formulario is None:
        formulario = _formulario_semanal()
    if modal is None:
        modal = _montar_modal(estado)
    contexto = _contexto_aba(estado.aba_ativa, colecoes, estado, formulario)
    return render_template('rh/painel.html',
                           estado=estado,
                           abas=abas_visiveis(current_user.is_admin),
                           modal=modal,
                           formulario=formulario,
                           **colecoes,
                           **contexto)


# --- PAINEL ---
@rh.route('/')
@login_required
def painel():
    estado = _estado_atual()
    is_admin = current_user.is_admin

    aba = request.args.get('aba')
    if aba and not aba_permitida(aba, is_admin):
        flash('Você não tem permissão para acessar esta aba.', 'warning')
        aba = ABA_PADRAO
    if aba:
        estado = despachar(estado, 'selecionar_aba', aba=aba)
    elif not aba_permitida(estado.aba_ativa, is_admin):
        estado = despachar(estado, 'selecionar_aba', aba=ABA_PADRAO)

    if 'busca' in request.args:
        estado = despachar(estado, 'buscar', termo=request.args.get('busca'))

    if request.args.get('fechar'):
        estado = despachar(estado, 'fechar_modal')

    modal_pedido = request.args.get('modal')
    if modal_pedido:
        if modal_pedido not in MODAIS:
            flash('Formulário desconhecido.', 'warning')
        elif modal_pedido in MODAIS_ADMIN and not is_admin:
            flash('Você não tem permissão para acessar esta área.', 'danger')
        else:
            estado = despachar(estado, 'abrir_modal', tipo=modal_pedido, alvo=request.args.get('editar'))

    formulario = _formulario_semanal()
    if is_admin and request.args.get('colaborador'):
        formulario.funcionario_selecionado = request.args.get('colaborador')
        session['formulario_semanal'] = formulario.para_sessao()

    _salvar_estado(estado)
    return _renderizar_painel(estado, formulario=formulario)


# --- MODAIS ---
def _handler_modal(tipo, modal):
    if tipo in ('cargo', 'freelancer'):
        return lambda envio: intencoes.aplicar(tipo, intencoes.intencao_para(modal.alvo, envio))
    if tipo == 'funcionario':
        return lambda envio: intencoes.aplicar_funcionario(
            intencoes.intencao_para(modal.alvo, envio), senha=modal.senha, foto=modal.foto)
    tipo_entidade = SOMENTE_INCLUSAO[tipo]
    return lambda envio: intencoes.aplicar(tipo_entidade, intencoes.Criar(envio))

@rh.route('/modais/<tipo>', methods=['POST'])
@login_required
def enviar_modal(tipo):
    if tipo not in MODAIS_POR_TIPO:
        abort(404)
    if tipo in MODAIS_ADMIN and not current_user.is_admin:
        flash('Você não tem permissão para acessar esta área.', 'danger')
        return redirect(url_for('rh.painel'))

    alvo_id = request.form.get('alvo_id') or None
    alvo = _carregar_alvo(tipo, alvo_id)
    if alvo_id and alvo is None:
        flash('Registro não encontrado. Ele pode ter sido removido.', 'danger')
        _salvar_estado(despachar(_estado_atual(), 'fechar_modal'))
        return redirect(url_for('rh.painel'))

    modal = MODAIS_POR_TIPO[tipo]().abrir(alvo)
    modal.atualizar_de_formulario(request.form, request.files)
    estado = despachar(_estado_atual(), 'abrir_modal', tipo=tipo, alvo=alvo_id)

    acao = request.form.get('acao', 'salvar')
    if tipo == 'cargo' and acao != 'salvar':
        # Botões de KPI só alteram o rascunho; nada é gravado
        if acao == 'adicionar_kpi':
            modal.adicionar_kpi()
        elif acao.startswith('remover_kpi:'):
            try:
                modal.remover_kpi(int(acao.split(':', 1)[1]))
            except ValueError:
                pass
        _salvar_estado(estado)
        return _renderizar_painel(estado, modal=modal)

    if modal.enviar(_handler_modal(tipo, modal), usuario_atual=current_user):
        flash(MENSAGENS_SUCESSO[tipo], 'success')
        _salvar_estado(despachar(estado, 'fechar_modal'))
        return redirect(url_for('rh.painel'))

    if modal.excecao is not None:
        current_app.logger.error(f"Erro ao salvar {tipo}: {modal.excecao}")
    flash(modal.erro, 'danger')
    _salvar_estado(estado)
    return _renderizar_painel(estado, modal=modal)


# --- FORMULÁRIO SEMANAL ---
@rh.route('/formulario_semanal', methods=['POST'])
@login_required
def enviar_formulario_semanal():
    formulario = _formulario_semanal()
    formulario.atualizar_de_formulario(request.form)
    enviado = formulario.enviar(lambda relatorio: dados.adicionar('relatorio', relatorio))
    session['formulario_semanal'] = formulario.para_sessao()

    estado = despachar(_estado_atual(), 'selecionar_aba', aba='formulario')
    _salvar_estado(estado)

    if enviado:
        flash('Relatório enviado com sucesso!', 'success')
        return redirect(url_for('rh.painel', aba='formulario'))

    if formulario.excecao is not None:
        current_app.logger.error(f"Erro ao enviar relatório semanal: {formulario.excecao}")
    flash(formulario.erro, 'danger')
    return _renderizar_painel(estado, formulario=formulario)


# --- REMOÇÕES ---
@rh.route('/remover/<colecao>/<id>', methods=['POST'])
@login_required
def remover(colecao, id):
    if colecao not in REMOCAO_DIRETA:
        abort(404)
    tipo, somente_admin, aba = REMOCAO_DIRETA[colecao]
    if somente_admin and not current_user.is_admin:
        flash('Você não tem permissão para acessar esta área.', 'danger')
        return redirect(url_for('rh.painel'))

    try:
        dados.remover(tipo, id)
        flash('Registro removido.', 'success')
    except EntidadeNaoEncontrada:
        flash('Registro não encontrado.', 'warning')
    except ErroPersistencia as e:
        flash(str(e), 'danger')
    return redirect(url_for('rh.painel', aba=aba))

@rh.route('/relatorios/<id>/excluir', methods=['GET', 'POST'])
@login_required
@admin_required
def excluir_relatorio(id):
    relatorio = db.get_or_404(RelatorioSemanal, id)

    if request.method == 'POST':
        if request.form.get('confirmar') != 'sim':
            flash('Exclusão cancelada.', 'info')
            return redirect(url_for('rh.painel', aba='relatorios_admin'))
        try:
            dados.remover('relatorio', id)
            flash('Relatório excluído definitivamente.', 'success')
        except ErroPersistencia as e:
            flash(str(e), 'danger')
        return redirect(url_for('rh.painel', aba='relatorios_admin'))

    return render_template('rh/confirmar_exclusao.html', relatorio=relatorio,
                           funcionario=db.session.get(Usuario, relatorio.funcionario_id))


# --- EXPORTAÇÃO ---
@rh.route('/relatorios/exportar')
@login_required
@admin_required
def exportar_relatorios():
    colecoes = dados.carregar_colecoes()
    filtrados = filtrar_relatorios(colecoes['relatorios'],
                                   request.args.get('funcionario') or TODOS,
                                   request.args.get('data', ''))
    totais = totais_relatorios(filtrados)

    output = BytesIO()
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Relatórios Semanais"

    sheet.append([
        "colaborador", "cargo", "inicio_semana", "fim_semana", "projetos",
        "horas", "entregas", "dificuldade", "autoavaliacao", "motivacao"
    ])
    for r in filtrados:
        sheet.append([
            nome_por_id(colecoes['funcionarios'], r.funcionario_id),
            nome_por_id(colecoes['cargos'], r.cargo_id, padrao='-'),
            normalizar_data(r.data_inicio_semana), normalizar_data(r.data_fim_semana),
            r.projetos_trabalhados, r.horas_trabalhadas, r.entregas_realizadas,
            r.nivel_dificuldade, r.autoavaliacao, r.nivel_motivacao,
        ])
    sheet.append([])
    sheet.append(["TOTAL", "", "", "", "", totais['horas'], totais['entregas'], "",
                  totais['media_autoavaliacao'], ""])

    workbook.save(output)
    current_app.logger.info(f"Exportação de {len(filtrados)} relatórios semanais por {current_user.email}.")

    return Response(output.getvalue(), mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                    headers={"Content-Disposition": "attachment;filename=relatorios_semanais.xlsx"})


# --- FOTOS DE PERFIL ---
@rh.route('/uploads/<filename>')
@login_required
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
