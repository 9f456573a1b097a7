# painel_rh/dados.py
"""
Camada de dados do painel de RH.

Centraliza a leitura das coleções exibidas nas abas e as operações de escrita
(adicionar, atualizar, remover) usadas pelos modais. Toda escrita faz commit,
desfaz a transação em caso de erro e avisa os painéis abertos via Socket.IO.
"""

from datetime import date, datetime
import os
import uuid

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename

from . import db
from .models import Usuario
from .models_rh import (Cargo, Freelancer, RelatorioSemanal, RegistroAssiduidade,
                        Treinamento, FeedbackCultura)
from .socket_events import notificar_atualizacao

ENTIDADES = {
    'cargo': Cargo,
    'freelancer': Freelancer,
    'relatorio': RelatorioSemanal,
    'treinamento': Treinamento,
    'feedback': FeedbackCultura,
    'assiduidade': RegistroAssiduidade,
}

EXTENSOES_FOTO = {'png', 'jpg', 'jpeg', 'webp'}
CAMPOS_PROTEGIDOS = {'id', 'created_at', 'updated_at'}


class ErroPersistencia(Exception):
    """Falha ao gravar no banco. A transação já foi desfeita."""


class EntidadeNaoEncontrada(LookupError):
    pass


def _modelo(tipo):
    try:
        return ENTIDADES[tipo]
    except KeyError:
        raise ValueError(f'Tipo de entidade desconhecido: {tipo}')


def _para_data(valor):
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date) or valor is None:
        return valor
    if valor == '':
        return None
    return date.fromisoformat(str(valor)[:10])


def _para_data_hora(valor):
    if isinstance(valor, datetime) or valor is None:
        return valor
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    return datetime.fromisoformat(str(valor).replace('Z', '+00:00'))


def _converter_campos(entidade, campos):
    colunas = entidade.__table__.columns
    convertidos = {}
    for nome, valor in campos.items():
        if nome in CAMPOS_PROTEGIDOS or nome not in colunas:
            continue
        tipo_coluna = colunas[nome].type
        try:
            if isinstance(tipo_coluna, db.DateTime):
                valor = _para_data_hora(valor)
            elif isinstance(tipo_coluna, db.Date):
                valor = _para_data(valor)
        except ValueError as e:
            raise ValueError(f'Data inválida em "{nome}": {valor}') from e
        convertidos[nome] = valor
    return convertidos


def _aplicar_campos(entidade, campos):
    """
    Copia para a entidade apenas os campos que são colunas do modelo.
    Tudo é convertido antes da primeira atribuição: um valor inválido não deixa a
    entidade alterada pela metade na sessão.
    """
    for nome, valor in _converter_campos(entidade, campos).items():
        setattr(entidade, nome, valor)


def _commit(tipo, acao, descricao):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Erro ao {acao} {tipo} ({descricao}): {e}")
        raise ErroPersistencia(f'Não foi possível {acao} o registro. Tente novamente.') from e
    current_app.logger.info(f"{tipo} {descricao}: {acao} concluído.")
    notificar_atualizacao(tipo, acao)


def carregar_colecoes():
    """Lê todas as coleções na ordem em que as abas as exibem."""
    return {
        'funcionarios': Usuario.query.order_by(Usuario.nome).all(),
        'cargos': Cargo.query.order_by(Cargo.created_at).all(),
        'freelancers': Freelancer.query.order_by(Freelancer.created_at).all(),
        'relatorios': RelatorioSemanal.query.order_by(RelatorioSemanal.data_inicio_semana.desc()).all(),
        'treinamentos': Treinamento.query.order_by(Treinamento.created_at).all(),
        'feedbacks': FeedbackCultura.query.order_by(FeedbackCultura.created_at).all(),
        'registros_assiduidade': RegistroAssiduidade.query.order_by(RegistroAssiduidade.data.desc()).all(),
    }


def obter(tipo, id):
    entidade = db.session.get(_modelo(tipo), id)
    if entidade is None:
        raise EntidadeNaoEncontrada(f'{tipo} {id} não encontrado.')
    return entidade


def adicionar(tipo, rascunho):
    entidade = _modelo(tipo)(id=str(uuid.uuid4()))
    _aplicar_campos(entidade, rascunho)
    db.session.add(entidade)
    _commit(tipo, 'adicionar', entidade.id)
    return entidade


def atualizar(tipo, id, campos):
    """Mescla `campos` sobre a entidade gravada; o resto fica como está."""
    entidade = obter(tipo, id)
    _aplicar_campos(entidade, campos)
    _commit(tipo, 'atualizar', id)
    return entidade


def remover(tipo, id):
    entidade = obter(tipo, id)
    db.session.delete(entidade)
    _commit(tipo, 'remover', id)


# --- Colaboradores ---

def foto_permitida(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in EXTENSOES_FOTO


def _validar_foto(foto):
    if foto and foto.filename and not foto_permitida(foto.filename):
        raise ValueError('Tipo de ficheiro não permitido. Apenas: png, jpg, jpeg, webp.')


def _salvar_foto(usuario, foto):
    if not foto or not foto.filename:
        return
    extensao = foto.filename.rsplit('.', 1)[1].lower()
    filename = secure_filename(f"{usuario.id}_{uuid.uuid4().hex[:8]}.{extensao}")
    foto.save(os.path.join(current_app.config['UPLOAD_FOLDER'], filename))
    usuario.foto_perfil = filename


def adicionar_funcionario(rascunho, senha, foto=None):
    _validar_foto(foto)
    if Usuario.query.filter_by(email=rascunho.get('email')).first():
        raise ValueError(f'O email "{rascunho.get("email")}" já está em uso.')
    usuario = Usuario(id=str(uuid.uuid4()))
    _aplicar_campos(usuario, rascunho)
    usuario.set_password(senha)
    _salvar_foto(usuario, foto)
    db.session.add(usuario)
    _commit('funcionario', 'adicionar', usuario.id)
    return usuario


def atualizar_funcionario(id, campos, foto=None):
    _validar_foto(foto)
    usuario = db.session.get(Usuario, id)
    if usuario is None:
        raise EntidadeNaoEncontrada(f'funcionario {id} não encontrado.')
    _aplicar_campos(usuario, {k: v for k, v in campos.items() if k != 'password_hash'})
    try:
        _salvar_foto(usuario, foto)
    except OSError:
        db.session.rollback()
        raise
    _commit('funcionario', 'atualizar', id)
    return usuario
