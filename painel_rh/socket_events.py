# painel_rh/socket_events.py

from flask_socketio import join_room
from flask_login import current_user
from flask import request, current_app
from . import socketio

# Todos os painéis abertos entram nesta sala e recebem os avisos de alteração
SALA_PAINEL = 'painel_rh'

@socketio.on('connect')
def handle_connect():
    if not current_user.is_authenticated:
        current_app.logger.info(f'Cliente não autenticado (SID: {request.sid}) tentou conectar.')
        return False  # Rejeita a conexão

    join_room(SALA_PAINEL)
    current_app.logger.info(f'Cliente {current_user.nome} (SID: {request.sid}) conectado ao painel.')

@socketio.on('disconnect')
def handle_disconnect():
    current_app.logger.info(f'Cliente desconectado (SID: {request.sid}).')

def notificar_atualizacao(colecao, acao):
    """Avisa os painéis abertos que uma coleção mudou, para recarregarem a aba."""
    socketio.emit('rh_atualizado', {'colecao': colecao, 'acao': acao}, room=SALA_PAINEL)
