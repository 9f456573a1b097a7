# tests/test_socket_events.py

from painel_rh import socketio
from painel_rh.socket_events import SALA_PAINEL, notificar_atualizacao


def test_cliente_anonimo_e_recusado(test_app, test_client):
    cliente = socketio.test_client(test_app, flask_test_client=test_client)
    assert not cliente.is_connected()

def test_cliente_autenticado_entra_so_na_sala_do_painel(test_app, cliente_colaborador, colaborador):
    cliente = socketio.test_client(test_app, flask_test_client=cliente_colaborador)
    assert cliente.is_connected()

    salas = socketio.server.manager.rooms['/']
    assert SALA_PAINEL in salas
    assert str(colaborador.id) not in salas

    notificar_atualizacao('freelancer', 'adicionar')
    recebidos = cliente.get_received()
    assert recebidos[0]['name'] == 'rh_atualizado'
    assert recebidos[0]['args'][0] == {'colecao': 'freelancer', 'acao': 'adicionar'}
    cliente.disconnect()
