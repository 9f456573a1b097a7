# tests/conftest.py

import pytest

from painel_rh import create_app, db
from painel_rh.config import TestConfig
from painel_rh.models import Usuario

SENHA_PADRAO = 'senha123'


@pytest.fixture(scope='function')
def test_app(tmp_path):
    """
    Cria uma instância da aplicação Flask para cada teste, garantindo isolamento total.
    O banco é SQLite em memória e as fotos vão para uma pasta temporária.
    """
    class ConfigTeste(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(ConfigTeste)

    with app.app_context():
        db.create_all()
        yield app  # Fornece a instância da app para o teste
        db.session.remove()
        db.drop_all()  # Limpa a base de dados depois do teste


@pytest.fixture(scope='function')
def test_client(test_app):
    """
    Cria um cliente de teste para simular requisições HTTP para cada teste.
    """
    return test_app.test_client()


def _criar_usuario(email, nome, is_admin=False, senha=SENHA_PADRAO, **campos):
    campos.setdefault('cargo', 'Analista')
    user = Usuario(email=email, nome=nome, is_admin=is_admin, **campos)
    user.set_password(senha)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin(test_app):
    return _criar_usuario('admin@test.com', 'Ana Admin', is_admin=True, departamento='RH')


@pytest.fixture
def colaborador(test_app):
    return _criar_usuario('colab@test.com', 'Bruno Colaborador', departamento='Engenharia')


def _entrar(client, email, senha=SENHA_PADRAO):
    return client.post('/login', data={'email': email, 'password': senha}, follow_redirects=True)


@pytest.fixture
def cliente_admin(test_client, admin):
    _entrar(test_client, admin.email)
    return test_client


@pytest.fixture
def cliente_colaborador(test_client, colaborador):
    _entrar(test_client, colaborador.email)
    return test_client


@pytest.fixture
def criar_usuario(test_app):
    """Fábrica de usuários extra além de `admin` e `colaborador`."""
    return _criar_usuario


@pytest.fixture
def entrar():
    return _entrar
