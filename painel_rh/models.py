# painel_rh/models.py

from . import db
from datetime import datetime
from flask import url_for
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
import uuid

def _novo_id():
    return str(uuid.uuid4())

# Classe base: id opaco (UUID em texto) e timestamps automáticos
class BaseModel(db.Model):
    __abstract__ = True
    id = db.Column(db.String(36), primary_key=True, default=_novo_id)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class Usuario(UserMixin, BaseModel):
    """Colaborador da empresa. Também é o usuário que faz login no painel."""
    __tablename__ = 'usuario'
    nome = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(20), default='ativo')

    # Cargo/função exibido no cartão do colaborador
    cargo = db.Column(db.String(100), nullable=False, default='')
    departamento = db.Column(db.String(100), nullable=True)
    tipo_contrato = db.Column(db.String(30), nullable=True)
    data_admissao = db.Column(db.Date, nullable=True)
    foto_perfil = db.Column(db.String(255), nullable=True)

    relatorios = db.relationship('RelatorioSemanal', backref='funcionario', lazy='dynamic',
                                 cascade="all, delete-orphan")
    registros_assiduidade = db.relationship('RegistroAssiduidade', backref='funcionario', lazy='dynamic',
                                            cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method='scrypt')

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def avatar_url(self):
        # Sem foto o template mostra a inicial do nome
        if self.foto_perfil:
            return url_for('rh.uploaded_file', filename=self.foto_perfil)
        return None
