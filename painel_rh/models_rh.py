# painel_rh/models_rh.py

from datetime import datetime
from painel_rh import db
from painel_rh.models import BaseModel

# Identificador gravado no lugar do colaborador quando o feedback é anônimo
ANONIMO = 'anonymous'

TIPOS_ASSIDUIDADE = ('Falta', 'Atraso', 'Saída Antecipada', 'Presença')
STATUS_ASSIDUIDADE = ('Pendente', 'Justificada', 'Injustificada')
TIPOS_TREINAMENTO = ('Treinamento', 'Workshop', 'Curso', 'Mentoria')
FREQUENCIAS_USO = ('baixo', 'médio', 'alto')

class Cargo(BaseModel):
    __tablename__ = 'cargos'
    nome = db.Column(db.String(100), nullable=False)
    descricao = db.Column(db.Text, nullable=False, default='')
    # Lista ordenada de {"nome": str, "peso": float}; sem unicidade nem soma fixa
    kpis = db.Column(db.JSON, nullable=False, default=list)

    relatorios = db.relationship('RelatorioSemanal', backref='cargo', lazy='dynamic')

class Freelancer(BaseModel):
    __tablename__ = 'freelancers'
    nome = db.Column(db.String(100), nullable=False)
    funcao_principal = db.Column(db.String(100), nullable=False)
    avaliacao_media = db.Column(db.Integer, default=0)
    disponibilidade = db.Column(db.Text, default='Disponível')
    frequencia_uso = db.Column(db.String(10), default='baixo')
    projetos_associados = db.Column(db.JSON, nullable=False, default=list)

class RelatorioSemanal(BaseModel):
    __tablename__ = 'relatorios_semanais'
    funcionario_id = db.Column(db.String(36), db.ForeignKey('usuario.id'), nullable=False)
    cargo_id = db.Column(db.String(36), db.ForeignKey('cargos.id'), nullable=True)
    data_inicio_semana = db.Column(db.Date, nullable=False)
    data_fim_semana = db.Column(db.Date, nullable=False)

    # --- Produtividade ---
    projetos_trabalhados = db.Column(db.Text, nullable=False)
    horas_trabalhadas = db.Column(db.Integer, default=0)
    entregas_realizadas = db.Column(db.Integer, default=0)
    nivel_dificuldade = db.Column(db.Integer, default=3)

    # --- Qualidade e clima (1 a 5) ---
    autoavaliacao = db.Column(db.Integer, default=3)
    nivel_motivacao = db.Column(db.Integer, default=3)
    principais_desafios = db.Column(db.Text, default='')
    notas_melhoria = db.Column(db.Text, default='')

    confirmado = db.Column(db.Boolean, default=False)

class RegistroAssiduidade(BaseModel):
    __tablename__ = 'registros_assiduidade'
    funcionario_id = db.Column(db.String(36), db.ForeignKey('usuario.id'), nullable=False)
    data = db.Column(db.Date, nullable=False)
    tipo = db.Column(db.String(20), nullable=False, default='Falta')
    # Só faz sentido para Atraso e Saída Antecipada
    duracao_minutos = db.Column(db.Integer, default=0)
    motivo = db.Column(db.Text, default='')
    status = db.Column(db.String(20), default='Pendente')

class Treinamento(BaseModel):
    __tablename__ = 'treinamentos'
    titulo = db.Column(db.String(200), nullable=False)
    tipo = db.Column(db.String(20), nullable=False, default='Treinamento')
    data = db.Column(db.Date, nullable=False)
    # Vazio = sem vínculo específico
    funcionario_id = db.Column(db.String(36), db.ForeignKey('usuario.id'), nullable=True)
    nivel_impacto = db.Column(db.Integer, default=3)
    observacoes = db.Column(db.Text, default='')
    status = db.Column(db.String(20), nullable=True)

    funcionario = db.relationship('Usuario')

class FeedbackCultura(BaseModel):
    __tablename__ = 'feedbacks_cultura'
    # Sem chave estrangeira: pode conter o marcador ANONIMO
    funcionario_id = db.Column(db.String(36), nullable=False)
    anonimo = db.Column(db.Boolean, default=False)
    nota_satisfacao = db.Column(db.Integer, default=0)
    nota_motivacao = db.Column(db.Integer, default=0)
    texto_feedback = db.Column(db.Text, default='')
    data = db.Column(db.DateTime, default=datetime.utcnow)
