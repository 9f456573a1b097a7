"""Criação inicial das tabelas do painel de RH

Revision ID: 9c1f2a7d3e10
Revises: 
Create Date: 2026-10-18 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9c1f2a7d3e10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # 1. Tabelas sem dependências
    op.create_table('usuario',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('nome', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('cargo', sa.String(length=100), nullable=False),
        sa.Column('departamento', sa.String(length=100), nullable=True),
        sa.Column('tipo_contrato', sa.String(length=30), nullable=True),
        sa.Column('data_admissao', sa.Date(), nullable=True),
        sa.Column('foto_perfil', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('cargos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('nome', sa.String(length=100), nullable=False),
        sa.Column('descricao', sa.Text(), nullable=False),
        sa.Column('kpis', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('freelancers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('nome', sa.String(length=100), nullable=False),
        sa.Column('funcao_principal', sa.String(length=100), nullable=False),
        sa.Column('avaliacao_media', sa.Integer(), nullable=True),
        sa.Column('disponibilidade', sa.Text(), nullable=True),
        sa.Column('frequencia_uso', sa.String(length=10), nullable=True),
        sa.Column('projetos_associados', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('feedbacks_cultura',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('funcionario_id', sa.String(length=36), nullable=False),
        sa.Column('anonimo', sa.Boolean(), nullable=True),
        sa.Column('nota_satisfacao', sa.Integer(), nullable=True),
        sa.Column('nota_motivacao', sa.Integer(), nullable=True),
        sa.Column('texto_feedback', sa.Text(), nullable=True),
        sa.Column('data', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # 2. Tabelas que dependem de 'usuario' e 'cargos'
    op.create_table('relatorios_semanais',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('funcionario_id', sa.String(length=36), nullable=False),
        sa.Column('cargo_id', sa.String(length=36), nullable=True),
        sa.Column('data_inicio_semana', sa.Date(), nullable=False),
        sa.Column('data_fim_semana', sa.Date(), nullable=False),
        sa.Column('projetos_trabalhados', sa.Text(), nullable=False),
        sa.Column('horas_trabalhadas', sa.Integer(), nullable=True),
        sa.Column('entregas_realizadas', sa.Integer(), nullable=True),
        sa.Column('nivel_dificuldade', sa.Integer(), nullable=True),
        sa.Column('autoavaliacao', sa.Integer(), nullable=True),
        sa.Column('nivel_motivacao', sa.Integer(), nullable=True),
        sa.Column('principais_desafios', sa.Text(), nullable=True),
        sa.Column('notas_melhoria', sa.Text(), nullable=True),
        sa.Column('confirmado', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['cargo_id'], ['cargos.id'], ),
        sa.ForeignKeyConstraint(['funcionario_id'], ['usuario.id'], ),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('registros_assiduidade',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('funcionario_id', sa.String(length=36), nullable=False),
        sa.Column('data', sa.Date(), nullable=False),
        sa.Column('tipo', sa.String(length=20), nullable=False),
        sa.Column('duracao_minutos', sa.Integer(), nullable=True),
        sa.Column('motivo', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['funcionario_id'], ['usuario.id'], ),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('treinamentos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('titulo', sa.String(length=200), nullable=False),
        sa.Column('tipo', sa.String(length=20), nullable=False),
        sa.Column('data', sa.Date(), nullable=False),
        sa.Column('funcionario_id', sa.String(length=36), nullable=True),
        sa.Column('nivel_impacto', sa.Integer(), nullable=True),
        sa.Column('observacoes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['funcionario_id'], ['usuario.id'], ),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    # Ordem inversa
    op.drop_table('treinamentos')
    op.drop_table('registros_assiduidade')
    op.drop_table('relatorios_semanais')
    op.drop_table('feedbacks_cultura')
    op.drop_table('freelancers')
    op.drop_table('cargos')
    op.drop_table('usuario')
