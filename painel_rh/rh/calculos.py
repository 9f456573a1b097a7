# painel_rh/rh/calculos.py

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
import math

from painel_rh.models_rh import ANONIMO

TODOS = 'todos'
TIPOS_COM_DURACAO = ('Atraso', 'Saída Antecipada')

# --- FUNÇÕES AUXILIARES DE DATA ---
def normalizar_data(valor):
    """Devolve a data no formato YYYY-MM-DD (aceita date, datetime ou texto ISO)."""
    if not valor:
        return ''
    if isinstance(valor, (date, datetime)):
        return valor.strftime('%Y-%m-%d')
    return str(valor).split('T')[0][:10]

def _como_data(valor):
    texto = normalizar_data(valor)
    return date.fromisoformat(texto) if texto else None

def _mes_anterior(ano, mes):
    if mes == 1:
        return ano - 1, 12
    return ano, mes - 1

def arredondar(valor, casas):
    """Arredonda com o meio para cima (2.25 -> 2.3), como toFixed na interface."""
    quantum = Decimal(1).scaleb(-casas)
    return float(Decimal(str(valor)).quantize(quantum, rounding=ROUND_HALF_UP))

def _contem(valor, termo):
    # Campo nulo nunca casa com um termo preenchido
    return termo in (valor or '').lower()

# --- COLABORADORES E FREELANCERS ---
def filtrar_colaboradores(funcionarios, termo):
    termo = (termo or '').lower()
    return [f for f in funcionarios
            if _contem(f.nome, termo) or _contem(f.cargo, termo) or _contem(f.departamento, termo)]

def filtrar_freelancers(freelancers, termo):
    termo = (termo or '').lower()
    return [f for f in freelancers if _contem(f.nome, termo) or _contem(f.funcao_principal, termo)]

# --- RELATÓRIOS SEMANAIS ---
def relatorios_do_colaborador(relatorios, funcionario_id):
    return [r for r in relatorios if r.funcionario_id == funcionario_id]

def filtrar_relatorios(relatorios, funcionario_id=TODOS, data=''):
    """
    Filtro da aba de relatórios gerais: colaborador exato (ou todos) e data de
    início igual à data informada. O resultado vem do mais recente ao mais antigo.
    """
    data_filtro = normalizar_data(data)
    filtrados = [
        r for r in relatorios
        if (not funcionario_id or funcionario_id == TODOS or r.funcionario_id == funcionario_id)
        and (not data_filtro or normalizar_data(r.data_inicio_semana) == data_filtro)
    ]
    return sorted(filtrados, key=lambda r: normalizar_data(r.data_inicio_semana), reverse=True)

def totais_relatorios(relatorios):
    total_horas = sum(r.horas_trabalhadas or 0 for r in relatorios)
    total_entregas = sum(r.entregas_realizadas or 0 for r in relatorios)
    media = 0
    if relatorios:
        media = arredondar(sum(r.autoavaliacao or 0 for r in relatorios) / len(relatorios), 1)
    return {
        "horas": total_horas,
        "entregas": total_entregas,
        "media_autoavaliacao": media,
    }

# --- DESEMPENHO ---
def relatorios_do_mes(relatorios, ano, mes):
    resultado = []
    for r in relatorios:
        inicio = _como_data(r.data_inicio_semana)
        if inicio and inicio.year == ano and inicio.month == mes:
            resultado.append(r)
    return resultado

def variacao_entregas(total_atual, total_anterior):
    """Variação percentual mês a mês, arredondada como Math.round (meio para cima)."""
    if total_anterior == 0:
        return 0
    return math.floor((total_atual - total_anterior) / total_anterior * 100 + 0.5)

def calcular_eficiencia(entregas, horas):
    """Entregas por hora com duas casas; zero quando não há horas."""
    if horas == 0:
        return 0
    return arredondar(entregas / horas, 2)

def media_satisfacao(feedbacks):
    if not feedbacks:
        return 0
    return arredondar(sum(f.nota_satisfacao or 0 for f in feedbacks) / len(feedbacks), 1)

def ranking_entregas(funcionarios, relatorios_mes):
    """Entregas do mês por colaborador, da maior para a menor; empates mantêm a ordem recebida."""
    estatisticas = []
    for funcionario in funcionarios:
        entregas = sum(r.entregas_realizadas or 0
                       for r in relatorios_mes if r.funcionario_id == funcionario.id)
        estatisticas.append({"funcionario": funcionario, "entregas": entregas})
    # sorted é estável
    return sorted(estatisticas, key=lambda e: e["entregas"], reverse=True)

def resumo_desempenho(relatorios, funcionarios, feedbacks, hoje=None):
    if hoje is None:
        hoje = date.today()
    ano_anterior, mes_anterior = _mes_anterior(hoje.year, hoje.month)

    deste_mes = relatorios_do_mes(relatorios, hoje.year, hoje.month)
    do_mes_anterior = relatorios_do_mes(relatorios, ano_anterior, mes_anterior)

    entregas_mes = sum(r.entregas_realizadas or 0 for r in deste_mes)
    entregas_anterior = sum(r.entregas_realizadas or 0 for r in do_mes_anterior)
    horas_mes = sum(r.horas_trabalhadas or 0 for r in deste_mes)

    ranking = ranking_entregas(funcionarios, deste_mes)
    destaque = ranking[0] if ranking else None

    return {
        "entregas_mes": entregas_mes,
        "entregas_mes_anterior": entregas_anterior,
        "variacao_entregas": variacao_entregas(entregas_mes, entregas_anterior),
        "horas_mes": horas_mes,
        "eficiencia": calcular_eficiencia(entregas_mes, horas_mes),
        "media_satisfacao": media_satisfacao(feedbacks),
        "ranking": ranking,
        "destaque": destaque["funcionario"] if destaque else None,
        "entregas_destaque": destaque["entregas"] if destaque else 0,
        # Sem reordenação: os cinco primeiros na ordem recebida
        "feedbacks_recentes": list(feedbacks[:5]),
    }

# --- ASSIDUIDADE ---
def estatisticas_assiduidade(funcionario_id, registros):
    do_funcionario = [r for r in registros if r.funcionario_id == funcionario_id]
    return {
        "faltas": sum(1 for r in do_funcionario if r.tipo == 'Falta'),
        "atrasos": sum(1 for r in do_funcionario if r.tipo == 'Atraso'),
        # Primeiro da lista recebida, sem ordenar por data
        "ultimo_registro": do_funcionario[0] if do_funcionario else None,
    }

def painel_assiduidade(funcionarios, registros):
    return [{"funcionario": f, **estatisticas_assiduidade(f.id, registros)} for f in funcionarios]

def registros_recentes(registros, limite=6):
    return list(registros[:limite])

def exibe_duracao(tipo):
    return tipo in TIPOS_COM_DURACAO

# --- CAPACITAÇÃO E CULTURA ---
def rotulo_status_treinamento(treinamento):
    return treinamento.status or 'Agendado'

def treinamento_concluido(treinamento):
    return treinamento.status == 'Concluído'

def nome_por_id(funcionarios, funcionario_id, padrao='Desconhecido'):
    for f in funcionarios:
        if f.id == funcionario_id:
            return f.nome
    return padrao

def autor_feedback(feedback, funcionarios, padrao='Desconhecido'):
    if feedback.anonimo or feedback.funcionario_id == ANONIMO:
        return 'Anônimo'
    return nome_por_id(funcionarios, feedback.funcionario_id, padrao)
