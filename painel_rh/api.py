# painel_rh/api.py

from flask import Blueprint, jsonify
from flask_login import login_required

from painel_rh import dados
from painel_rh.rh.calculos import resumo_desempenho, normalizar_data, autor_feedback

bp = Blueprint('api', __name__, url_prefix='/api')


@bp.route('/rh/desempenho')
@login_required
def dados_desempenho():
    """Resumo de desempenho do mês para os gráficos do painel."""
    colecoes = dados.carregar_colecoes()
    funcionarios = colecoes['funcionarios']
    resumo = resumo_desempenho(colecoes['relatorios'], funcionarios, colecoes['feedbacks'])

    ranking = {
        'labels': [e['funcionario'].nome for e in resumo['ranking']],
        'data': [e['entregas'] for e in resumo['ranking']],
    }
    destaque = resumo['destaque']

    return jsonify({
        "entregas_mes": resumo['entregas_mes'],
        "entregas_mes_anterior": resumo['entregas_mes_anterior'],
        "variacao_entregas": resumo['variacao_entregas'],
        "horas_mes": resumo['horas_mes'],
        "eficiencia": resumo['eficiencia'],
        "media_satisfacao": resumo['media_satisfacao'],
        "destaque": {'id': destaque.id, 'nome': destaque.nome, 'entregas': resumo['entregas_destaque']} if destaque else None,
        "ranking": ranking,
        "feedbacks_recentes": [
            {
                'autor': autor_feedback(f, funcionarios),
                'nota_satisfacao': f.nota_satisfacao,
                'texto': f.texto_feedback,
                'data': normalizar_data(f.data),
            } for f in resumo['feedbacks_recentes']
        ],
    })
