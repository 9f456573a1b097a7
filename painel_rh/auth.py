# painel_rh/auth.py

from flask import Blueprint, render_template, redirect, url_for, flash, request, session, current_app
from .models import Usuario
from flask_login import login_user, logout_user, login_required, current_user

bp = Blueprint('auth', __name__)

@bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('rh.painel'))

    if request.method == 'POST':
        email = request.form.get('email')
        password = request.form.get('password')
        user = Usuario.query.filter_by(email=email).first()

        if user is None or not user.check_password(password):
            flash('Credenciais inválidas. Por favor, tente novamente.', 'danger')
            return redirect(url_for('auth.login'))

        if user.status != 'ativo':
            flash('O seu acesso está bloqueado. Fale com o RH.', 'danger')
            return redirect(url_for('auth.login'))

        login_user(user, remember=True)
        current_app.logger.info(f'Login de {user.email} (admin={user.is_admin}).')
        return redirect(url_for('rh.painel'))

    return render_template('auth/login.html')

@bp.route('/logout')
@login_required
def logout():
    logout_user()
    # O estado do painel e o rascunho semanal pertencem ao usuário que saiu
    session.pop('painel_rh', None)
    session.pop('formulario_semanal', None)
    flash('Você saiu da sua conta.', 'success')
    return redirect(url_for('auth.login'))
