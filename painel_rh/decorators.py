# painel_rh/decorators.py

from functools import wraps
from flask import flash, redirect, url_for
from flask_login import current_user

def admin_required(f):
    """Restringe a rota a administradores do RH; os demais voltam para o painel com um aviso."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login'))

        if not current_user.is_admin:
            flash('Você não tem permissão para acessar esta área.', 'danger')
            return redirect(url_for('rh.painel'))

        return f(*args, **kwargs)
    return decorated_function
