# painel_rh/__init__.py

from flask import Flask, redirect, url_for
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager, current_user
from flask_migrate import Migrate
from flask_socketio import SocketIO
from .config import Config
import logging
import os

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(cors_allowed_origins="*")

def create_app(config_class=Config):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Uploads (fotos de perfil) ficam dentro da pasta instance por padrão
    if not app.config.get('UPLOAD_FOLDER'):
        app.config['UPLOAD_FOLDER'] = os.path.join(app.instance_path, 'uploads')
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    app.logger.setLevel(getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO))

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    socketio.init_app(app)

    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Por favor, faça login para aceder a esta página.'
    login_manager.login_message_category = 'info'

    @login_manager.user_loader
    def load_user(user_id):
        # Import local para evitar importação circular
        from .models import Usuario
        return db.session.get(Usuario, user_id)

    # --- Registrar Blueprints ---
    from . import auth
    app.register_blueprint(auth.bp)

    from .rh import routes as rh_routes
    app.register_blueprint(rh_routes.rh)

    from . import api
    app.register_blueprint(api.bp)

    # Eventos de Socket.IO
    from . import socket_events

    @app.route('/')
    def index():
        """Redireciona a raiz para o painel (ou para o login)."""
        if current_user.is_authenticated:
            return redirect(url_for('rh.painel'))
        return redirect(url_for('auth.login'))

    return app
