# election/__init__.py

import logging
import os
from datetime import timedelta

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from werkzeug.middleware.proxy_fix import ProxyFix

from election.config import Config

db = SQLAlchemy()  # Database ORM
migrate = Migrate()  # DB migrations
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), 'database', 'migrations')


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(
        seconds=app.config['JWT_ACCESS_TOKEN_EXPIRES_SECONDS']
    )

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
    )

    # Fix proxy headers for HTTPS
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    CORS(
        app,
        resources={r'/api/*': {'origins': [app.config['FRONTEND_URL']]}},
        supports_credentials=True,
    )

    # Ensure model modules are imported so SQLAlchemy metadata is populated
    # before Flask-Migrate inspects it.
    from election.database import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    jwt.init_app(app)
    limiter.init_app(app)

    from election.audit.audit_logger import AuditLogger, load_signing_key
    from election.encryption.password_hashing import PasswordHashingService

    app.extensions['audit_logger'] = AuditLogger(
        log_dir=app.config['AUDIT_LOG_DIR'],
        signing_key=load_signing_key(app.config['AUDIT_SIGNING_KEY']),
    )
    app.extensions['password_hasher'] = PasswordHashingService(
        time_cost=app.config['PASSWORD_TIME_COST'],
        memory_cost=app.config['PASSWORD_MEMORY_COST'],
        parallelism=app.config['PASSWORD_PARALLELISM'],
        min_length=app.config['PASSWORD_MIN_LENGTH'],
    )

    from election.errors import register_error_handlers
    from election.security.token_manager import register_jwt_callbacks

    register_error_handlers(app)
    register_jwt_callbacks(jwt)

    from election.operations.health_monitor import health_bp
    from election.routes import IdConverter
    from election.routes.admin import admin_bp
    from election.routes.auth import auth_bp
    from election.routes.ec import ec_bp
    from election.routes.public import public_bp
    from election.routes.voter import voter_bp

    # Must precede blueprint registration; rules compile against the map's converters
    app.url_map.converters['id'] = IdConverter
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(ec_bp, url_prefix='/api/ec')
    app.register_blueprint(voter_bp, url_prefix='/api/voter')
    app.register_blueprint(public_bp, url_prefix='/api/public')

    from election.cli import register_commands

    register_commands(app)

    return app
