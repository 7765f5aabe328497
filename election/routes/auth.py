# election/routes/auth.py

from flask import Blueprint, current_app, request

from election import limiter
from election.authentication.rbac import require_auth
from election.routes import json_body, success
from election.security.input_validator import validator
from election.services import auth_service

auth_bp = Blueprint('auth', __name__)


def _auth_rate_limit():
    return current_app.config['AUTH_RATE_LIMIT']


@auth_bp.route('/register', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def register():
    payload = validator.validate_register(json_body())
    return success(auth_service.register(payload), status=201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def login():
    payload = validator.validate_login(json_body())
    return success(auth_service.login(payload.email, payload.password, request.remote_addr))


@auth_bp.route('/me', methods=['GET'])
@require_auth
def me(identity):
    profile = auth_service.get_profile(identity.user_id)
    return success(profile.to_dict(include_constituency=True))


# Tokens are stateless; the client discards its copy
@auth_bp.route('/logout', methods=['POST'])
def logout():
    return success(message='Logged out successfully')
