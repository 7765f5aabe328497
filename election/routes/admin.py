# election/routes/admin.py

from flask import Blueprint

from election.authentication.rbac import Permission, require_permission
from election.routes import json_body, page_params, paginated, success
from election.security.input_validator import validator
from election.services import constituency_service, stats_service, user_service

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/stats', methods=['GET'])
@require_permission(Permission.VIEW_ADMIN_STATS)
def stats(identity):
    return success(stats_service.get_admin_stats())


# === Constituencies ===

@admin_bp.route('/constituencies', methods=['GET'])
@require_permission(Permission.MANAGE_CONSTITUENCIES)
def list_constituencies(identity):
    result = constituency_service.get_all(page_params(default_limit=50))
    return paginated(result, lambda c: c.to_dict())


@admin_bp.route('/constituencies', methods=['POST'])
@require_permission(Permission.MANAGE_CONSTITUENCIES)
def create_constituency(identity):
    payload = validator.validate_constituency(json_body())
    constituency = constituency_service.create(payload)
    return success(constituency.to_dict(), status=201)


@admin_bp.route('/constituencies/<id:constituency_id>', methods=['DELETE'])
@require_permission(Permission.MANAGE_CONSTITUENCIES)
def delete_constituency(constituency_id, identity):
    constituency_service.delete(constituency_id)
    return success(message='Constituency deleted')


# === Users ===

@admin_bp.route('/users', methods=['GET'])
@require_permission(Permission.MANAGE_USERS)
def list_users(identity):
    result = user_service.get_all(page_params())
    return paginated(result, lambda u: u.to_dict(include_constituency=True))


@admin_bp.route('/users/<user_id>', methods=['GET'])
@require_permission(Permission.MANAGE_USERS)
def get_user(user_id, identity):
    return success(user_service.get_by_id(user_id).to_dict(include_constituency=True))


@admin_bp.route('/users/<user_id>', methods=['DELETE'])
@require_permission(Permission.MANAGE_USERS)
def delete_user(user_id, identity):
    user_service.delete(user_id, actor_id=identity.user_id)
    return success(message='User deleted')


@admin_bp.route('/users/<user_id>/role', methods=['GET'])
@require_permission(Permission.MANAGE_USERS)
def get_user_role(user_id, identity):
    profile = user_service.get_by_id(user_id)
    return success({'id': profile.id, 'role': profile.role})


@admin_bp.route('/users/<user_id>/role', methods=['PATCH'])
@require_permission(Permission.MANAGE_USERS)
def update_user_role(user_id, identity):
    payload = validator.validate_role(json_body())
    profile = user_service.update_role(user_id, payload.role, actor_id=identity.user_id)
    return success(profile.to_dict())
