# election/routes/ec.py

from flask import Blueprint

from election.authentication.rbac import Permission, require_permission
from election.routes import json_body, optional_int_arg, page_params, paginated, success
from election.security.input_validator import validator
from election.services import candidate_service, constituency_service, party_service, stats_service

ec_bp = Blueprint('ec', __name__)


@ec_bp.route('/stats', methods=['GET'])
@require_permission(Permission.VIEW_EC_STATS)
def stats(identity):
    return success(stats_service.get_ec_stats())


# === Parties ===

@ec_bp.route('/parties', methods=['GET'])
@require_permission(Permission.MANAGE_PARTIES)
def list_parties(identity):
    return paginated(party_service.get_all(page_params()), lambda p: p.to_dict())


@ec_bp.route('/parties', methods=['POST'])
@require_permission(Permission.MANAGE_PARTIES)
def create_party(identity):
    payload = validator.validate_party(json_body())
    return success(party_service.create(payload).to_dict(), status=201)


@ec_bp.route('/parties/<id:party_id>', methods=['PUT'])
@require_permission(Permission.MANAGE_PARTIES)
def update_party(party_id, identity):
    payload = validator.validate_party_update(json_body())
    return success(party_service.update(party_id, payload).to_dict())


@ec_bp.route('/parties/<id:party_id>', methods=['DELETE'])
@require_permission(Permission.MANAGE_PARTIES)
def delete_party(party_id, identity):
    party_service.delete(party_id)
    return success(message='Party deleted')


# === Candidates ===

@ec_bp.route('/candidates', methods=['GET'])
@require_permission(Permission.MANAGE_CANDIDATES)
def list_candidates(identity):
    result = candidate_service.get_filtered(
        page_params(),
        constituency_id=optional_int_arg('constituencyId'),
        party_id=optional_int_arg('partyId'),
    )
    return paginated(result, lambda c: c.to_dict(include_constituency=True))


@ec_bp.route('/candidates', methods=['POST'])
@require_permission(Permission.MANAGE_CANDIDATES)
def create_candidate(identity):
    payload = validator.validate_candidate(json_body())
    candidate = candidate_service.create(payload)
    return success(candidate.to_dict(include_constituency=True), status=201)


@ec_bp.route('/candidates/<id:candidate_id>', methods=['PUT'])
@require_permission(Permission.MANAGE_CANDIDATES)
def update_candidate(candidate_id, identity):
    payload = validator.validate_candidate_update(json_body())
    candidate = candidate_service.update(candidate_id, payload)
    return success(candidate.to_dict(include_constituency=True))


@ec_bp.route('/candidates/<id:candidate_id>', methods=['DELETE'])
@require_permission(Permission.MANAGE_CANDIDATES)
def delete_candidate(candidate_id, identity):
    candidate_service.delete(candidate_id)
    return success(message='Candidate deleted')


# === Election control ===

@ec_bp.route('/control/constituencies', methods=['GET'])
@require_permission(Permission.CONTROL_POLLS)
def control_constituencies(identity):
    result = constituency_service.get_all(page_params(default_limit=50))
    return paginated(result, lambda c: c.to_dict())


@ec_bp.route('/control/open-all', methods=['POST'])
@require_permission(Permission.CONTROL_POLLS)
def open_all(identity):
    constituency_service.open_all_polls(actor_id=identity.user_id)
    return success(message='All polls are now open')


@ec_bp.route('/control/close-all', methods=['POST'])
@require_permission(Permission.CONTROL_POLLS)
def close_all(identity):
    constituency_service.close_all_polls(actor_id=identity.user_id)
    return success(message='All polls are now closed')


@ec_bp.route('/control/<id:constituency_id>', methods=['PATCH'])
@require_permission(Permission.CONTROL_POLLS)
def set_poll_status(constituency_id, identity):
    payload = validator.validate_poll_status(json_body())
    constituency = constituency_service.update_poll_status(
        constituency_id, payload.is_poll_open, actor_id=identity.user_id
    )
    return success(constituency.to_dict())
