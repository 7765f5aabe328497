# election/routes/voter.py

from flask import Blueprint, current_app

from election import limiter
from election.authentication.rbac import Permission, require_permission
from election.errors import InvalidStateError
from election.routes import json_body, page_params, paginated, success
from election.security.input_validator import validator
from election.services import auth_service, candidate_service, constituency_service, vote_service

voter_bp = Blueprint('voter', __name__)


def _vote_rate_limit():
    return current_app.config['VOTE_RATE_LIMIT']


def _home_constituency_id(identity):
    profile = auth_service.get_profile(identity.user_id)
    if not profile.constituency_id:
        raise InvalidStateError("You are not registered in a constituency")
    return profile.constituency_id


@voter_bp.route('/constituency', methods=['GET'])
@require_permission(Permission.VOTE)
def my_constituency(identity):
    constituency = constituency_service.get_by_id(_home_constituency_id(identity))
    return success(constituency.to_dict())


@voter_bp.route('/candidates', methods=['GET'])
@require_permission(Permission.VOTE)
def my_candidates(identity):
    result = candidate_service.get_by_constituency(_home_constituency_id(identity), page_params())
    return paginated(result, lambda c: c.to_dict())


@voter_bp.route('/vote', methods=['GET'])
@voter_bp.route('/my-vote', methods=['GET'])
@require_permission(Permission.VOTE)
def my_vote(identity):
    ballot = vote_service.get_my_vote(identity.user_id, _home_constituency_id(identity))
    return success(ballot.to_dict() if ballot else None)


@voter_bp.route('/vote', methods=['POST'])
@limiter.limit(_vote_rate_limit)
@require_permission(Permission.VOTE)
def cast_vote(identity):
    payload = validator.validate_vote(json_body())
    ballot = vote_service.cast_or_change_vote(
        identity.user_id, payload.candidate_id, _home_constituency_id(identity)
    )
    return success(ballot.to_dict(), message='Vote recorded', status=201)


@voter_bp.route('/vote', methods=['PUT'])
@limiter.limit(_vote_rate_limit)
@require_permission(Permission.VOTE)
def change_vote(identity):
    payload = validator.validate_vote(json_body())
    ballot = vote_service.change_vote(
        identity.user_id, payload.candidate_id, _home_constituency_id(identity)
    )
    return success(ballot.to_dict(), message='Vote changed')
