# election/routes/public.py

from flask import Blueprint, request

from election.routes import optional_int_arg, page_params, paginated, success
from election.services import constituency_service, party_service, result_service

# No authentication required for public routes
public_bp = Blueprint('public', __name__)


@public_bp.route('/results', methods=['GET'])
def results():
    constituency_id = optional_int_arg('constituencyId')
    if constituency_id:
        return success(result_service.results_for_constituency(constituency_id))
    return success(result_service.all_results())


@public_bp.route('/parties', methods=['GET'])
def parties():
    return paginated(party_service.get_all(page_params()), lambda p: p.to_dict())


@public_bp.route('/constituencies', methods=['GET'])
def constituencies():
    result = constituency_service.get_all(page_params(default_limit=50), province=request.args.get('province'))
    return paginated(result, lambda c: c.to_dict())


@public_bp.route('/stats', methods=['GET'])
def stats():
    return success(result_service.dashboard_stats())
