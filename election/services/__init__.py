from election.services.auth_service import auth_service
from election.services.candidate_service import candidate_service
from election.services.constituency_service import constituency_service
from election.services.party_service import party_service
from election.services.result_service import result_service
from election.services.stats_service import stats_service
from election.services.user_service import user_service
from election.services.vote_service import vote_service

__all__ = [
    'auth_service',
    'candidate_service',
    'constituency_service',
    'party_service',
    'result_service',
    'stats_service',
    'user_service',
    'vote_service',
]
