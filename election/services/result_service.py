# election/services/result_service.py

from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from election import db
from election.database.models import Candidate, Constituency, Party, Profile, Vote


def _candidate_result(candidate: Candidate, vote_count: int) -> Dict:
    return {
        'candidateId': candidate.id,
        'candidateName': candidate.full_name,
        'candidateNumber': candidate.candidate_number,
        'partyId': candidate.party.id,
        'partyName': candidate.party.name,
        'partyColor': candidate.party.color,
        'voteCount': vote_count,
    }


def rank_constituency(constituency: Constituency, candidates: List[Candidate], counts: Dict[int, int]) -> Dict:
    """Tally one constituency.

    ``candidates`` must arrive in candidate-number order; the sort is stable,
    so equal vote counts keep that order.
    """
    ranked = [_candidate_result(c, counts.get(c.id, 0)) for c in candidates]
    ranked.sort(key=lambda r: r['voteCount'], reverse=True)
    return {
        'constituencyId': constituency.id,
        'province': constituency.province,
        'zoneNumber': constituency.zone_number,
        'isPollOpen': constituency.is_poll_open,
        'candidates': ranked,
        'totalVotes': sum(r['voteCount'] for r in ranked),
    }


def _percentage(part, whole, digits):
    if not whole:
        return 0
    return round(part / whole * 100, digits)


class ResultService:
    def _candidates_query(self):
        return Candidate.query.options(joinedload(Candidate.party)).order_by(
            Candidate.candidate_number.asc(), Candidate.id.asc()
        )

    def _vote_counts(self, constituency_id=None) -> Dict[int, int]:
        query = db.session.query(Vote.candidate_id, func.count(Vote.id)).group_by(Vote.candidate_id)
        if constituency_id is not None:
            query = query.filter(Vote.constituency_id == constituency_id)
        return {candidate_id: count for candidate_id, count in query.all()}

    def _rank_all(self, constituencies) -> List[Dict]:
        # Three batched reads regardless of how many constituencies exist
        by_constituency = defaultdict(list)
        for candidate in self._candidates_query().all():
            by_constituency[candidate.constituency_id].append(candidate)
        counts = self._vote_counts()
        return [rank_constituency(c, by_constituency[c.id], counts) for c in constituencies]

    def _all_constituencies(self):
        return Constituency.query.order_by(Constituency.province.asc(), Constituency.zone_number.asc()).all()

    def results_for_constituency(self, constituency_id) -> Optional[Dict]:
        constituency = db.session.get(Constituency, constituency_id)
        if constituency is None:
            return None
        candidates = self._candidates_query().filter(Candidate.constituency_id == constituency_id).all()
        return rank_constituency(constituency, candidates, self._vote_counts(constituency_id))

    def all_results(self) -> Dict:
        results = self._rank_all(self._all_constituencies())
        return {
            'constituencies': results,
            'totalVotes': db.session.query(func.count(Vote.id)).scalar() or 0,
        }

    def party_stats(self) -> List[Dict]:
        closed = [c for c in self._all_constituencies() if not c.is_poll_open]
        seats = defaultdict(int)
        # Only closed polls are counted; open ones are still in progress
        for result in self._rank_all(closed):
            if result['candidates']:
                seats[result['candidates'][0]['partyId']] += 1

        parties = Party.query.order_by(Party.name.asc()).all()
        return [
            {
                'id': p.id,
                'name': p.name,
                'logoUrl': p.logo_url,
                'color': p.color,
                'seats': seats.get(p.id, 0),
            }
            for p in parties
        ]

    def dashboard_stats(self) -> Dict:
        total_votes = db.session.query(func.count(Vote.id)).scalar() or 0
        total_voters = Profile.query.filter_by(role='voter').count()
        total_constituencies = Constituency.query.count()
        closed_constituencies = Constituency.query.filter_by(is_poll_open=False).count()

        return {
            'totalVotes': total_votes,
            'totalVoters': total_voters,
            'turnout': _percentage(total_votes, total_voters, 2),
            'countingProgress': _percentage(closed_constituencies, total_constituencies, 1),
            'partyStats': self.party_stats(),
        }


result_service = ResultService()
