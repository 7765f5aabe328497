# election/services/stats_service.py

from sqlalchemy import distinct, func

from election import db
from election.database.models import Candidate, Constituency, Party, Profile, Vote


class StatsService:
    def get_admin_stats(self):
        return {
            'totalVoters': Profile.query.filter_by(role='voter').count(),
            'totalConstituencies': Constituency.query.count(),
            'totalOfficers': Profile.query.filter(Profile.role.in_(['admin', 'ec'])).count(),
        }

    def get_ec_stats(self):
        total_voters = Profile.query.filter_by(role='voter').count()
        # Distinct voters, not ballots: one voter may hold ballots in several constituencies
        voted_count = db.session.query(func.count(distinct(Vote.voter_id))).scalar() or 0
        voted_percentage = round(voted_count / total_voters * 100, 1) if total_voters > 0 else 0

        return {
            'totalParties': Party.query.count(),
            'totalCandidates': Candidate.query.count(),
            'votedCount': voted_count,
            'votedPercentage': voted_percentage,
        }


stats_service = StatsService()
