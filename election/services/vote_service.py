# election/services/vote_service.py

import logging

from sqlalchemy.exc import IntegrityError

from election import db
from election.audit.audit_logger import audit_event
from election.database.models import Candidate, Constituency, Vote, utcnow
from election.errors import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


class VoteService:
    """Casting and changing ballots.

    A voter holds at most one ballot per constituency. The
    ``uq_vote_voter_constituency`` constraint enforces that; this service
    never relies on a read-then-insert alone.
    """

    def find_ballot(self, voter_id, constituency_id):
        return Vote.query.filter_by(voter_id=voter_id, constituency_id=constituency_id).first()

    def get_my_vote(self, voter_id, constituency_id):
        return self.find_ballot(voter_id, constituency_id)

    def _open_constituency(self, constituency_id, closed_message):
        constituency = db.session.get(Constituency, constituency_id)
        if constituency is None:
            raise NotFoundError("Constituency not found")
        if not constituency.is_poll_open:
            raise InvalidStateError(closed_message)
        return constituency

    def _candidate_in(self, candidate_id, constituency_id):
        candidate = db.session.get(Candidate, candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate not found")
        if candidate.constituency_id != constituency_id:
            raise InvalidStateError("Candidate is not in your constituency")
        return candidate

    def _update_ballot(self, ballot, candidate_id):
        ballot.candidate_id = candidate_id
        ballot.timestamp = utcnow()
        db.session.commit()
        return ballot

    def cast_or_change_vote(self, voter_id, candidate_id, constituency_id):
        self._open_constituency(constituency_id, "The poll for this constituency is closed")
        self._candidate_in(candidate_id, constituency_id)

        ballot = self.find_ballot(voter_id, constituency_id)
        if ballot is not None:
            self._update_ballot(ballot, candidate_id)
            audit_event('vote_changed', {'constituency_id': constituency_id, 'vote_id': ballot.id}, voter_id)
            return ballot

        ballot = Vote(voter_id=voter_id, candidate_id=candidate_id, constituency_id=constituency_id)
        db.session.add(ballot)
        try:
            db.session.commit()
        except IntegrityError:
            # A concurrent request inserted this voter's ballot first
            db.session.rollback()
            logger.info("Ballot for voter %s in constituency %s already exists; updating",
                        voter_id, constituency_id)
            ballot = self.find_ballot(voter_id, constituency_id)
            if ballot is None:
                raise
            self._update_ballot(ballot, candidate_id)
            audit_event('vote_changed', {'constituency_id': constituency_id, 'vote_id': ballot.id}, voter_id)
            return ballot

        audit_event('vote_cast', {'constituency_id': constituency_id, 'vote_id': ballot.id}, voter_id)
        return ballot

    def change_vote(self, voter_id, candidate_id, constituency_id):
        self._open_constituency(constituency_id, "The poll for this constituency is closed; the vote cannot be changed")
        ballot = self.find_ballot(voter_id, constituency_id)
        if ballot is None:
            raise InvalidStateError("You have not voted yet")
        self._candidate_in(candidate_id, constituency_id)

        self._update_ballot(ballot, candidate_id)
        audit_event('vote_changed', {'constituency_id': constituency_id, 'vote_id': ballot.id}, voter_id)
        return ballot


vote_service = VoteService()
