# election/services/candidate_service.py

from sqlalchemy.orm import joinedload

from election import db
from election.database.models import Candidate, Constituency, Party, Profile
from election.database.pagination import PageParams, paginate
from election.errors import InvalidStateError, NotFoundError


class CandidateService:
    def _query(self):
        return Candidate.query.options(
            joinedload(Candidate.party), joinedload(Candidate.constituency)
        ).order_by(Candidate.candidate_number.asc(), Candidate.id.asc())

    def get_filtered(self, params=None, constituency_id=None, party_id=None):
        query = self._query()
        if constituency_id:
            query = query.filter(Candidate.constituency_id == constituency_id)
        if party_id:
            query = query.filter(Candidate.party_id == party_id)
        return paginate(query, params or PageParams())

    def get_by_constituency(self, constituency_id, params=None):
        return self.get_filtered(params, constituency_id=constituency_id)

    def get_by_id(self, candidate_id):
        candidate = db.session.get(Candidate, candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate not found")
        return candidate

    def create(self, payload):
        # Election commissioners may not stand for election
        existing_user = Profile.query.filter_by(national_id=payload.national_id).first()
        if existing_user and existing_user.role == 'ec':
            raise InvalidStateError("Election commission members cannot stand as candidates")

        if db.session.get(Party, payload.party_id) is None:
            raise NotFoundError("Selected party not found")
        if db.session.get(Constituency, payload.constituency_id) is None:
            raise NotFoundError("Selected constituency not found")

        candidate = Candidate(
            first_name=payload.first_name,
            last_name=payload.last_name,
            candidate_number=payload.candidate_number,
            image_url=payload.image_url or '',
            personal_policy=payload.personal_policy or '',
            party_id=payload.party_id,
            constituency_id=payload.constituency_id,
            national_id=payload.national_id,
        )
        db.session.add(candidate)
        db.session.commit()
        return candidate

    def update(self, candidate_id, payload):
        candidate = self.get_by_id(candidate_id)
        if payload.party_id is not None and db.session.get(Party, payload.party_id) is None:
            raise NotFoundError("Selected party not found")

        for field, value in payload.changes().items():
            setattr(candidate, field, value)
        db.session.commit()
        return candidate

    def delete(self, candidate_id):
        candidate = self.get_by_id(candidate_id)
        db.session.delete(candidate)
        db.session.commit()


candidate_service = CandidateService()
