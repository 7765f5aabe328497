# election/services/party_service.py

from election import db
from election.database.models import Party
from election.database.pagination import PageParams, paginate
from election.errors import ConflictError, NotFoundError

DEFAULT_PARTY_COLOR = '#3B82F6'


class PartyService:
    def get_all(self, params=None):
        return paginate(Party.query.order_by(Party.name.asc()), params or PageParams())

    def get_by_id(self, party_id):
        party = db.session.get(Party, party_id)
        if party is None:
            raise NotFoundError("Party not found")
        return party

    def create(self, payload):
        if Party.query.filter_by(name=payload.name).first():
            raise ConflictError("A party with this name already exists")

        party = Party(
            name=payload.name,
            logo_url=payload.logo_url or '',
            policy=payload.policy or '',
            color=payload.color or DEFAULT_PARTY_COLOR,
        )
        db.session.add(party)
        db.session.commit()
        return party

    def update(self, party_id, payload):
        party = self.get_by_id(party_id)

        if payload.name:
            existing = Party.query.filter_by(name=payload.name).first()
            if existing and existing.id != party.id:
                raise ConflictError("A party with this name already exists")

        for field, value in payload.changes().items():
            setattr(party, field, value)
        db.session.commit()
        return party

    def delete(self, party_id):
        party = self.get_by_id(party_id)
        db.session.delete(party)
        db.session.commit()


party_service = PartyService()
