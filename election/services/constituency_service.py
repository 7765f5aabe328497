# election/services/constituency_service.py

from election import db
from election.audit.audit_logger import audit_event
from election.database.models import Constituency
from election.database.pagination import PageParams, paginate
from election.errors import ConflictError, NotFoundError


class ConstituencyService:
    def get_all(self, params=None, province=None):
        query = Constituency.query
        if province:
            query = query.filter(Constituency.province == province)
        query = query.order_by(Constituency.province.asc(), Constituency.zone_number.asc())
        return paginate(query, params or PageParams(limit=50))

    def get_by_id(self, constituency_id):
        constituency = db.session.get(Constituency, constituency_id)
        if constituency is None:
            raise NotFoundError("Constituency not found")
        return constituency

    def create(self, payload):
        existing = Constituency.query.filter_by(
            province=payload.province, zone_number=payload.zone_number
        ).first()
        if existing:
            raise ConflictError("This constituency already exists")

        constituency = Constituency(province=payload.province, zone_number=payload.zone_number)
        db.session.add(constituency)
        db.session.commit()
        return constituency

    def update_poll_status(self, constituency_id, is_poll_open, actor_id=None):
        constituency = self.get_by_id(constituency_id)
        constituency.is_poll_open = is_poll_open
        db.session.commit()
        audit_event('poll_status_changed',
                    {'constituency_id': constituency_id, 'is_poll_open': is_poll_open}, actor_id)
        return constituency

    def set_all_polls(self, is_poll_open, actor_id=None):
        updated = Constituency.query.update({Constituency.is_poll_open: is_poll_open})
        db.session.commit()
        audit_event('all_polls_changed', {'is_poll_open': is_poll_open, 'count': updated}, actor_id)
        return updated

    def open_all_polls(self, actor_id=None):
        return self.set_all_polls(True, actor_id)

    def close_all_polls(self, actor_id=None):
        return self.set_all_polls(False, actor_id)

    def delete(self, constituency_id):
        constituency = self.get_by_id(constituency_id)
        db.session.delete(constituency)
        db.session.commit()


constituency_service = ConstituencyService()
