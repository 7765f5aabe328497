# election/services/user_service.py

from sqlalchemy.orm import joinedload

from election import db
from election.audit.audit_logger import audit_event
from election.database.models import Profile
from election.database.pagination import PageParams, paginate
from election.errors import NotFoundError


class UserService:
    def get_all(self, params=None):
        query = Profile.query.options(joinedload(Profile.constituency)).order_by(Profile.created_at.desc())
        return paginate(query, params or PageParams())

    def get_by_id(self, user_id):
        profile = db.session.get(Profile, user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def update_role(self, user_id, role, actor_id=None):
        profile = self.get_by_id(user_id)
        previous = profile.role
        profile.role = role
        db.session.commit()
        audit_event('role_changed', {'target_id': user_id, 'from': previous, 'to': role}, actor_id)
        return profile

    def delete(self, user_id, actor_id=None):
        profile = self.get_by_id(user_id)
        db.session.delete(profile)
        db.session.commit()
        audit_event('user_deleted', {'target_id': user_id}, actor_id)


user_service = UserService()
