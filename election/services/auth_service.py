# election/services/auth_service.py

from election import db
from election.audit.audit_logger import audit_event
from election.database.models import Constituency, Profile
from election.encryption.password_hashing import get_password_service
from election.errors import ConflictError, NotFoundError, UnauthorizedError
from election.security.token_manager import token_manager


def _session_user(profile):
    return {
        'id': profile.id,
        'email': profile.email,
        'fullName': profile.full_name,
        'role': profile.role,
        'constituencyId': profile.constituency_id,
    }


class AuthService:
    def register(self, payload):
        if Profile.query.filter_by(email=payload.email).first():
            raise ConflictError("This email is already in use")
        if Profile.query.filter_by(national_id=payload.national_id).first():
            raise ConflictError("This national ID is already registered")
        if payload.constituency_id is not None and db.session.get(Constituency, payload.constituency_id) is None:
            raise NotFoundError("Constituency not found")

        profile = Profile(
            email=payload.email,
            password=get_password_service().hash_password(payload.password),
            national_id=payload.national_id,
            full_name=payload.full_name,
            address=payload.address,
            constituency_id=payload.constituency_id,
        )
        db.session.add(profile)
        db.session.commit()
        audit_event('user_registered', {'email': profile.email}, profile.id)

        return {'token': token_manager.generate_token(profile), 'user': _session_user(profile)}

    def login(self, email, password, remote_addr=None):
        profile = Profile.query.filter_by(email=email).first()
        if not profile or not get_password_service().verify_password(password, profile.password):
            audit_event('failed_login', {'email': email, 'ip': remote_addr})
            raise UnauthorizedError("Invalid email or password")

        audit_event('successful_login', {'role': profile.role, 'ip': remote_addr}, profile.id)
        return {'token': token_manager.generate_token(profile), 'user': _session_user(profile)}

    def get_profile(self, user_id):
        profile = db.session.get(Profile, user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile


auth_service = AuthService()
