# election/security/token_manager.py
import logging

from flask_jwt_extended import create_access_token

from election.errors import error_response

logger = logging.getLogger(__name__)


# Signed access tokens carrying the profile id (sub) plus email and role claims
class TokenManager:
    def generate_token(self, profile) -> str:
        return create_access_token(
            identity=str(profile.id),
            additional_claims={'email': profile.email, 'role': profile.role},
        )


token_manager = TokenManager()


def register_jwt_callbacks(jwt):
    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return error_response("Please log in", 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        logger.info("Rejected bearer token: %s", reason)
        return error_response("Invalid or expired token", 401)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response("Invalid or expired token", 401)
