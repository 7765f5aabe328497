# election/encryption/password_hashing.py

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError
from flask import current_app

# Password hashing and verification using Argon2id


class PasswordHashingService:
    def __init__(self, time_cost=3, memory_cost=65536, parallelism=4, min_length=6):
        self.min_length = min_length
        self.ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )

    def hash_password(self, password: str) -> str:
        if not self.is_acceptable_password(password):
            raise ValueError(f"Password must be at least {self.min_length} characters")
        try:
            return self.ph.hash(password)
        except HashingError as e:
            raise ValueError(f"Password hashing failed: {str(e)}")

    def verify_password(self, password: str, hash_value: str) -> bool:
        try:
            return self.ph.verify(hash_value, password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hash_value: str) -> bool:
        return self.ph.check_needs_rehash(hash_value)

    def is_acceptable_password(self, password) -> bool:
        return isinstance(password, str) and len(password) >= self.min_length


def get_password_service() -> PasswordHashingService:
    return current_app.extensions['password_hasher']
