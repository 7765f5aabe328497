# election/security/input_validator.py

import re
import html
import bleach
from dataclasses import dataclass
from typing import Optional

from election.errors import ValidationError

# Input validation and sanitization. Every request body is turned into one
# declared payload type here; camelCase -> snake_case happens only in this module.

ROLES = ('admin', 'ec', 'voter')

# Largest value an INTEGER column holds
MAX_INTEGER = 2 ** 31 - 1


@dataclass
class RegisterPayload:
    email: str
    password: str
    national_id: str
    full_name: str
    address: str
    constituency_id: Optional[int] = None


@dataclass
class LoginPayload:
    email: str
    password: str


@dataclass
class ConstituencyPayload:
    province: str
    zone_number: int


@dataclass
class PartyPayload:
    name: str
    logo_url: Optional[str] = None
    policy: Optional[str] = None
    color: Optional[str] = None


@dataclass
class PartyUpdatePayload:
    name: Optional[str] = None
    logo_url: Optional[str] = None
    policy: Optional[str] = None
    color: Optional[str] = None

    def changes(self):
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass
class CandidatePayload:
    first_name: str
    last_name: str
    candidate_number: int
    party_id: int
    constituency_id: int
    national_id: str
    image_url: Optional[str] = None
    personal_policy: Optional[str] = None


@dataclass
class CandidateUpdatePayload:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    candidate_number: Optional[int] = None
    image_url: Optional[str] = None
    personal_policy: Optional[str] = None
    party_id: Optional[int] = None

    def changes(self):
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass
class VotePayload:
    candidate_id: int


@dataclass
class RolePayload:
    role: str


@dataclass
class PollStatusPayload:
    is_poll_open: bool


class InputValidator:
    def __init__(self):
        self.allowed_html_tags = set()
        self.allowed_html_attributes = {}

        self.patterns = {
            'email': re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'),
            'color': re.compile(r'^#[0-9a-fA-F]{3,8}$'),
            'xss_script': re.compile(r'<script[^>]*>.*?</script>', re.IGNORECASE | re.DOTALL),
            'xss_event': re.compile(r'\bon\w+\s*=', re.IGNORECASE)
        }

    def sanitize_string(self, input_str, max_length=255):
        if not isinstance(input_str, str):
            raise ValidationError("Input must be a string")
        if len(input_str) > max_length:
            input_str = input_str[:max_length]

        sanitized = re.sub(self.patterns['xss_script'], '', input_str)
        sanitized = re.sub(self.patterns['xss_event'], '', sanitized)
        sanitized = bleach.clean(sanitized, tags=self.allowed_html_tags, attributes=self.allowed_html_attributes, strip=True)
        # bleach escapes entities; store plain text
        return html.unescape(sanitized).strip()

    def validate_email(self, email):
        return isinstance(email, str) and bool(self.patterns['email'].match(email))

    # -- field helpers -------------------------------------------------

    def _body(self, data):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _required_text(self, data, key, message, max_length=255):
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(message)
        value = self.sanitize_string(value, max_length)
        if not value:
            raise ValidationError(message)
        return value

    def _optional_text(self, data, key, max_length=2000):
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        return self.sanitize_string(value, max_length)

    def _integer(self, data, key, message, minimum=None, required=True):
        value = data.get(key)
        if value is None and not required:
            return None
        # bool is an int subclass but never a valid id/number here
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(message)
        if minimum is not None and value < minimum:
            raise ValidationError(message)
        if value > MAX_INTEGER:
            raise ValidationError(message)
        return value

    def _national_id(self, data, key='nationalId'):
        value = data.get(key)
        if not isinstance(value, str) or len(value.strip()) != 13:
            raise ValidationError("National ID must be exactly 13 characters")
        return value.strip()

    def _color(self, data):
        value = self._optional_text(data, 'color', 20)
        if value is not None and not self.patterns['color'].match(value):
            raise ValidationError("Color must be a hex value such as #3B82F6")
        return value

    # -- payloads ------------------------------------------------------

    def validate_register(self, data):
        data = self._body(data)
        email = data.get('email')
        if not self.validate_email(email):
            raise ValidationError("Invalid email format")
        password = data.get('password')
        if not isinstance(password, str) or len(password) < 6:
            raise ValidationError("Password must be at least 6 characters")
        return RegisterPayload(
            email=email.strip().lower(),
            password=password,
            national_id=self._national_id(data),
            full_name=self._required_text(data, 'fullName', "Full name is required", 200),
            address=self._required_text(data, 'address', "Address is required", 1000),
            constituency_id=self._integer(
                data, 'constituencyId', "Constituency id must be a number", required=False
            ),
        )

    def validate_login(self, data):
        data = self._body(data)
        email = data.get('email')
        if not self.validate_email(email):
            raise ValidationError("Invalid email format")
        password = data.get('password')
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required")
        return LoginPayload(email=email.strip().lower(), password=password)

    def validate_constituency(self, data):
        data = self._body(data)
        return ConstituencyPayload(
            province=self._required_text(data, 'province', "Province is required", 100),
            zone_number=self._integer(data, 'zoneNumber', "Zone number must be greater than 0", minimum=1),
        )

    def validate_party(self, data):
        data = self._body(data)
        return PartyPayload(
            name=self._required_text(data, 'name', "Party name is required", 100),
            logo_url=self._optional_text(data, 'logoUrl', 500),
            policy=self._optional_text(data, 'policy'),
            color=self._color(data),
        )

    def validate_party_update(self, data):
        data = self._body(data)
        name = None
        if data.get('name') is not None:
            name = self._required_text(data, 'name', "Party name is required", 100)
        return PartyUpdatePayload(
            name=name,
            logo_url=self._optional_text(data, 'logoUrl', 500),
            policy=self._optional_text(data, 'policy'),
            color=self._color(data),
        )

    def validate_candidate(self, data):
        data = self._body(data)
        return CandidatePayload(
            first_name=self._required_text(data, 'firstName', "First name is required", 100),
            last_name=self._required_text(data, 'lastName', "Last name is required", 100),
            candidate_number=self._integer(
                data, 'candidateNumber', "Candidate number must be greater than 0", minimum=1
            ),
            party_id=self._integer(data, 'partyId', "Party id must be a number"),
            constituency_id=self._integer(data, 'constituencyId', "Constituency id must be a number"),
            national_id=self._national_id(data),
            image_url=self._optional_text(data, 'imageUrl', 500),
            personal_policy=self._optional_text(data, 'personalPolicy'),
        )

    def validate_candidate_update(self, data):
        data = self._body(data)
        payload = CandidateUpdatePayload(
            image_url=self._optional_text(data, 'imageUrl', 500),
            personal_policy=self._optional_text(data, 'personalPolicy'),
            candidate_number=self._integer(
                data, 'candidateNumber', "Candidate number must be greater than 0", minimum=1, required=False
            ),
            party_id=self._integer(data, 'partyId', "Party id must be a number", required=False),
        )
        if data.get('firstName') is not None:
            payload.first_name = self._required_text(data, 'firstName', "First name is required", 100)
        if data.get('lastName') is not None:
            payload.last_name = self._required_text(data, 'lastName', "Last name is required", 100)
        return payload

    def validate_vote(self, data):
        data = self._body(data)
        return VotePayload(candidate_id=self._integer(data, 'candidateId', "Please select a candidate"))

    def validate_role(self, data):
        data = self._body(data)
        role = data.get('role')
        if role not in ROLES:
            raise ValidationError("Invalid role")
        return RolePayload(role=role)

    def validate_poll_status(self, data):
        data = self._body(data)
        value = data.get('isPollOpen')
        if not isinstance(value, bool):
            raise ValidationError("isPollOpen must be true or false")
        return PollStatusPayload(is_poll_open=value)


validator = InputValidator()
