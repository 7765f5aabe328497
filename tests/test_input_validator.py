import pytest

from election.errors import ValidationError
from election.security.input_validator import InputValidator


@pytest.fixture
def validator():
    return InputValidator()


def _candidate(**overrides):
    data = {
        "firstName": "Malee",
        "lastName": "Srisuk",
        "candidateNumber": 3,
        "partyId": 1,
        "constituencyId": 2,
        "nationalId": "3100000000001",
    }
    data.update(overrides)
    return data


def test_sanitize_string_basic(validator):
    assert validator.sanitize_string("Hello World") == "Hello World"
    assert validator.sanitize_string(" extra spaces  ") == "extra spaces"

    # HTML tag stripping (we strip all tags for security)
    assert validator.sanitize_string("<p>text</p>") == "text"
    assert validator.sanitize_string('<b>bold</b>') == "bold"

    # Entities come back as plain text
    assert validator.sanitize_string("Fish & Chips") == "Fish & Chips"

    long_string = "a" * 300
    assert len(validator.sanitize_string(long_string)) == 255

    # XSS prevention
    assert validator.sanitize_string('<script>alert("xss")</script>') == ""
    assert "onclick" not in validator.sanitize_string('<a onclick=alert(1)>x</a>')


def test_sanitize_string_invalid_input(validator):
    with pytest.raises(ValidationError, match="Input must be a string"):
        validator.sanitize_string(123)
    with pytest.raises(ValidationError, match="Input must be a string"):
        validator.sanitize_string(None)


def test_validate_email(validator):
    assert validator.validate_email("user@example.com")
    assert validator.validate_email("user.name+tag@example.co.uk")
    assert validator.validate_email("123@456.com")

    assert not validator.validate_email("not-an-email")
    assert not validator.validate_email("@example.com")
    assert not validator.validate_email("user@")
    assert not validator.validate_email("user@.com")
    assert not validator.validate_email("")
    assert not validator.validate_email(None)
    assert not validator.validate_email(123)


@pytest.mark.parametrize("data", [None, [], "text"])
def test_body_must_be_an_object(validator, data):
    with pytest.raises(ValidationError, match="Request body must be a JSON object"):
        validator.validate_login(data)


def test_validate_register_normalises(validator):
    payload = validator.validate_register({
        "email": "Somchai@Example.com",
        "password": "secret123",
        "nationalId": "1234567890123",
        "fullName": "<b>Somchai</b> Jaidee",
        "address": "99 Sukhumvit Road",
        "constituencyId": 4,
    })
    assert payload.email == "somchai@example.com"
    assert payload.full_name == "Somchai Jaidee"
    assert payload.national_id == "1234567890123"
    assert payload.constituency_id == 4


def test_validate_register_address_required(validator):
    with pytest.raises(ValidationError, match="Address is required"):
        validator.validate_register({
            "email": "a@example.com", "password": "secret123",
            "nationalId": "1234567890123", "fullName": "A", "address": "   ",
        })


def test_validate_constituency(validator):
    payload = validator.validate_constituency({"province": "Chiang Mai", "zoneNumber": 3})
    assert (payload.province, payload.zone_number) == ("Chiang Mai", 3)

    with pytest.raises(ValidationError, match="Zone number"):
        validator.validate_constituency({"province": "Chiang Mai", "zoneNumber": "3"})
    with pytest.raises(ValidationError, match="Province is required"):
        validator.validate_constituency({"zoneNumber": 3})


def test_validate_party(validator):
    payload = validator.validate_party({"name": "Blue Sky", "color": "#2D3494"})
    assert payload.name == "Blue Sky"
    assert payload.color == "#2D3494"
    assert payload.policy is None

    with pytest.raises(ValidationError, match="Color"):
        validator.validate_party({"name": "Blue Sky", "color": "blue"})


def test_party_update_only_reports_sent_fields(validator):
    payload = validator.validate_party_update({"policy": "Clean air"})
    assert payload.changes() == {"policy": "Clean air"}


def test_validate_candidate(validator):
    payload = validator.validate_candidate(_candidate())
    assert payload.candidate_number == 3
    assert payload.party_id == 1
    assert payload.constituency_id == 2


@pytest.mark.parametrize("overrides,message", [
    ({"candidateNumber": 0}, "Candidate number must be greater than 0"),
    ({"partyId": None}, "Party id must be a number"),
    ({"nationalId": "12"}, "National ID must be exactly 13 characters"),
    ({"lastName": ""}, "Last name is required"),
])
def test_validate_candidate_errors(validator, overrides, message):
    with pytest.raises(ValidationError, match=message):
        validator.validate_candidate(_candidate(**overrides))


def test_candidate_update_changes(validator):
    payload = validator.validate_candidate_update({"firstName": "Pranee", "candidateNumber": 5})
    assert payload.changes() == {"first_name": "Pranee", "candidate_number": 5}


def test_validate_vote(validator):
    assert validator.validate_vote({"candidateId": 12}).candidate_id == 12
    with pytest.raises(ValidationError, match="Please select a candidate"):
        validator.validate_vote({"candidateId": 0.5})


@pytest.mark.parametrize("role", ["admin", "ec", "voter"])
def test_validate_role_accepts_known_roles(validator, role):
    assert validator.validate_role({"role": role}).role == role


def test_validate_role_rejects_unknown(validator):
    with pytest.raises(ValidationError, match="Invalid role"):
        validator.validate_role({"role": "superuser"})


def test_validate_poll_status(validator):
    assert validator.validate_poll_status({"isPollOpen": False}).is_poll_open is False
    with pytest.raises(ValidationError):
        validator.validate_poll_status({"isPollOpen": 1})


@pytest.mark.parametrize("value", [2 ** 31, 2 ** 70])
def test_ids_beyond_integer_column_are_rejected(validator, value):
    with pytest.raises(ValidationError, match="Please select a candidate"):
        validator.validate_vote({"candidateId": value})
    with pytest.raises(ValidationError, match="Party id must be a number"):
        validator.validate_candidate(_candidate(partyId=value))


def test_largest_integer_id_is_accepted(validator):
    assert validator.validate_vote({"candidateId": 2 ** 31 - 1}).candidate_id == 2 ** 31 - 1
