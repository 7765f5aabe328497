import pytest

from election import create_app, db
from election.config import TestingConfig
from election.database.models import Candidate, Constituency, Party, Profile, Vote
from election.security.token_manager import token_manager

TEST_PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    class _Config(TestingConfig):
        AUDIT_LOG_DIR = str(tmp_path / "logs")

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture(scope="session")
def password_hash():
    """Hash once; Argon2 is deliberately slow."""
    from election.encryption.password_hashing import PasswordHashingService
    return PasswordHashingService(time_cost=1, memory_cost=1024, parallelism=1).hash_password(TEST_PASSWORD)


@pytest.fixture
def make_constituency(app):
    def _make(province="Bangkok", zone_number=1, is_poll_open=True):
        constituency = Constituency(province=province, zone_number=zone_number, is_poll_open=is_poll_open)
        db.session.add(constituency)
        db.session.commit()
        return constituency
    return _make


@pytest.fixture
def make_party(app):
    counter = {"n": 0}

    def _make(name=None, color="#E30613"):
        counter["n"] += 1
        party = Party(name=name or f"Party {counter['n']}", color=color)
        db.session.add(party)
        db.session.commit()
        return party
    return _make


@pytest.fixture
def make_candidate(app):
    counter = {"n": 0}

    def _make(constituency, party, number=None, first_name="Somchai", last_name="Jaidee"):
        counter["n"] += 1
        candidate = Candidate(
            first_name=first_name,
            last_name=last_name,
            candidate_number=number or counter["n"],
            party_id=party.id,
            constituency_id=constituency.id,
            national_id=f"{9000000000000 + counter['n']:013d}",
        )
        db.session.add(candidate)
        db.session.commit()
        return candidate
    return _make


@pytest.fixture
def make_profile(app, password_hash):
    counter = {"n": 0}

    def _make(role="voter", constituency=None, email=None, national_id=None):
        counter["n"] += 1
        profile = Profile(
            email=email or f"user{counter['n']}@example.com",
            password=password_hash,
            national_id=national_id or f"{1100000000000 + counter['n']:013d}",
            full_name=f"User {counter['n']}",
            address="123 Test Road",
            role=role,
            constituency_id=constituency.id if constituency else None,
        )
        db.session.add(profile)
        db.session.commit()
        return profile
    return _make


@pytest.fixture
def make_vote(app):
    def _make(voter, candidate):
        vote = Vote(voter_id=voter.id, candidate_id=candidate.id, constituency_id=candidate.constituency_id)
        db.session.add(vote)
        db.session.commit()
        return vote
    return _make


@pytest.fixture
def auth_header(app):
    def _header(profile):
        return {"Authorization": f"Bearer {token_manager.generate_token(profile)}"}
    return _header
