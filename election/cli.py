# election/cli.py
# Flask CLI commands for bootstrapping accounts and demo election data

import random

import click
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from election import db
from election.audit.audit_logger import export_signing_key
from election.database.models import Candidate, Constituency, Party, Profile, Vote
from election.encryption.password_hashing import get_password_service

PROVINCES = [
    ('Chiang Mai', 3),
    ('Khon Kaen', 3),
    ('Nakhon Ratchasima', 3),
    ('Bangkok', 5),
    ('Chonburi', 3),
    ('Kanchanaburi', 2),
    ('Songkhla', 3),
    ('Phuket', 1),
]

PARTIES = [
    {'name': 'Future Forward (FF)', 'color': '#F47933', 'policy': 'Technology for All'},
    {'name': "People's Power (PP)", 'color': '#E30613', 'policy': 'Power to the People'},
    {'name': 'Blue Sky (BS)', 'color': '#2D3494', 'policy': 'Clear Sky, Clear Future'},
    {'name': 'Green Earth (GE)', 'color': '#00B2E3', 'policy': 'Sustainable Growth'},
]

FIRST_NAMES = ['Somchai', 'Somsak', 'Malee', 'Wichai', 'Pranee']
LAST_NAMES = ['Jaidee', 'Rakthai', 'Mungmee', 'Srisuk']


def _national_id(n):
    return f'{n:013d}'


def create_profile(email, password, national_id, full_name, address, role='voter', constituency_id=None):
    profile = Profile(
        email=email.lower(),
        password=get_password_service().hash_password(password),
        national_id=national_id,
        full_name=full_name,
        address=address,
        role=role,
        constituency_id=constituency_id,
    )
    db.session.add(profile)
    return profile


def seed_election(voters_per_constituency=2, password='password123', rng=None):
    """Wipe the election tables and load a small fictional election."""
    rng = rng or random.Random(2026)

    for model in (Vote, Candidate, Profile, Party, Constituency):
        db.session.query(model).delete()
    db.session.commit()

    constituencies = [
        Constituency(province=province, zone_number=zone)
        for province, zones in PROVINCES
        for zone in range(1, zones + 1)
    ]
    parties = [
        Party(name=p['name'], color=p['color'], policy=p['policy'],
              logo_url=f"https://placehold.co/200x200/{p['color'][1:]}/ffffff.png")
        for p in PARTIES
    ]
    db.session.add_all(constituencies + parties)
    db.session.flush()

    next_id = 1000000000000
    for constituency in constituencies:
        for number, party in enumerate(parties, start=1):
            db.session.add(Candidate(
                first_name=rng.choice(FIRST_NAMES),
                last_name=rng.choice(LAST_NAMES),
                candidate_number=number,
                party_id=party.id,
                constituency_id=constituency.id,
                national_id=_national_id(next_id),
            ))
            next_id += 1

    create_profile('admin@election.local', password, _national_id(1), 'System Admin', 'Election HQ', role='admin')
    create_profile('ec@election.local', password, _national_id(2), 'Election Commissioner', 'Election HQ', role='ec')

    voters = 0
    for constituency in constituencies:
        for i in range(voters_per_constituency):
            voters += 1
            create_profile(
                f'voter{voters}@election.local', password, _national_id(100 + voters),
                f'Voter {voters}', f'{constituency.province} zone {constituency.zone_number}',
                constituency_id=constituency.id,
            )

    db.session.commit()
    return {'constituencies': len(constituencies), 'parties': len(parties), 'voters': voters}


def register_commands(app):
    @app.cli.command('create-user')
    @click.option('--email', required=True)
    @click.option('--password', required=True)
    @click.option('--national-id', required=True)
    @click.option('--full-name', required=True)
    @click.option('--address', default='')
    @click.option('--role', type=click.Choice(['admin', 'ec', 'voter']), default='voter')
    @click.option('--constituency-id', type=int, default=None)
    def create_user_command(email, password, national_id, full_name, address, role, constituency_id):
        """Create an account directly in the database."""
        if Profile.query.filter_by(email=email.lower()).first():
            raise click.ClickException(f'User {email} already exists')
        try:
            profile = create_profile(email, password, national_id, full_name, address, role, constituency_id)
        except ValueError as e:
            raise click.ClickException(str(e))
        db.session.commit()
        click.echo(f'Created {profile.role} {profile.email} ({profile.id})')

    @app.cli.command('seed-data')
    @click.option('--voters-per-constituency', type=int, default=2)
    @click.option('--password', default='password123')
    @click.confirmation_option(prompt='This deletes all election data. Continue?')
    def seed_data_command(voters_per_constituency, password):
        """Replace the database contents with a fictional election."""
        counts = seed_election(voters_per_constituency, password)
        click.echo(
            f"Seeded {counts['constituencies']} constituencies, "
            f"{counts['parties']} parties and {counts['voters']} voters"
        )

    @app.cli.command('generate-audit-key')
    def generate_audit_key_command():
        """Print a new Ed25519 key in PEM form for AUDIT_SIGNING_KEY."""
        click.echo(export_signing_key(Ed25519PrivateKey.generate()), nl=False)
