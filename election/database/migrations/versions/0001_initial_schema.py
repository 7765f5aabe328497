"""initial election schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates constituencies, parties, profiles, candidates and votes, including
the one-ballot-per-voter-per-constituency constraint on votes.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'constituencies',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('province', sa.String(100), nullable=False),
        sa.Column('zone_number', sa.Integer, nullable=False),
        sa.Column('is_poll_open', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('province', 'zone_number', name='uq_constituency_province_zone'),
    )

    op.create_table(
        'parties',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('logo_url', sa.String(500), nullable=False, server_default=''),
        sa.Column('policy', sa.Text, nullable=False, server_default=''),
        sa.Column('color', sa.String(20), nullable=False, server_default='#3B82F6'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(254), nullable=False, unique=True),
        sa.Column('password', sa.String(200), nullable=False),
        sa.Column('national_id', sa.String(13), nullable=False, unique=True),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('address', sa.Text, nullable=False, server_default=''),
        sa.Column('role', sa.String(10), nullable=False, server_default='voter'),
        sa.Column(
            'constituency_id',
            sa.Integer,
            sa.ForeignKey('constituencies.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("role IN ('admin', 'ec', 'voter')", name='ck_profile_role'),
    )

    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('candidate_number', sa.Integer, nullable=False),
        sa.Column('image_url', sa.String(500), nullable=False, server_default=''),
        sa.Column('personal_policy', sa.Text, nullable=False, server_default=''),
        sa.Column('national_id', sa.String(13), nullable=False),
        sa.Column('party_id', sa.Integer, sa.ForeignKey('parties.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'constituency_id',
            sa.Integer,
            sa.ForeignKey('constituencies.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_candidates_constituency', 'candidates', ['constituency_id'])

    op.create_table(
        'votes',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('voter_id', sa.String(36), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('candidate_id', sa.Integer, sa.ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'constituency_id',
            sa.Integer,
            sa.ForeignKey('constituencies.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('voter_id', 'constituency_id', name='uq_vote_voter_constituency'),
    )
    op.create_index('idx_votes_constituency_candidate', 'votes', ['constituency_id', 'candidate_id'])


def downgrade():
    op.drop_table('votes')
    op.drop_table('candidates')
    op.drop_table('profiles')
    op.drop_table('parties')
    op.drop_table('constituencies')
