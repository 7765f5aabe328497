# election/database/models.py

import uuid
from datetime import datetime, timezone

from election import db


def utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


class Profile(db.Model):
    __tablename__ = 'profiles'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(254), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)  # Argon2id hash
    national_id = db.Column(db.String(13), unique=True, nullable=False)
    full_name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.Text, nullable=False, default='')
    role = db.Column(db.String(10), nullable=False, default='voter')
    constituency_id = db.Column(
        db.Integer, db.ForeignKey('constituencies.id', ondelete='SET NULL'), nullable=True
    )
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    constituency = db.relationship('Constituency', back_populates='voters')
    votes = db.relationship('Vote', back_populates='voter', cascade='all, delete-orphan', lazy=True)

    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'ec', 'voter')", name='ck_profile_role'),
    )

    def to_dict(self, include_constituency=False):
        data = {
            'id': self.id,
            'email': self.email,
            'fullName': self.full_name,
            'nationalId': self.national_id,
            'address': self.address,
            'role': self.role,
            'constituencyId': self.constituency_id,
            'createdAt': _isoformat(self.created_at),
        }
        if include_constituency:
            data['constituency'] = self.constituency.to_dict() if self.constituency else None
        return data

    def __repr__(self):
        return f'<Profile {self.email} ({self.role})>'


class Constituency(db.Model):
    __tablename__ = 'constituencies'
    id = db.Column(db.Integer, primary_key=True)
    province = db.Column(db.String(100), nullable=False)
    zone_number = db.Column(db.Integer, nullable=False)
    is_poll_open = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    voters = db.relationship('Profile', back_populates='constituency', lazy=True)
    candidates = db.relationship(
        'Candidate', back_populates='constituency', cascade='all, delete-orphan', lazy=True
    )
    votes = db.relationship('Vote', back_populates='constituency', cascade='all, delete-orphan', lazy=True)

    __table_args__ = (
        db.UniqueConstraint('province', 'zone_number', name='uq_constituency_province_zone'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'province': self.province,
            'zoneNumber': self.zone_number,
            'isPollOpen': self.is_poll_open,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class Party(db.Model):
    __tablename__ = 'parties'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    logo_url = db.Column(db.String(500), nullable=False, default='')
    policy = db.Column(db.Text, nullable=False, default='')
    color = db.Column(db.String(20), nullable=False, default='#3B82F6')
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    candidates = db.relationship('Candidate', back_populates='party', cascade='all, delete-orphan', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'logoUrl': self.logo_url,
            'policy': self.policy,
            'color': self.color,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class Candidate(db.Model):
    __tablename__ = 'candidates'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    candidate_number = db.Column(db.Integer, nullable=False)
    image_url = db.Column(db.String(500), nullable=False, default='')
    personal_policy = db.Column(db.Text, nullable=False, default='')
    national_id = db.Column(db.String(13), nullable=False)
    party_id = db.Column(db.Integer, db.ForeignKey('parties.id', ondelete='CASCADE'), nullable=False)
    constituency_id = db.Column(
        db.Integer, db.ForeignKey('constituencies.id', ondelete='CASCADE'), nullable=False
    )
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    party = db.relationship('Party', back_populates='candidates')
    constituency = db.relationship('Constituency', back_populates='candidates')
    votes = db.relationship('Vote', back_populates='candidate', cascade='all, delete-orphan', lazy=True)

    __table_args__ = (
        db.Index('idx_candidates_constituency', 'constituency_id'),
    )

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def to_dict(self, include_party=True, include_constituency=False):
        data = {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'candidateNumber': self.candidate_number,
            'imageUrl': self.image_url,
            'personalPolicy': self.personal_policy,
            'nationalId': self.national_id,
            'partyId': self.party_id,
            'constituencyId': self.constituency_id,
        }
        if include_party:
            data['party'] = self.party.to_dict() if self.party else None
        if include_constituency:
            data['constituency'] = self.constituency.to_dict() if self.constituency else None
        return data


class Vote(db.Model):
    __tablename__ = 'votes'
    id = db.Column(db.Integer, primary_key=True)
    voter_id = db.Column(db.String(36), db.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False)
    candidate_id = db.Column(db.Integer, db.ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False)
    constituency_id = db.Column(
        db.Integer, db.ForeignKey('constituencies.id', ondelete='CASCADE'), nullable=False
    )
    timestamp = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    voter = db.relationship('Profile', back_populates='votes')
    candidate = db.relationship('Candidate', back_populates='votes')
    constituency = db.relationship('Constituency', back_populates='votes')

    # One live ballot per voter per constituency; also the double-voting guard
    __table_args__ = (
        db.UniqueConstraint('voter_id', 'constituency_id', name='uq_vote_voter_constituency'),
        db.Index('idx_votes_constituency_candidate', 'constituency_id', 'candidate_id'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'voterId': self.voter_id,
            'candidateId': self.candidate_id,
            'constituencyId': self.constituency_id,
            'timestamp': _isoformat(self.timestamp),
            'candidate': self.candidate.to_dict(include_party=False) if self.candidate else None,
        }

    def __repr__(self):
        return f'<Vote {self.id} by Profile {self.voter_id}>'
