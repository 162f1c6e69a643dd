#!/usr/bin/env python3
"""
Event Registration System - model definitions
"""

import uuid
from datetime import datetime
from enum import Enum

from program_catalog import categorize_programs, get_program_labels, normalize_program_ids


class UserRole(Enum):
    """User roles"""
    ADMIN = 'admin'
    TEAM_LEADER = 'team_leader'


class Category(Enum):
    """Age category of a program or registration"""
    JUNIOR = 'junior'
    SENIOR = 'senior'


class ProgramType(Enum):
    """Whether a program is performed on stage"""
    STAGE = 'stage'
    NON_STAGE = 'non-stage'


def new_id():
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value else None


class User:
    """User model"""
    def __init__(self, id=None, username=None, password_hash=None, role=UserRole.TEAM_LEADER,
                 created_at=None):
        self.id = id or new_id()
        self.username = username
        self.password_hash = password_hash
        self.role = role if isinstance(role, UserRole) else UserRole(role)
        self.created_at = created_at or datetime.now()

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def to_dict(self):
        """Serialize without the password hash"""
        return {
            'id': self.id,
            'username': self.username,
            'role': self.role.value,
            'createdAt': _iso(self.created_at),
        }


class Team:
    """Team model"""
    def __init__(self, id=None, name=None, is_active=True, created_at=None, updated_at=None):
        now = datetime.now()
        self.id = id or new_id()
        self.name = name
        self.is_active = bool(is_active)
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'isActive': self.is_active,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


class Program:
    """Program catalog entry"""
    def __init__(self, id=None, program_id=None, name=None, category=Category.JUNIOR,
                 type=ProgramType.STAGE, is_active=True, display_order=0,
                 created_at=None, updated_at=None):
        now = datetime.now()
        self.id = id or new_id()
        self.program_id = program_id
        self.name = name
        self.category = category if isinstance(category, Category) else Category(category)
        self.type = type if isinstance(type, ProgramType) else ProgramType(type)
        self.is_active = bool(is_active)
        self.display_order = int(display_order or 0)
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    def sort_key(self):
        return (self.category.value, self.display_order, self.name or '')

    def to_dict(self):
        return {
            'id': self.id,
            'programId': self.program_id,
            'name': self.name,
            'category': self.category.value,
            'type': self.type.value,
            'isActive': self.is_active,
            'displayOrder': self.display_order,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


class Registration:
    """Student registration"""

    # Never leave the authenticated API
    SENSITIVE_FIELDS = ('phoneNumber', 'aadharNumber')

    def __init__(self, id=None, full_name=None, place=None, team_name=None,
                 category=Category.JUNIOR, programs=None, phone_number=None,
                 aadhar_number=None, created_at=None, updated_at=None):
        now = datetime.now()
        self.id = id or new_id()
        self.full_name = full_name
        self.place = place
        self.team_name = team_name
        self.category = category if isinstance(category, Category) else Category(category)
        self.programs = list(programs or [])
        self.phone_number = phone_number
        self.aadhar_number = aadhar_number
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    @property
    def normalized_programs(self):
        return normalize_program_ids(self.programs)

    def program_summary(self):
        """Normalized ids, labels and the stage / non-stage split"""
        buckets = categorize_programs(self.programs)
        return {
            'programLabels': get_program_labels(self.programs),
            'stagePrograms': buckets['stage'],
            'nonStagePrograms': buckets['non_stage'],
        }

    def to_dict(self):
        data = {
            'id': self.id,
            'fullName': self.full_name,
            'place': self.place,
            'teamName': self.team_name,
            'category': self.category.value,
            'programs': self.normalized_programs,
            'phoneNumber': self.phone_number,
            'aadharNumber': self.aadhar_number,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }
        data.update(self.program_summary())
        return data

    def to_public_dict(self):
        """Public search result: no contact or national ID fields"""
        data = self.to_dict()
        for field in self.SENSITIVE_FIELDS:
            data.pop(field, None)
        data.pop('updatedAt', None)
        return data

    def to_suggestion(self):
        return {
            'id': self.id,
            'fullName': self.full_name,
            'place': self.place,
        }


class Statistics:
    """Registration counts derived at request time"""
    def __init__(self, total=0, junior=0, senior=0, today=0):
        self.total = total
        self.junior = junior
        self.senior = senior
        self.today = today

    @classmethod
    def from_registrations(cls, registrations, now=None):
        today = (now or datetime.now()).date()
        stats = cls()
        for registration in registrations:
            stats.total += 1
            if registration.category == Category.JUNIOR:
                stats.junior += 1
            elif registration.category == Category.SENIOR:
                stats.senior += 1
            if registration.created_at and registration.created_at.date() == today:
                stats.today += 1
        return stats

    def to_dict(self):
        return {
            'total': self.total,
            'junior': self.junior,
            'senior': self.senior,
            'today': self.today,
        }


DATABASE_SCHEMA = {
    'users': '''
        CREATE TABLE IF NOT EXISTS users (
            id CHAR(36) PRIMARY KEY,
            username VARCHAR(50) NOT NULL,
            password_hash VARCHAR(128) NOT NULL COMMENT 'hex salt+pbkdf2 hash',
            role ENUM('admin', 'team_leader') NOT NULL DEFAULT 'team_leader',
            created_at DATETIME NOT NULL,
            UNIQUE KEY uq_users_username (username),
            INDEX idx_role (role)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Accounts';
    ''',

    'teams': '''
        CREATE TABLE IF NOT EXISTS teams (
            id CHAR(36) PRIMARY KEY,
            name VARCHAR(200) NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at DATETIME NOT NULL,
            updated_at DATETIME NOT NULL,
            UNIQUE KEY uq_teams_name (name),
            INDEX idx_is_active (is_active)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Teams registrations refer to by name';
    ''',

    'programs': '''
        CREATE TABLE IF NOT EXISTS programs (
            id CHAR(36) PRIMARY KEY,
            program_id VARCHAR(100) NOT NULL,
            name VARCHAR(200) NOT NULL,
            category ENUM('junior', 'senior') NOT NULL,
            type ENUM('stage', 'non-stage') NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            display_order INT NOT NULL DEFAULT 0,
            created_at DATETIME NOT NULL,
            updated_at DATETIME NOT NULL,
            UNIQUE KEY uq_programs_program_id (program_id),
            INDEX idx_category_order (category, display_order)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Competition program catalog';
    ''',

    'registrations': '''
        CREATE TABLE IF NOT EXISTS registrations (
            id CHAR(36) PRIMARY KEY,
            full_name VARCHAR(200) NOT NULL,
            place VARCHAR(200) NOT NULL,
            team_name VARCHAR(200) NOT NULL,
            category ENUM('junior', 'senior') NOT NULL,
            programs JSON NOT NULL,
            phone_number VARCHAR(10) DEFAULT NULL,
            aadhar_number VARCHAR(12) DEFAULT NULL,
            created_at DATETIME(6) NOT NULL,
            updated_at DATETIME(6) NOT NULL,
            INDEX idx_category (category),
            INDEX idx_created_at (created_at),
            INDEX idx_full_name (full_name)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Student registrations';
    ''',

    'sessions': '''
        CREATE TABLE IF NOT EXISTS sessions (
            sid VARCHAR(128) PRIMARY KEY,
            data TEXT NOT NULL,
            expires_at DATETIME NOT NULL,
            INDEX idx_expires_at (expires_at)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Server-side login sessions';
    ''',
}
