#!/usr/bin/env python3
"""
Event Registration System - API blueprints
"""

from .auth import auth_bp
from .registrations import registrations_bp
from .programs import programs_bp
from .teams import teams_bp
from .users import users_bp
from .public import public_bp
from .reports import reports_bp
from .system import system_bp

__version__ = '1.0.0'

__all__ = [
    'auth_bp',
    'registrations_bp',
    'programs_bp',
    'teams_bp',
    'users_bp',
    'public_bp',
    'reports_bp',
    'system_bp',
]
