#!/usr/bin/env python3
"""
Event Registration System - request body validation

Each validator returns a dict of cleaned, snake_case fields or raises
ValidationError with one {field, issue} entry per problem. With partial=True
only the fields present in the body are checked.
"""

import re

from models import Category, ProgramType, UserRole
from program_catalog import normalize_program_id
from utils.errors import ValidationError, field_error
from utils.helpers import get_value, has_any

PROGRAM_ID_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
PHONE_PATTERN = re.compile(r'^\d{10}$')
AADHAR_PATTERN = re.compile(r'^\d{12}$')

CATEGORIES = [c.value for c in Category]
PROGRAM_TYPES = [t.value for t in ProgramType]
ROLES = [r.value for r in UserRole]

# (attribute, accepted body keys)
REGISTRATION_FIELDS = [
    ('full_name', ('fullName', 'full_name')),
    ('place', ('place',)),
    ('team_name', ('teamName', 'team_name')),
    ('category', ('category',)),
    ('programs', ('programs',)),
    ('phone_number', ('phoneNumber', 'phone_number')),
    ('aadhar_number', ('aadharNumber', 'aadhar_number')),
]

PROGRAM_FIELDS = [
    ('program_id', ('programId', 'program_id')),
    ('name', ('name',)),
    ('category', ('category',)),
    ('type', ('type',)),
    ('is_active', ('isActive', 'is_active')),
    ('display_order', ('displayOrder', 'display_order')),
]

TEAM_FIELDS = [
    ('name', ('name',)),
    ('is_active', ('isActive', 'is_active')),
]


def _require_body(data):
    if not isinstance(data, dict):
        raise ValidationError([field_error('body', 'Request body must be a JSON object')])


def _text(errors, field, value, max_length, required=True):
    if value is None or value == '':
        if required:
            errors.append(field_error(field, 'Required'))
        return None
    if not isinstance(value, str):
        errors.append(field_error(field, 'Must be a string'))
        return None
    if len(value) > max_length:
        errors.append(field_error(field, f'Must be at most {max_length} characters'))
        return None
    return value


def _choice(errors, field, value, choices):
    if value not in choices:
        errors.append(field_error(field, f"Must be one of: {', '.join(choices)}"))
        return None
    return value


def _bool(errors, field, value):
    if not isinstance(value, bool):
        errors.append(field_error(field, 'Must be true or false'))
        return None
    return value


def _int(errors, field, value):
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(field_error(field, 'Must be an integer'))
        return None
    return value


def _digits(errors, field, value, pattern, length):
    if value is None or value == '':
        return None
    if not isinstance(value, str) or not pattern.match(value):
        errors.append(field_error(field, f'Must be exactly {length} digits'))
        return None
    return value


def _programs(errors, field, value):
    if value is None:
        errors.append(field_error(field, 'Required'))
        return None
    if not isinstance(value, list):
        errors.append(field_error(field, 'Must be a list of program ids'))
        return None
    if not value:
        errors.append(field_error(field, 'At least one program must be selected'))
        return None
    cleaned = []
    for token in value:
        if not isinstance(token, str) or not token.strip():
            errors.append(field_error(field, 'Program ids must be non-empty strings'))
            return None
        if token.strip() not in cleaned:
            cleaned.append(token.strip())
    return cleaned


def _collect(data, fields, partial):
    present = {}
    for attribute, keys in fields:
        if partial and not has_any(data, *keys):
            continue
        present[attribute] = get_value(data, *keys)
    return present


def _finish(errors, cleaned, partial):
    if errors:
        raise ValidationError(errors)
    if partial and not cleaned:
        raise ValidationError([field_error('body', 'No fields to update')])
    return cleaned


def validate_registration(data, partial=False):
    _require_body(data)
    errors = []
    raw = _collect(data, REGISTRATION_FIELDS, partial)
    cleaned = {}

    checks = {
        'full_name': lambda v: _text(errors, 'fullName', v, 200),
        'place': lambda v: _text(errors, 'place', v, 200),
        'team_name': lambda v: _text(errors, 'teamName', v, 200),
        'category': lambda v: _choice(errors, 'category', v, CATEGORIES),
        'programs': lambda v: _programs(errors, 'programs', v),
        'phone_number': lambda v: _digits(errors, 'phoneNumber', v, PHONE_PATTERN, 10),
        'aadhar_number': lambda v: _digits(errors, 'aadharNumber', v, AADHAR_PATTERN, 12),
    }
    for attribute, value in raw.items():
        cleaned[attribute] = checks[attribute](value)

    return _finish(errors, cleaned, partial)


def validate_program(data, partial=False):
    _require_body(data)
    errors = []
    raw = _collect(data, PROGRAM_FIELDS, partial)
    cleaned = {}

    for attribute, value in raw.items():
        if attribute == 'program_id':
            value = _text(errors, 'programId', value, 100)
            if value is not None and not PROGRAM_ID_PATTERN.match(value):
                errors.append(field_error('programId', 'Use lowercase letters, digits and single hyphens'))
                value = None
            elif value is not None and normalize_program_id(value) != value:
                # Stored tokens equal to an alias are rewritten to the alias target
                errors.append(field_error('programId', f'Reserved as an alias of {normalize_program_id(value)}'))
                value = None
            cleaned[attribute] = value
        elif attribute == 'name':
            cleaned[attribute] = _text(errors, 'name', value, 200)
        elif attribute == 'category':
            cleaned[attribute] = _choice(errors, 'category', value, CATEGORIES)
        elif attribute == 'type':
            cleaned[attribute] = _choice(errors, 'type', value, PROGRAM_TYPES)
        elif attribute == 'is_active':
            if value is None and not partial:
                value = True
            cleaned[attribute] = _bool(errors, 'isActive', value)
        elif attribute == 'display_order':
            if value is None and not partial:
                value = 0
            cleaned[attribute] = _int(errors, 'displayOrder', value)

    return _finish(errors, cleaned, partial)


def validate_team(data, partial=False):
    _require_body(data)
    errors = []
    raw = _collect(data, TEAM_FIELDS, partial)
    cleaned = {}

    if 'name' in raw:
        cleaned['name'] = _text(errors, 'name', raw['name'], 200)
    if 'is_active' in raw:
        value = raw['is_active']
        if value is None and not partial:
            value = True
        cleaned['is_active'] = _bool(errors, 'isActive', value)

    return _finish(errors, cleaned, partial)


def validate_new_user(data):
    _require_body(data)
    errors = []
    username = _text(errors, 'username', get_value(data, 'username'), 50)
    if username is not None and len(username) < 3:
        errors.append(field_error('username', 'Must be at least 3 characters'))
    password = data.get('password')
    if not password:
        errors.append(field_error('password', 'Required'))
    elif not isinstance(password, str) or len(password) < 6:
        errors.append(field_error('password', 'Must be at least 6 characters'))
    role = _choice(errors, 'role', data.get('role') or UserRole.TEAM_LEADER.value, ROLES)

    if errors:
        raise ValidationError(errors)
    return {'username': username, 'password': password, 'role': role}


def validate_login(data):
    _require_body(data)
    errors = []
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not username.strip():
        errors.append(field_error('username', 'Required'))
    if not isinstance(password, str) or not password:
        errors.append(field_error('password', 'Required'))
    if errors:
        raise ValidationError(errors, 'Username and password required')
    return username.strip(), password
