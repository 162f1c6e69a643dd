#!/usr/bin/env python3
"""
Event Registration System - helper functions
"""

import os
import hashlib
import hmac
from datetime import datetime

PBKDF2_ITERATIONS = 100000
SALT_LENGTH = 16
HASH_LENGTH = 32


def format_date(date, format_str='%d/%m/%Y'):
    """Format a date"""
    if not date:
        return ''

    if isinstance(date, str):
        return date

    if isinstance(date, datetime):
        date = date.date()

    return date.strftime(format_str)


def generate_password_hash(password, salt_length=SALT_LENGTH):
    """Hash a password with PBKDF2-HMAC-SHA256.

    Returns salt+hash as a hex string so it fits a VARCHAR column.
    """
    salt = os.urandom(salt_length)
    password_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return (salt + password_hash).hex()


def verify_password(password, password_hash):
    """Check a password against a hex salt+hash string"""
    if not password_hash or password is None:
        return False

    if isinstance(password_hash, (bytes, bytearray)):
        try:
            password_hash = password_hash.decode('ascii')
        except UnicodeDecodeError:
            return False

    try:
        raw = bytes.fromhex(password_hash)
    except ValueError:
        return False

    if len(raw) < SALT_LENGTH + HASH_LENGTH:
        return False

    salt = raw[:SALT_LENGTH]
    stored_hash = raw[SALT_LENGTH:]
    computed_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(computed_hash, stored_hash)


def get_value(data, *keys):
    """First present key of a request body, stripped when it is a string"""
    for key in keys:
        if key in data:
            value = data.get(key)
            return value.strip() if isinstance(value, str) else value
    return None


def has_any(data, *keys):
    return any(key in data for key in keys)


def escape_like(term):
    """Escape LIKE wildcards so the term matches literally"""
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
