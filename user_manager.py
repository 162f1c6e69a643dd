#!/usr/bin/env python3
"""
Event Registration System - user management and authentication
"""

import logging

from models import User, UserRole
from database import get_storage
from utils.errors import Conflict, InvalidCredentials
from utils.helpers import generate_password_hash, verify_password

logger = logging.getLogger(__name__)

# Verified when the username is unknown so both failure paths cost one hash
_DUMMY_PASSWORD_HASH = generate_password_hash('not-a-real-password')


class UserManager:
    """User management over the configured storage"""

    def __init__(self, storage):
        self.storage = storage

    def authenticate_user(self, username, password):
        """Return the user or raise InvalidCredentials.

        Unknown usernames and wrong passwords produce the same error.
        """
        user = self.storage.get_user_by_username(username)
        password_hash = user.password_hash if user else _DUMMY_PASSWORD_HASH

        if not verify_password(password, password_hash) or user is None:
            logger.warning("Failed login attempt for %s", username)
            raise InvalidCredentials()

        logger.info("User %s authenticated", username)
        return user

    def create_user(self, username, password, role=UserRole.TEAM_LEADER):
        """Create a user; Conflict when the username is taken"""
        if self.storage.get_user_by_username(username):
            raise Conflict('Username already exists')

        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        created = self.storage.create_user(user)
        logger.info("Created %s user %s", created.role.value, username)
        return created

    def list_users(self, role=None):
        return self.storage.get_all_users(role)

    def bootstrap_admins(self, settings):
        """Create the configured admin accounts that do not exist yet"""
        created = []
        pairs = [
            (settings.get('ADMIN_USERNAME'), settings.get('ADMIN_PASSWORD')),
            (settings.get('ADMIN2_USERNAME'), settings.get('ADMIN2_PASSWORD')),
        ]
        for username, password in pairs:
            if not username or not password:
                continue
            if self.storage.get_user_by_username(username):
                continue
            created.append(self.create_user(username, password, UserRole.ADMIN))
        return created


def get_user_manager():
    return UserManager(get_storage())
