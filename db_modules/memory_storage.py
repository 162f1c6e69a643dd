"""In-process storage backend for development and tests.

Implements the same methods as DatabaseManager. Rows are copied on the way
in and out so callers never hold a reference to stored state.
"""

import copy
import logging
import threading
from datetime import datetime

from models import Category, ProgramType, UserRole
from program_catalog import normalize_program_id


logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage"""

    backend_name = 'memory'

    def __init__(self):
        self._lock = threading.Lock()
        self._users = {}
        self._teams = {}
        self._programs = {}
        self._registrations = {}

    def init_database(self, force_recreate=False):
        if force_recreate:
            with self._lock:
                self._users.clear()
                self._teams.clear()
                self._programs.clear()
                self._registrations.clear()

    def ping(self):
        return True

    def _insert(self, table, row):
        with self._lock:
            table[row.id] = copy.deepcopy(row)
        return copy.deepcopy(row)

    def _get(self, table, key):
        with self._lock:
            row = table.get(key)
            return copy.deepcopy(row) if row else None

    def _find(self, table, predicate):
        with self._lock:
            for row in table.values():
                if predicate(row):
                    return copy.deepcopy(row)
        return None

    def _select(self, table, predicate=None, key=None, reverse=False):
        with self._lock:
            rows = [copy.deepcopy(row) for row in table.values() if predicate is None or predicate(row)]
        if key:
            rows.sort(key=key, reverse=reverse)
        return rows

    def _update(self, table, key, changes, columns):
        with self._lock:
            row = table.get(key)
            if row is None:
                return None
            for column in columns:
                if column in changes:
                    setattr(row, column, copy.deepcopy(changes[column]))
            row.updated_at = datetime.now()
            return copy.deepcopy(row)

    def _delete(self, table, key):
        with self._lock:
            return table.pop(key, None) is not None

    # ==================== Users ====================

    def create_user(self, user):
        return self._insert(self._users, user)

    def get_user_by_id(self, user_id):
        return self._get(self._users, user_id)

    def get_user_by_username(self, username):
        return self._find(self._users, lambda u: u.username == username)

    def get_all_users(self, role=None):
        users = self._select(
            self._users,
            (lambda u: u.role.value == role) if role else None,
            key=lambda u: u.created_at,
            reverse=True,
        )
        if not role:
            users.sort(key=lambda u: 0 if u.role == UserRole.ADMIN else 1)
        return users

    # ==================== Teams ====================

    def create_team(self, team):
        return self._insert(self._teams, team)

    def get_team(self, team_id):
        return self._get(self._teams, team_id)

    def get_team_by_name(self, name):
        return self._find(self._teams, lambda t: t.name == name)

    def get_teams(self):
        return self._select(self._teams, key=lambda t: t.name)

    def get_active_teams(self):
        return self._select(self._teams, lambda t: t.is_active, key=lambda t: t.name)

    def update_team(self, team_id, changes):
        return self._update(self._teams, team_id, changes, ('name', 'is_active'))

    def delete_team(self, team_id):
        return self._delete(self._teams, team_id)

    # ==================== Programs ====================

    def create_program(self, program):
        return self._insert(self._programs, program)

    def get_program(self, id):
        return self._get(self._programs, id)

    def get_program_by_program_id(self, program_id):
        return self._find(self._programs, lambda p: p.program_id == program_id)

    def get_programs(self):
        return self._select(self._programs, key=lambda p: p.sort_key())

    def get_programs_by_category(self, category):
        return self._select(self._programs, lambda p: p.category.value == category, key=lambda p: p.sort_key())

    def get_active_programs(self):
        return self._select(self._programs, lambda p: p.is_active, key=lambda p: p.sort_key())

    def count_programs(self):
        with self._lock:
            return len(self._programs)

    def update_program(self, id, changes):
        coerced = dict(changes)
        if 'category' in coerced:
            coerced['category'] = Category(coerced['category'])
        if 'type' in coerced:
            coerced['type'] = ProgramType(coerced['type'])
        return self._update(
            self._programs, id, coerced,
            ('program_id', 'name', 'category', 'type', 'is_active', 'display_order'),
        )

    def delete_program(self, id):
        return self._delete(self._programs, id)

    # ==================== Registrations ====================

    def create_registration(self, registration):
        return self._insert(self._registrations, registration)

    def get_registration(self, registration_id):
        return self._get(self._registrations, registration_id)

    def get_registrations(self):
        return self._select(self._registrations, key=lambda r: r.created_at, reverse=True)

    def get_registrations_by_category(self, category):
        return self._select(
            self._registrations,
            lambda r: r.category.value == category,
            key=lambda r: r.created_at,
            reverse=True,
        )

    def search_registrations(self, term, limit=None):
        needle = term.lower()

        def matches(registration):
            return any(
                needle in (value or '').lower()
                for value in (registration.full_name, registration.team_name, registration.place)
            )

        registrations = self._select(self._registrations, matches, key=lambda r: r.created_at, reverse=True)
        return registrations[:limit] if limit else registrations

    def count_registrations_with_program(self, program_id):
        with self._lock:
            return sum(
                1 for registration in self._registrations.values()
                if any(normalize_program_id(token) == program_id for token in registration.programs)
            )

    def update_registration(self, registration_id, changes):
        coerced = dict(changes)
        if 'category' in coerced:
            coerced['category'] = Category(coerced['category'])
        return self._update(
            self._registrations, registration_id, coerced,
            ('full_name', 'place', 'team_name', 'category', 'programs', 'phone_number', 'aadhar_number'),
        )

    def delete_registration(self, registration_id):
        return self._delete(self._registrations, registration_id)
