import json
import logging
from datetime import datetime

from mysql.connector import Error

from models import Registration
from program_catalog import LEGACY_PROGRAM_ALIASES
from utils.helpers import escape_like


logger = logging.getLogger(__name__)

REGISTRATION_COLUMNS = (
    'full_name', 'place', 'team_name', 'category', 'programs', 'phone_number', 'aadhar_number',
)


def _load_programs(value):
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        return json.loads(value)
    return list(value)


def _row_to_registration(row):
    return Registration(
        id=row['id'],
        full_name=row['full_name'],
        place=row['place'],
        team_name=row['team_name'],
        category=row['category'],
        programs=_load_programs(row['programs']),
        phone_number=row.get('phone_number'),
        aadhar_number=row.get('aadhar_number'),
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


class RegistrationDbMixin:
    """Registration table operations"""

    def create_registration(self, registration):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO registrations (
                        id, full_name, place, team_name, category, programs,
                        phone_number, aadhar_number, created_at, updated_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """, (
                    registration.id,
                    registration.full_name,
                    registration.place,
                    registration.team_name,
                    registration.category.value,
                    json.dumps(registration.programs),
                    registration.phone_number,
                    registration.aadhar_number,
                    registration.created_at,
                    registration.updated_at,
                ))
                conn.commit()
                return registration

        except Error as e:
            logger.error(f"Failed to create registration: {e}")
            raise

    def _fetch_registrations(self, where='', params=()):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute(f"SELECT * FROM registrations {where} ORDER BY created_at DESC", params)
                return [_row_to_registration(row) for row in cursor.fetchall()]

        except Error as e:
            logger.error(f"Failed to list registrations: {e}")
            raise

    def get_registration(self, registration_id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM registrations WHERE id = %s", (registration_id,))
                row = cursor.fetchone()
                return _row_to_registration(row) if row else None

        except Error as e:
            logger.error(f"Failed to load registration {registration_id}: {e}")
            raise

    def get_registrations(self):
        return self._fetch_registrations()

    def get_registrations_by_category(self, category):
        return self._fetch_registrations("WHERE category = %s", (category,))

    def search_registrations(self, term, limit=None):
        """Case-insensitive substring match on name, team or place"""
        pattern = f"%{escape_like(term.lower())}%"
        where = """
            WHERE LOWER(full_name) LIKE %s
               OR LOWER(team_name) LIKE %s
               OR LOWER(place) LIKE %s
        """
        registrations = self._fetch_registrations(where, (pattern, pattern, pattern))
        return registrations[:limit] if limit else registrations

    def count_registrations_with_program(self, program_id):
        """Registrations whose programs reference program_id directly or through an alias"""
        tokens = [program_id] + [alias for alias, target in LEGACY_PROGRAM_ALIASES.items()
                                 if target == program_id]
        conditions = ' OR '.join(["JSON_CONTAINS(programs, JSON_QUOTE(%s))"] * len(tokens))
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(f"SELECT COUNT(*) FROM registrations WHERE {conditions}", tuple(tokens))
                row = cursor.fetchone()
                return row[0] if row else 0

        except Error as e:
            logger.error(f"Failed to count registrations for program {program_id}: {e}")
            raise

    def update_registration(self, registration_id, changes):
        """Merge changes onto a registration; None when it does not exist"""
        fields = []
        params = []
        for column in REGISTRATION_COLUMNS:
            if column in changes:
                value = changes[column]
                if column == 'programs':
                    value = json.dumps(value)
                fields.append(f"{column} = %s")
                params.append(value)

        fields.append("updated_at = %s")
        params.append(datetime.now())
        params.append(registration_id)

        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT id FROM registrations WHERE id = %s", (registration_id,))
                if not cursor.fetchone():
                    return None

                cursor.execute(f"""
                    UPDATE registrations
                    SET {', '.join(fields)}
                    WHERE id = %s
                """, tuple(params))
                conn.commit()

                cursor.execute("SELECT * FROM registrations WHERE id = %s", (registration_id,))
                row = cursor.fetchone()
                return _row_to_registration(row) if row else None

        except Error as e:
            logger.error(f"Failed to update registration {registration_id}: {e}")
            raise

    def delete_registration(self, registration_id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM registrations WHERE id = %s", (registration_id,))
                conn.commit()
                return cursor.rowcount > 0

        except Error as e:
            logger.error(f"Failed to delete registration {registration_id}: {e}")
            raise
