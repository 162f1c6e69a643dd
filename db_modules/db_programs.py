import logging
from datetime import datetime

from mysql.connector import Error

from models import Program


logger = logging.getLogger(__name__)

PROGRAM_COLUMNS = ('program_id', 'name', 'category', 'type', 'is_active', 'display_order')
PROGRAM_ORDER = "ORDER BY category, display_order, name"


def _row_to_program(row):
    return Program(
        id=row['id'],
        program_id=row['program_id'],
        name=row['name'],
        category=row['category'],
        type=row['type'],
        is_active=row['is_active'],
        display_order=row['display_order'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


class ProgramDbMixin:
    """Program catalog operations"""

    def create_program(self, program):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO programs (
                        id, program_id, name, category, type,
                        is_active, display_order, created_at, updated_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                """, (
                    program.id,
                    program.program_id,
                    program.name,
                    program.category.value,
                    program.type.value,
                    program.is_active,
                    program.display_order,
                    program.created_at,
                    program.updated_at,
                ))
                conn.commit()
                return program

        except Error as e:
            logger.error(f"Failed to create program {program.program_id}: {e}")
            raise

    def _fetch_programs(self, where='', params=()):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute(f"SELECT * FROM programs {where} {PROGRAM_ORDER}", params)
                return [_row_to_program(row) for row in cursor.fetchall()]

        except Error as e:
            logger.error(f"Failed to list programs: {e}")
            raise

    def _fetch_program(self, column, value):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute(f"SELECT * FROM programs WHERE {column} = %s", (value,))
                row = cursor.fetchone()
                return _row_to_program(row) if row else None

        except Error as e:
            logger.error(f"Failed to load program by {column}: {e}")
            raise

    def get_program(self, id):
        return self._fetch_program('id', id)

    def get_program_by_program_id(self, program_id):
        return self._fetch_program('program_id', program_id)

    def get_programs(self):
        return self._fetch_programs()

    def get_programs_by_category(self, category):
        return self._fetch_programs("WHERE category = %s", (category,))

    def get_active_programs(self):
        return self._fetch_programs("WHERE is_active = TRUE")

    def count_programs(self):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) FROM programs")
                row = cursor.fetchone()
                return row[0] if row else 0

        except Error as e:
            logger.error(f"Failed to count programs: {e}")
            raise

    def update_program(self, id, changes):
        """Merge changes onto a program; None when it does not exist"""
        fields = []
        params = []
        for column in PROGRAM_COLUMNS:
            if column in changes:
                fields.append(f"{column} = %s")
                params.append(changes[column])

        fields.append("updated_at = %s")
        params.append(datetime.now())
        params.append(id)

        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT id FROM programs WHERE id = %s", (id,))
                if not cursor.fetchone():
                    return None

                cursor.execute(f"""
                    UPDATE programs
                    SET {', '.join(fields)}
                    WHERE id = %s
                """, tuple(params))
                conn.commit()

                cursor.execute("SELECT * FROM programs WHERE id = %s", (id,))
                row = cursor.fetchone()
                return _row_to_program(row) if row else None

        except Error as e:
            logger.error(f"Failed to update program {id}: {e}")
            raise

    def delete_program(self, id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM programs WHERE id = %s", (id,))
                conn.commit()
                return cursor.rowcount > 0

        except Error as e:
            logger.error(f"Failed to delete program {id}: {e}")
            raise
