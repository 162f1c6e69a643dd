import logging
from datetime import datetime

from mysql.connector import Error

from models import Team


logger = logging.getLogger(__name__)

TEAM_COLUMNS = ('name', 'is_active')


def _row_to_team(row):
    return Team(
        id=row['id'],
        name=row['name'],
        is_active=row['is_active'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


class TeamDbMixin:
    """Team table operations"""

    def create_team(self, team):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO teams (id, name, is_active, created_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s)
                """, (team.id, team.name, team.is_active, team.created_at, team.updated_at))
                conn.commit()
                return team

        except Error as e:
            logger.error(f"Failed to create team {team.name}: {e}")
            raise

    def get_team(self, team_id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM teams WHERE id = %s", (team_id,))
                row = cursor.fetchone()
                return _row_to_team(row) if row else None

        except Error as e:
            logger.error(f"Failed to load team {team_id}: {e}")
            raise

    def get_team_by_name(self, name):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM teams WHERE name = %s", (name,))
                row = cursor.fetchone()
                return _row_to_team(row) if row else None

        except Error as e:
            logger.error(f"Failed to load team by name: {e}")
            raise

    def get_teams(self):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM teams ORDER BY name")
                return [_row_to_team(row) for row in cursor.fetchall()]

        except Error as e:
            logger.error(f"Failed to list teams: {e}")
            raise

    def get_active_teams(self):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM teams WHERE is_active = TRUE ORDER BY name")
                return [_row_to_team(row) for row in cursor.fetchall()]

        except Error as e:
            logger.error(f"Failed to list active teams: {e}")
            raise

    def update_team(self, team_id, changes):
        """Merge changes onto a team; None when it does not exist"""
        fields = []
        params = []
        for column in TEAM_COLUMNS:
            if column in changes:
                fields.append(f"{column} = %s")
                params.append(changes[column])

        fields.append("updated_at = %s")
        params.append(datetime.now())
        params.append(team_id)

        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT id FROM teams WHERE id = %s", (team_id,))
                if not cursor.fetchone():
                    return None

                cursor.execute(f"""
                    UPDATE teams
                    SET {', '.join(fields)}
                    WHERE id = %s
                """, tuple(params))
                conn.commit()

                cursor.execute("SELECT * FROM teams WHERE id = %s", (team_id,))
                row = cursor.fetchone()
                return _row_to_team(row) if row else None

        except Error as e:
            logger.error(f"Failed to update team {team_id}: {e}")
            raise

    def delete_team(self, team_id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM teams WHERE id = %s", (team_id,))
                conn.commit()
                return cursor.rowcount > 0

        except Error as e:
            logger.error(f"Failed to delete team {team_id}: {e}")
            raise
