import json
import logging
from datetime import datetime

from mysql.connector import Error


logger = logging.getLogger(__name__)


class SessionDbMixin:
    """Server-side session rows"""

    def load_session(self, sid):
        """Session data, or None when missing or expired"""
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute(
                    "SELECT data FROM sessions WHERE sid = %s AND expires_at > %s",
                    (sid, datetime.now()),
                )
                row = cursor.fetchone()
                return json.loads(row['data']) if row else None

        except Error as e:
            logger.error(f"Failed to load session: {e}")
            raise

    def store_session(self, sid, data, expires_at):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO sessions (sid, data, expires_at)
                    VALUES (%s, %s, %s)
                    ON DUPLICATE KEY UPDATE data = VALUES(data), expires_at = VALUES(expires_at)
                """, (sid, json.dumps(data), expires_at))
                conn.commit()

        except Error as e:
            logger.error(f"Failed to store session: {e}")
            raise

    def remove_session(self, sid):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM sessions WHERE sid = %s", (sid,))
                conn.commit()
                return cursor.rowcount > 0

        except Error as e:
            logger.error(f"Failed to remove session: {e}")
            raise

    def purge_expired_sessions(self):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM sessions WHERE expires_at <= %s", (datetime.now(),))
                conn.commit()
                return cursor.rowcount

        except Error as e:
            logger.error(f"Failed to purge expired sessions: {e}")
            raise
