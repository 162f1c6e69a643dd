import logging

from mysql.connector import Error

from models import User


logger = logging.getLogger(__name__)


def _row_to_user(row):
    return User(
        id=row['id'],
        username=row['username'],
        password_hash=row['password_hash'],
        role=row['role'],
        created_at=row['created_at'],
    )


class UserDbMixin:
    """User table operations.

    Requires the host class to provide self.get_connection().
    """

    def create_user(self, user):
        """Insert a user; the caller has already hashed the password"""
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO users (id, username, password_hash, role, created_at)
                    VALUES (%s, %s, %s, %s, %s)
                """, (user.id, user.username, user.password_hash, user.role.value, user.created_at))
                conn.commit()
                return user

        except Error as e:
            logger.error(f"Failed to create user {user.username}: {e}")
            raise

    def get_user_by_username(self, username):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM users WHERE username = %s", (username,))
                row = cursor.fetchone()
                return _row_to_user(row) if row else None

        except Error as e:
            logger.error(f"Failed to load user by username: {e}")
            raise

    def get_user_by_id(self, user_id):
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute("SELECT * FROM users WHERE id = %s", (user_id,))
                row = cursor.fetchone()
                return _row_to_user(row) if row else None

        except Error as e:
            logger.error(f"Failed to load user {user_id}: {e}")
            raise

    def get_all_users(self, role=None):
        """All users, admins first, newest first within a role"""
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)

                if role:
                    cursor.execute("SELECT * FROM users WHERE role = %s ORDER BY created_at DESC", (role,))
                else:
                    cursor.execute("""
                        SELECT * FROM users
                        ORDER BY
                            CASE role
                                WHEN 'admin' THEN 1
                                WHEN 'team_leader' THEN 2
                                ELSE 3
                            END,
                            created_at DESC
                    """)

                return [_row_to_user(row) for row in cursor.fetchall()]

        except Error as e:
            logger.error(f"Failed to list users: {e}")
            raise
