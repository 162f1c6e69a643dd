#!/usr/bin/env python3
"""
Event Registration System - decorators (access control and logging)
"""

from functools import wraps
import logging
import time

from flask import session, jsonify, current_app
from mysql.connector import Error as MySQLError, IntegrityError

from utils.errors import ApiError, AuthenticationRequired, AuthorizationDenied, Conflict

logger = logging.getLogger(__name__)


def _require_login():
    if not session.get('logged_in'):
        raise AuthenticationRequired()


def has_permission(role, permission):
    role_permissions = current_app.config.get('ROLE_PERMISSIONS', {})
    return permission in role_permissions.get(role, [])


def permission_required(permission):
    """Capability check against ROLE_PERMISSIONS

    Args:
        permission: capability name
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            _require_login()
            if not has_permission(session.get('user_role'), permission):
                raise AuthorizationDenied()
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def log_action(action_name):
    """Log start, success and failure of an operation

    Args:
        action_name: operation name
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user_id = session.get('user_id')
            user_name = session.get('username', 'anonymous')

            start_time = time.perf_counter()
            logger.info(f"User {user_name} (ID: {user_id}) started: {action_name}")

            try:
                result = f(*args, **kwargs)

                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    f"User {user_name} (ID: {user_id}) completed: {action_name}, {duration_ms:.1f} ms"
                )

                return result

            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.warning(
                    f"User {user_name} (ID: {user_id}) failed: {action_name}, {duration_ms:.1f} ms, error: {e}"
                )
                raise

        return decorated_function
    return decorator


def handle_db_errors(f):
    """Map database failures to API responses"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ApiError:
            raise
        except IntegrityError as e:
            # A unique index caught a race the pre-read missed
            logger.warning(f"Integrity error: {e}")
            raise Conflict()
        except MySQLError as e:
            logger.error(f"Database operation failed: {e}")
            return jsonify({
                'success': False,
                'message': 'Database operation failed, please retry later',
            }), 500

    return decorated_function
