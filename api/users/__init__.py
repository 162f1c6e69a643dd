from flask import Blueprint
import logging


users_bp = Blueprint('users', __name__)

logger = logging.getLogger(__name__)

from . import (
    get_users,
    create_user,
)

__all__ = ['users_bp']
