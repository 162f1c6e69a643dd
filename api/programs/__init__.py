from flask import Blueprint
import logging


programs_bp = Blueprint('programs', __name__)

logger = logging.getLogger(__name__)

from . import (
    get_programs,
    get_catalog,
    admin_get_programs,
    admin_create_program,
    admin_get_program,
    admin_update_program,
    admin_delete_program,
)

__all__ = ['programs_bp']
