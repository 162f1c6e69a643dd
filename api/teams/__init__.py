from flask import Blueprint
import logging


teams_bp = Blueprint('teams', __name__)

logger = logging.getLogger(__name__)

# One route per module
from . import (
    get_active_teams,
    admin_get_teams,
    admin_create_team,
    admin_get_team,
    admin_update_team,
    admin_delete_team,
)

__all__ = ['teams_bp']
