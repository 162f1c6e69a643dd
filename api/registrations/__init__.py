from flask import Blueprint, current_app
import logging

from database import get_storage
from program_catalog import normalize_program_ids
from utils.errors import ValidationError, field_error


registrations_bp = Blueprint('registrations', __name__)

logger = logging.getLogger(__name__)


def canonical_programs(program_ids):
    """Normalized ids, duplicates removed, first occurrence kept"""
    return list(dict.fromkeys(normalize_program_ids(program_ids)))


def ensure_programs_offered(category, program_ids):
    """Every id must be an active program of the category in the live catalog"""
    if not program_ids:
        return
    offered = {
        program.program_id
        for program in get_storage().get_active_programs()
        if program.category.value == category
    }
    rejected = [program_id for program_id in program_ids if program_id not in offered]
    if rejected:
        raise ValidationError([
            field_error('programs', f"Not offered for {category}: {', '.join(rejected)}")
        ])


def ensure_team_allowed(team_name):
    """With REQUIRE_ACTIVE_TEAM, the team name must belong to an active team"""
    if not current_app.config.get('REQUIRE_ACTIVE_TEAM'):
        return
    team = get_storage().get_team_by_name(team_name)
    if team is None or not team.is_active:
        raise ValidationError([field_error('teamName', 'Must be an active team')])


from . import (
    create_registration,
    get_registrations,
    get_registration,
    update_registration,
    delete_registration,
    get_statistics,
)

__all__ = ['registrations_bp']
