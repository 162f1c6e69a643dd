from flask import request, jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import Conflict, NotFound
from utils.validators import validate_team

from . import teams_bp, logger


@teams_bp.route('/admin/teams/<team_id>', methods=['PUT'])
@permission_required('manage_teams')
@log_action('Update team')
@handle_db_errors
def admin_update_team(team_id):
    """Rename or (de)activate a team; registrations keep the name they were stored with"""
    storage = get_storage()
    changes = validate_team(request.get_json(silent=True), partial=True)

    existing = storage.get_team(team_id)
    if existing is None:
        raise NotFound('Team not found')

    new_name = changes.get('name')
    if new_name and new_name != existing.name and storage.get_team_by_name(new_name):
        raise Conflict('Team name already exists')

    team = storage.update_team(team_id, changes)
    if team is None:
        raise NotFound('Team not found')

    logger.info(f"Team {team_id} updated")

    return jsonify({
        'success': True,
        'message': 'Team updated',
        'data': team.to_dict(),
    })
