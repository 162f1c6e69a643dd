from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import NotFound

from . import teams_bp, logger


@teams_bp.route('/admin/teams/<team_id>', methods=['DELETE'])
@permission_required('manage_teams')
@log_action('Delete team')
@handle_db_errors
def admin_delete_team(team_id):
    if not get_storage().delete_team(team_id):
        raise NotFound('Team not found')

    logger.info(f"Team {team_id} deleted")

    return jsonify({
        'success': True,
        'message': 'Team deleted successfully'
    })
