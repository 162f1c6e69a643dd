from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, handle_db_errors
from utils.errors import NotFound

from . import teams_bp


@teams_bp.route('/admin/teams/<team_id>', methods=['GET'])
@permission_required('manage_teams')
@handle_db_errors
def admin_get_team(team_id):
    team = get_storage().get_team(team_id)
    if team is None:
        raise NotFound('Team not found')

    return jsonify({'success': True, 'data': team.to_dict()})
