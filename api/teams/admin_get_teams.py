from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, handle_db_errors

from . import teams_bp


@teams_bp.route('/admin/teams', methods=['GET'])
@permission_required('manage_teams')
@handle_db_errors
def admin_get_teams():
    teams = get_storage().get_teams()
    return jsonify({
        'success': True,
        'data': [team.to_dict() for team in teams],
        'total': len(teams),
    })
