from flask import jsonify

from database import get_storage
from utils.decorators import handle_db_errors

from . import teams_bp


@teams_bp.route('/teams', methods=['GET'])
@handle_db_errors
def get_active_teams():
    """Active teams for the public registration form"""
    teams = get_storage().get_active_teams()
    return jsonify({
        'success': True,
        'data': [{'id': team.id, 'name': team.name} for team in teams],
        'total': len(teams),
    })
