from flask import request, jsonify

from database import get_storage
from models import Team
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import Conflict
from utils.validators import validate_team

from . import teams_bp, logger


@teams_bp.route('/admin/teams', methods=['POST'])
@permission_required('manage_teams')
@log_action('Create team')
@handle_db_errors
def admin_create_team():
    storage = get_storage()
    data = validate_team(request.get_json(silent=True))

    if storage.get_team_by_name(data['name']):
        raise Conflict('Team name already exists')

    team = storage.create_team(Team(**data))

    logger.info(f"Team {team.name} created")

    return jsonify({
        'success': True,
        'message': 'Team created',
        'data': team.to_dict(),
    }), 201
