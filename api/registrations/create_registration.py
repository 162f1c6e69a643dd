from flask import request, jsonify

from database import get_storage
from models import Registration
from utils.decorators import log_action, handle_db_errors
from utils.validators import validate_registration

from . import registrations_bp, logger, canonical_programs, ensure_programs_offered, ensure_team_allowed


@registrations_bp.route('/registrations', methods=['POST'])
@log_action('Create registration')
@handle_db_errors
def create_registration():
    """Public registration form submission"""
    data = validate_registration(request.get_json(silent=True))
    data['programs'] = canonical_programs(data['programs'])

    ensure_programs_offered(data['category'], data['programs'])
    ensure_team_allowed(data['team_name'])

    registration = get_storage().create_registration(Registration(**data))

    logger.info(f"Registration {registration.id} created for {registration.category.value}")

    return jsonify({
        'success': True,
        'message': 'Registration created',
        'data': registration.to_dict(),
    }), 201
