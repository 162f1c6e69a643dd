from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import NotFound

from . import registrations_bp, logger


@registrations_bp.route('/registrations/<registration_id>', methods=['DELETE'])
@permission_required('delete_registrations')
@log_action('Delete registration')
@handle_db_errors
def delete_registration(registration_id):
    if not get_storage().delete_registration(registration_id):
        raise NotFound('Registration not found')

    logger.info(f"Registration {registration_id} deleted")

    return jsonify({
        'success': True,
        'message': 'Registration deleted successfully'
    })
