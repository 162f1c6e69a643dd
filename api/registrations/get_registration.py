from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, handle_db_errors
from utils.errors import NotFound

from . import registrations_bp


@registrations_bp.route('/registrations/<registration_id>', methods=['GET'])
@permission_required('view_registrations')
@handle_db_errors
def get_registration(registration_id):
    registration = get_storage().get_registration(registration_id)
    if registration is None:
        raise NotFound('Registration not found')

    return jsonify({'success': True, 'data': registration.to_dict()})
