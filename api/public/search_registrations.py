from flask import request, jsonify, current_app

from database import get_storage
from utils.decorators import handle_db_errors
from utils.errors import ValidationError, field_error

from . import public_bp


@public_bp.route('/search', methods=['GET'])
@handle_db_errors
def search_registrations():
    """Public lookup; results never carry contact or national ID fields"""
    name = (request.args.get('name') or '').strip()
    min_length = current_app.config.get('PUBLIC_SEARCH_MIN_LENGTH', 3)
    if len(name) < min_length:
        raise ValidationError(
            [field_error('name', f'Must be at least {min_length} characters')],
            'Search term too short',
        )

    registrations = get_storage().search_registrations(name)

    return jsonify({
        'success': True,
        'data': [registration.to_public_dict() for registration in registrations],
        'total': len(registrations),
    })
