from flask import request, jsonify

from user_manager import get_user_manager
from utils.decorators import permission_required, handle_db_errors
from utils.errors import ValidationError, field_error
from utils.validators import ROLES

from . import users_bp


@users_bp.route('/users', methods=['GET'])
@permission_required('manage_users')
@handle_db_errors
def get_users():
    """Accounts without password hashes, optionally filtered by ?role="""
    role = (request.args.get('role') or '').strip() or None
    if role and role not in ROLES:
        raise ValidationError([field_error('role', f"Must be one of: {', '.join(ROLES)}")])

    users = get_user_manager().list_users(role)

    return jsonify({
        'success': True,
        'data': [user.to_dict() for user in users],
        'total': len(users),
    })
