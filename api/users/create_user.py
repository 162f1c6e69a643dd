from flask import request, jsonify

from models import UserRole
from user_manager import get_user_manager
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.validators import validate_new_user

from . import users_bp, logger


@users_bp.route('/users', methods=['POST'])
@permission_required('manage_users')
@log_action('Create user')
@handle_db_errors
def create_user():
    data = validate_new_user(request.get_json(silent=True))

    user = get_user_manager().create_user(
        data['username'],
        data['password'],
        UserRole(data['role']),
    )

    logger.info(f"User {user.username} created with role {user.role.value}")

    return jsonify({
        'success': True,
        'message': 'User created',
        'data': user.to_dict(),
    }), 201
