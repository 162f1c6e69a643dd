from flask import request, jsonify, session

from user_manager import get_user_manager
from utils.decorators import log_action, handle_db_errors
from utils.validators import validate_login

from . import auth_bp, logger


@auth_bp.route('/login', methods=['POST'])
@log_action('User login')
@handle_db_errors
def login():
    """User login"""
    username, password = validate_login(request.get_json(silent=True))

    user = get_user_manager().authenticate_user(username, password)

    # New session id on every login
    session.clear()
    session.regenerate()
    session['logged_in'] = True
    session['user_id'] = user.id
    session['username'] = user.username
    session['user_role'] = user.role.value
    session.permanent = True

    logger.info(f"User {username} logged in")

    user_data = user.to_dict()

    return jsonify({
        'success': True,
        'message': 'Login successful',
        'data': user_data,
        'user': user_data,
    })
