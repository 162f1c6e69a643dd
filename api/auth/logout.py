from flask import jsonify, session

from utils.decorators import log_action

from . import auth_bp, logger


@auth_bp.route('/logout', methods=['POST'])
@log_action('User logout')
def logout():
    """User logout"""
    username = session.get('username', 'Unknown')

    session.clear()

    logger.info(f"User {username} logged out")

    return jsonify({
        'success': True,
        'message': 'Logout successful'
    })
