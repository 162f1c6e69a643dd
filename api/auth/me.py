from flask import jsonify, session

from . import auth_bp


@auth_bp.route('/me', methods=['GET'])
def me():
    """Session introspection"""
    if not session.get('logged_in'):
        return jsonify({'authenticated': False})

    return jsonify({
        'authenticated': True,
        'user': {
            'id': session.get('user_id'),
            'username': session.get('username'),
            'role': session.get('user_role'),
        }
    })
