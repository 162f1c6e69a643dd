from flask import request, jsonify, current_app

from database import get_storage
from utils.decorators import handle_db_errors

from . import public_bp


@public_bp.route('/suggestions', methods=['GET'])
@handle_db_errors
def get_suggestions():
    """Name autocomplete: {id, fullName, place} only"""
    name = (request.args.get('name') or '').strip()
    if len(name) < current_app.config.get('SUGGESTION_MIN_LENGTH', 2):
        return jsonify({'success': True, 'data': [], 'total': 0})

    needle = name.lower()
    limit = current_app.config.get('SUGGESTION_LIMIT', 10)
    matches = [
        registration for registration in get_storage().search_registrations(name)
        if needle in (registration.full_name or '').lower()
    ][:limit]

    return jsonify({
        'success': True,
        'data': [registration.to_suggestion() for registration in matches],
        'total': len(matches),
    })
