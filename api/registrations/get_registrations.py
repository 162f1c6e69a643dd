from flask import request, jsonify

from database import get_storage
from models import Category
from utils.decorators import permission_required, handle_db_errors

from . import registrations_bp


@registrations_bp.route('/registrations', methods=['GET'])
@permission_required('view_registrations')
@handle_db_errors
def get_registrations():
    """List registrations; search wins over the category filter"""
    storage = get_storage()
    search = (request.args.get('search') or '').strip()
    category = (request.args.get('category') or '').strip().lower()

    if search:
        registrations = storage.search_registrations(search)
    elif category in [c.value for c in Category]:
        registrations = storage.get_registrations_by_category(category)
    else:
        registrations = storage.get_registrations()

    return jsonify({
        'success': True,
        'data': [registration.to_dict() for registration in registrations],
        'total': len(registrations),
    })
