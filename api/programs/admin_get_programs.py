from flask import request, jsonify

from database import get_storage
from utils.decorators import permission_required, handle_db_errors

from . import programs_bp


@programs_bp.route('/admin/programs', methods=['GET'])
@permission_required('manage_programs')
@handle_db_errors
def admin_get_programs():
    """Every program, active or not"""
    storage = get_storage()
    category = (request.args.get('category') or '').strip().lower()

    programs = storage.get_programs_by_category(category) if category else storage.get_programs()

    return jsonify({
        'success': True,
        'data': [program.to_dict() for program in programs],
        'total': len(programs),
    })
