from flask import request, jsonify

from database import get_storage
from utils.decorators import handle_db_errors

from . import programs_bp


@programs_bp.route('/programs', methods=['GET'])
@handle_db_errors
def get_programs():
    """Active programs for the public registration form"""
    category = (request.args.get('category') or '').strip().lower()

    programs = get_storage().get_active_programs()
    if category:
        programs = [program for program in programs if program.category.value == category]

    return jsonify({
        'success': True,
        'data': [program.to_dict() for program in programs],
        'total': len(programs),
    })
