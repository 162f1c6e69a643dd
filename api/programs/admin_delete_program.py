from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import NotFound

from . import programs_bp, logger


@programs_bp.route('/admin/programs/<id>', methods=['DELETE'])
@permission_required('manage_programs')
@log_action('Delete program')
@handle_db_errors
def admin_delete_program(id):
    """Delete a program; stored registrations keep their ids and labels"""
    if not get_storage().delete_program(id):
        raise NotFound('Program not found')

    logger.info(f"Program {id} deleted")

    return jsonify({
        'success': True,
        'message': 'Program deleted successfully'
    })
