from flask import jsonify

from database import get_storage
from utils.decorators import permission_required, handle_db_errors
from utils.errors import NotFound

from . import programs_bp


@programs_bp.route('/admin/programs/<id>', methods=['GET'])
@permission_required('manage_programs')
@handle_db_errors
def admin_get_program(id):
    program = get_storage().get_program(id)
    if program is None:
        raise NotFound('Program not found')

    return jsonify({'success': True, 'data': program.to_dict()})
