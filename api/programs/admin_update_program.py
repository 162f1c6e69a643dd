from flask import request, jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import Conflict, NotFound
from utils.validators import validate_program

from . import programs_bp, logger


@programs_bp.route('/admin/programs/<id>', methods=['PUT'])
@permission_required('manage_programs')
@log_action('Update program')
@handle_db_errors
def admin_update_program(id):
    """Partial update

    programId is unique, and cannot change while registrations store it.
    """
    storage = get_storage()
    changes = validate_program(request.get_json(silent=True), partial=True)

    existing = storage.get_program(id)
    if existing is None:
        raise NotFound('Program not found')

    new_program_id = changes.get('program_id')
    if new_program_id and new_program_id != existing.program_id:
        if storage.get_program_by_program_id(new_program_id):
            raise Conflict('Program ID already exists')
        references = storage.count_registrations_with_program(existing.program_id)
        if references:
            raise Conflict(
                f'Program ID is used by {references} registration(s) and cannot be changed'
            )

    program = storage.update_program(id, changes)
    if program is None:
        raise NotFound('Program not found')

    logger.info(f"Program {program.program_id} updated")

    return jsonify({
        'success': True,
        'message': 'Program updated',
        'data': program.to_dict(),
    })
