from flask import request, jsonify

from database import get_storage
from models import Program
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import Conflict
from utils.validators import validate_program

from . import programs_bp, logger


@programs_bp.route('/admin/programs', methods=['POST'])
@permission_required('manage_programs')
@log_action('Create program')
@handle_db_errors
def admin_create_program():
    storage = get_storage()
    data = validate_program(request.get_json(silent=True))

    if storage.get_program_by_program_id(data['program_id']):
        raise Conflict('Program ID already exists')

    program = storage.create_program(Program(**data))

    logger.info(f"Program {program.program_id} created")

    return jsonify({
        'success': True,
        'message': 'Program created',
        'data': program.to_dict(),
    }), 201
