from flask import jsonify

from database import get_storage
from models import Statistics
from utils.decorators import permission_required, handle_db_errors

from . import registrations_bp


@registrations_bp.route('/statistics', methods=['GET'])
@permission_required('view_statistics')
@handle_db_errors
def get_statistics():
    """Registration counts: total, per category and today"""
    statistics = Statistics.from_registrations(get_storage().get_registrations())
    return jsonify({'success': True, 'data': statistics.to_dict()})
