from flask import jsonify

from program_catalog import catalog_snapshot

from . import programs_bp


@programs_bp.route('/programs/catalog', methods=['GET'])
def get_catalog():
    """Alias, label and stage / non-stage tables for rendering stored registrations"""
    return jsonify({'success': True, 'data': catalog_snapshot()})
