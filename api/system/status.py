from flask import jsonify, current_app
from datetime import datetime

from database import get_storage
from utils.decorators import permission_required

from . import system_bp, logger


def _overall_status(checks):
    statuses = [check.get('status') for check in checks.values()]
    if any(s == 'error' for s in statuses):
        return 'error'
    if any(s == 'warning' for s in statuses):
        return 'warning'
    return 'healthy'


@system_bp.route('/status', methods=['GET'])
@permission_required('view_system_status')
def system_status():
    """Storage health and catalog / registration metrics"""
    storage = get_storage()
    health_status = {}

    try:
        storage.ping()
        health_status['database'] = {
            'status': 'healthy',
            'message': 'Storage reachable',
            'backend': storage.backend_name,
        }
    except Exception as e:
        logger.error(f"Storage ping failed: {e}")
        health_status['database'] = {
            'status': 'error',
            'message': 'Storage unreachable',
            'backend': storage.backend_name,
        }

    metrics = {}
    try:
        programs = storage.get_programs()
        registrations = storage.get_registrations()
        metrics = {
            'totalPrograms': len(programs),
            'activePrograms': sum(1 for program in programs if program.is_active),
            'activeTeams': len(storage.get_active_teams()),
            'totalRegistrations': len(registrations),
        }
        health_status['catalog'] = {
            'status': 'healthy' if metrics['activePrograms'] else 'warning',
            'message': (
                f"{metrics['activePrograms']} active programs"
                if metrics['activePrograms'] else 'No active programs; run `flask init-db`'
            ),
        }
    except Exception as e:
        logger.error(f"Metrics collection failed: {e}")
        health_status['catalog'] = {
            'status': 'error',
            'message': 'Catalog metrics unavailable',
        }

    return jsonify({
        'success': True,
        'data': {
            'system': current_app.config.get('SYSTEM_NAME'),
            'version': current_app.config.get('SYSTEM_VERSION'),
            'environment': current_app.config.get('ENV_NAME'),
            'overallStatus': _overall_status(health_status),
            'health': health_status,
            'metrics': metrics,
            'checkTime': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        },
    })
