from flask import request, jsonify

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import NotFound
from utils.validators import validate_registration

from . import registrations_bp, logger, canonical_programs, ensure_programs_offered, ensure_team_allowed


@registrations_bp.route('/registrations/<registration_id>', methods=['PUT'])
@permission_required('edit_registrations')
@log_action('Update registration')
@handle_db_errors
def update_registration(registration_id):
    """Partial update

    Programs already stored on the row stay valid even if the catalog has
    since dropped them; only newly added ids are checked. A category change
    rechecks the whole program list.
    """
    storage = get_storage()
    changes = validate_registration(request.get_json(silent=True), partial=True)

    existing = storage.get_registration(registration_id)
    if existing is None:
        raise NotFound('Registration not found')

    if 'programs' in changes:
        changes['programs'] = canonical_programs(changes['programs'])

    category = changes.get('category') or existing.category.value
    programs = changes.get('programs', existing.normalized_programs)
    if category != existing.category.value:
        ensure_programs_offered(category, programs)
    else:
        stored = set(existing.normalized_programs)
        ensure_programs_offered(category, [p for p in programs if p not in stored])

    if 'team_name' in changes:
        ensure_team_allowed(changes['team_name'])

    registration = storage.update_registration(registration_id, changes)
    if registration is None:
        raise NotFound('Registration not found')

    logger.info(f"Registration {registration_id} updated: {', '.join(sorted(changes))}")

    return jsonify({
        'success': True,
        'message': 'Registration updated',
        'data': registration.to_dict(),
    })
