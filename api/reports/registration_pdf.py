from io import BytesIO

from flask import current_app, send_file

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import NotFound
from utils.pdf_report import build_registration_pdf

from . import reports_bp, PDF_MIMETYPE


@reports_bp.route('/registrations/<registration_id>/pdf', methods=['GET'])
@permission_required('view_reports')
@log_action('Registration detail PDF')
@handle_db_errors
def registration_pdf(registration_id):
    registration = get_storage().get_registration(registration_id)
    if registration is None:
        raise NotFound('Registration not found')

    safe_name = ''.join(ch for ch in (registration.full_name or '') if ch.isalnum() or ch in '-_') or 'student'

    return send_file(
        BytesIO(build_registration_pdf(registration, font_path=current_app.config.get('PDF_FONT_PATH'))),
        mimetype=PDF_MIMETYPE,
        as_attachment=True,
        download_name=f'registration-{safe_name}.pdf',
    )
