from io import BytesIO

from flask import current_app, send_file

from database import get_storage
from utils.decorators import handle_db_errors
from utils.errors import NotFound
from utils.pdf_report import build_registration_pdf

from . import public_bp


@public_bp.route('/registrations/<registration_id>/pdf', methods=['GET'])
@handle_db_errors
def registration_pdf(registration_id):
    """Detail sheet without contact or national ID fields"""
    registration = get_storage().get_registration(registration_id)
    if registration is None:
        raise NotFound('Registration not found')

    return send_file(
        BytesIO(build_registration_pdf(
            registration, public=True, font_path=current_app.config.get('PDF_FONT_PATH'),
        )),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=f'registration-{registration.id}.pdf',
    )
