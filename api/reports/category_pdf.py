from datetime import datetime
from io import BytesIO

from flask import current_app, send_file

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.pdf_report import build_category_report_pdf

from . import reports_bp, PDF_MIMETYPE, require_category


@reports_bp.route('/<category>/pdf', methods=['GET'])
@permission_required('view_reports')
@log_action('Category roster PDF')
@handle_db_errors
def category_pdf(category):
    category = require_category(category)
    registrations = get_storage().get_registrations_by_category(category)

    return send_file(
        BytesIO(build_category_report_pdf(
            registrations, category, font_path=current_app.config.get('PDF_FONT_PATH'),
        )),
        mimetype=PDF_MIMETYPE,
        as_attachment=True,
        download_name=f"{category}-registrations-{datetime.now():%Y-%m-%d}.pdf",
    )
