from datetime import datetime
from io import BytesIO

from flask import send_file

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.excel_handler import ExcelHandler

from . import reports_bp, XLSX_MIMETYPE, require_category


@reports_bp.route('/<category>/excel', methods=['GET'])
@permission_required('view_reports')
@log_action('Category roster Excel')
@handle_db_errors
def category_excel(category):
    category = require_category(category)
    registrations = get_storage().get_registrations_by_category(category)

    return send_file(
        BytesIO(ExcelHandler().export_registrations(registrations, category)),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"{category}-registrations-{datetime.now():%Y-%m-%d}.xlsx",
    )
