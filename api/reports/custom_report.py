from datetime import datetime
from io import BytesIO

from flask import current_app, request, jsonify, send_file

from database import get_storage
from utils.decorators import permission_required, log_action, handle_db_errors
from utils.errors import ValidationError, field_error
from utils.excel_handler import ExcelHandler
from utils.pdf_report import build_category_report_pdf
from utils.report_filters import filter_registrations, parse_report_filters

from . import reports_bp, logger, PDF_MIMETYPE, XLSX_MIMETYPE

FORMATS = ('json', 'pdf', 'excel')


@reports_bp.route('/custom', methods=['GET'])
@permission_required('view_reports')
@log_action('Custom report')
@handle_db_errors
def custom_report():
    """Filtered roster

    Query args: category (junior|senior|all), programType (stage|non-stage|all),
    dateRange (today|week|month|all), format (json|pdf|excel).
    """
    filters = parse_report_filters(request.args)
    output_format = (request.args.get('format') or 'json').strip().lower()
    if output_format not in FORMATS:
        raise ValidationError([field_error('format', f"Must be one of: {', '.join(FORMATS)}")])

    now = datetime.now()
    registrations = filter_registrations(get_storage().get_registrations(), now=now, **filters)
    logger.info(f"Custom report {filters} matched {len(registrations)} registrations")

    if output_format == 'json':
        return jsonify({
            'success': True,
            'data': [registration.to_dict() for registration in registrations],
            'total': len(registrations),
            'filters': {
                'category': filters['category'],
                'programType': filters['program_type'],
                'dateRange': filters['date_range'],
            },
        })

    report_category = filters['category'] if filters['category'] != 'all' else 'custom'
    if output_format == 'pdf':
        content = build_category_report_pdf(
            registrations, report_category, generated_at=now,
            font_path=current_app.config.get('PDF_FONT_PATH'),
        )
        mimetype, extension = PDF_MIMETYPE, 'pdf'
    else:
        content = ExcelHandler().export_registrations(registrations, report_category)
        mimetype, extension = XLSX_MIMETYPE, 'xlsx'

    return send_file(
        BytesIO(content),
        mimetype=mimetype,
        as_attachment=True,
        download_name=f"custom-report-{now:%Y-%m-%d}.{extension}",
    )
