#!/usr/bin/env python3
"""
Event Registration System - PDF reports

Two layouts on landscape A4: a Field/Value detail sheet for one registration
and a category roster with one row per registration.

Program labels are Malayalam. The base-14 fonts have no glyphs for them, so
PDF_FONT_PATH should point at a TrueType font covering the script (for
example Noto Sans Malayalam). Without one, each label is followed by its
canonical program id.
"""

import logging
import os
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from program_catalog import PROGRAM_LABELS, get_program_label, normalize_program_id
from utils.helpers import format_date

logger = logging.getLogger(__name__)

SYSTEM_TITLE = 'Registration Management System'
DETAIL_TITLE = 'Student Registration Details'

ROSTER_COLUMNS = ['Name', 'Team / Place', 'Stage', 'Non-Stage', 'Programs', 'Date']

HEADER_COLOR = HexColor('#2c3e50')
STRIPE_COLOR = HexColor('#f5f5f5')

BASE_FONT = 'Helvetica'
BASE_BOLD_FONT = 'Helvetica-Bold'


def register_report_font(font_path):
    """Register the TrueType body font; returns its name, or None to use the base font"""
    if not font_path:
        return None

    font_name = 'Report-' + os.path.splitext(os.path.basename(font_path))[0]
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name

    try:
        pdfmetrics.registerFont(TTFont(font_name, font_path))
    except (TTFError, OSError) as e:
        logger.error(f"Could not load report font {font_path}: {e}")
        return None
    logger.info(f"Registered report font {font_name} from {font_path}")
    return font_name


def program_text(program_id, with_id=False):
    """Label of a stored program token, followed by its canonical id when with_id is set"""
    label = get_program_label(program_id)
    normalized = normalize_program_id(program_id)
    if with_id and normalized in PROGRAM_LABELS:
        return f"{label} ({normalized})"
    return label


def _styles(body_font):
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Title'],
        fontSize=20,
        alignment=TA_CENTER,
        spaceAfter=6,
        fontName=BASE_BOLD_FONT
    ))
    styles.add(ParagraphStyle(
        name='ReportSubtitle',
        parent=styles['Normal'],
        fontSize=14,
        alignment=TA_CENTER,
        spaceAfter=12,
        fontName=BASE_FONT
    ))
    styles.add(ParagraphStyle(
        name='ReportCell',
        parent=styles['BodyText'],
        fontSize=9,
        leading=12,
        fontName=body_font
    ))
    return styles


def _table_style(body_font):
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), BASE_BOLD_FONT),
        ('FONTNAME', (0, 1), (-1, -1), body_font),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, STRIPE_COLOR]),
    ])


def _render(story, title):
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=title,
    )
    doc.build(story)
    return buffer.getvalue()


def _join_labels(program_ids, with_ids=False):
    return ', '.join(program_text(p, with_id=with_ids) for p in program_ids) or '-'


def registration_detail_rows(registration, public=False, with_ids=False):
    """Field/Value rows of the detail sheet; contact fields only for staff"""
    summary = registration.program_summary()
    rows = [['Full Name', registration.full_name or '-']]
    if not public:
        rows.append(['Aadhar Number', registration.aadhar_number or '-'])
        rows.append(['Phone Number', registration.phone_number or '-'])
    rows.extend([
        ['Place', registration.place or '-'],
        ['Team', registration.team_name or '-'],
        ['Category', registration.category.value.upper()],
        ['Stage Programs', _join_labels(summary['stagePrograms'], with_ids)],
        ['Non-Stage Programs', _join_labels(summary['nonStagePrograms'], with_ids)],
        ['Programs', _join_labels(registration.programs, with_ids)],
        ['Registration Date', format_date(registration.created_at)],
    ])
    return rows


def roster_row(registration, with_ids=False):
    summary = registration.program_summary()
    return [
        registration.full_name or '-',
        f"{registration.team_name or '-'} / {registration.place or '-'}",
        len(summary['stagePrograms']),
        len(summary['nonStagePrograms']),
        _join_labels(registration.programs, with_ids),
        format_date(registration.created_at),
    ]


def build_registration_pdf(registration, public=False, font_path=None):
    """Detail sheet for one registration, as PDF bytes"""
    font_name = register_report_font(font_path)
    body_font = font_name or BASE_FONT
    styles = _styles(body_font)
    cell = styles['ReportCell']

    rows = [['Field', 'Value']]
    detail_rows = registration_detail_rows(registration, public=public, with_ids=font_name is None)
    for field, value in detail_rows:
        rows.append([field, Paragraph(escape(str(value)), cell)])

    table = Table(rows, colWidths=[70 * mm, 190 * mm], repeatRows=1)
    table.setStyle(_table_style(body_font))

    story = [
        Paragraph(SYSTEM_TITLE, styles['ReportTitle']),
        Paragraph(DETAIL_TITLE, styles['ReportSubtitle']),
        Spacer(1, 6 * mm),
        table,
    ]
    logger.info(f"Rendering registration PDF {registration.id} (public={public}, font={body_font})")
    return _render(story, DETAIL_TITLE)


def build_category_report_pdf(registrations, category, generated_at=None, font_path=None):
    """Roster of registrations, as PDF bytes"""
    font_name = register_report_font(font_path)
    body_font = font_name or BASE_FONT
    styles = _styles(body_font)
    cell = styles['ReportCell']
    generated_at = generated_at or datetime.now()

    rows = [list(ROSTER_COLUMNS)]
    for registration in registrations:
        values = roster_row(registration, with_ids=font_name is None)
        values[0] = Paragraph(escape(values[0]), cell)
        values[1] = Paragraph(escape(values[1]), cell)
        values[4] = Paragraph(escape(values[4]), cell)
        rows.append(values)

    table = Table(
        rows,
        colWidths=[50 * mm, 60 * mm, 18 * mm, 22 * mm, 87 * mm, 25 * mm],
        repeatRows=1,
    )
    table.setStyle(_table_style(body_font))

    title = f"{category.upper()} Student Registration Report"
    story = [
        Paragraph(SYSTEM_TITLE, styles['ReportTitle']),
        Paragraph(title, styles['ReportSubtitle']),
        Paragraph(f"Total {category} Students: {len(registrations)}", styles['Normal']),
        Paragraph(f"Report Generated: {format_date(generated_at)}", styles['Normal']),
        Spacer(1, 6 * mm),
        table,
    ]
    logger.info(f"Rendering {category} roster PDF with {len(registrations)} rows (font={body_font})")
    return _render(story, title)
