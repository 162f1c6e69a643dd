"""
Tests for report generation
Tests for: detail sheet and roster rows, PDF / XLSX endpoints, custom report filters
"""
import os
from datetime import datetime, timedelta
from io import BytesIO

import pandas as pd
import pdfplumber
import pytest
import reportlab

from app import create_app
from models import Registration
from program_catalog import get_program_label
from utils.excel_handler import ExcelHandler
from utils.pdf_report import (
    ROSTER_COLUMNS,
    build_category_report_pdf,
    build_registration_pdf,
    program_text,
    register_report_font,
    registration_detail_rows,
    roster_row,
)
from utils.report_filters import filter_registrations

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME, login, pdf_text

NOW = datetime(2024, 3, 15, 12, 0)


def make(name, category='junior', programs=None, created_at=NOW, **extra):
    return Registration(
        full_name=name, place='Kochi', team_name='Blue', category=category,
        programs=programs or ['junior-qiraat'], created_at=created_at, **extra,
    )


class TestRows:
    """Test row builders"""

    def test_detail_rows_for_staff_and_public(self):
        registration = make('A', programs=['qiraat', 'junior-drawing'],
                            phone_number='9876543210', aadhar_number='123456789012')

        staff = dict(registration_detail_rows(registration))
        public = dict(registration_detail_rows(registration, public=True))

        assert staff['Phone Number'] == '9876543210'
        assert staff['Aadhar Number'] == '123456789012'
        assert 'Phone Number' not in public
        assert 'Aadhar Number' not in public
        assert public['Stage Programs'] == get_program_label('junior-qiraat')
        assert public['Non-Stage Programs'] == get_program_label('junior-drawing')
        assert public['Category'] == 'JUNIOR'
        assert public['Registration Date'] == '15/03/2024'

    def test_detail_field_order(self):
        fields = [field for field, _ in registration_detail_rows(make('A'))]
        assert fields == [
            'Full Name', 'Aadhar Number', 'Phone Number', 'Place', 'Team', 'Category',
            'Stage Programs', 'Non-Stage Programs', 'Programs', 'Registration Date',
        ]

    def test_roster_row_counts_and_labels(self):
        row = roster_row(make('A', programs=['junior-qiraat', 'junior-bank', 'drawing', 'retired']))

        assert row[0] == 'A'
        assert row[1] == 'Blue / Kochi'
        assert row[2] == 2
        assert row[3] == 1
        assert row[4].split(', ')[-1] == 'retired'
        assert row[5] == '15/03/2024'


class TestBuilders:
    """Test document builders"""

    def test_registration_pdf(self):
        assert build_registration_pdf(make('A & <B>')).startswith(b'%PDF')

    def test_empty_roster_pdf(self):
        assert build_category_report_pdf([], 'senior').startswith(b'%PDF')

    def test_excel_roster_columns(self):
        content = ExcelHandler().export_registrations([make('A'), make('B')], 'junior')

        frame = pd.read_excel(BytesIO(content), sheet_name='Junior Registrations')
        assert list(frame.columns) == ROSTER_COLUMNS
        assert list(frame['Name']) == ['A', 'B']


class TestReportFont:
    """Test program labels in PDF text"""

    @pytest.fixture
    def ttf_path(self):
        return os.path.join(os.path.dirname(reportlab.__file__), 'fonts', 'Vera.ttf')

    def test_detail_sheet_without_font_prints_program_ids(self):
        text = pdf_text(build_registration_pdf(make('A', programs=['qiraat', 'junior-drawing'])))

        assert '(junior-qiraat)' in text
        assert '(junior-drawing)' in text

    def test_roster_without_font_prints_program_ids(self):
        text = pdf_text(build_category_report_pdf([make('A')], 'junior'))

        assert '(junior-qiraat)' in text
        assert 'Total junior Students: 1' in text

    def test_unknown_program_is_printed_verbatim(self):
        text = pdf_text(build_registration_pdf(make('A', programs=['retired'])))

        assert 'retired' in text
        assert '(retired)' not in text

    def test_configured_font_prints_labels_only(self, ttf_path):
        content = build_registration_pdf(make('A'), font_path=ttf_path)

        text = pdf_text(content)
        assert 'Full Name' in text
        assert '(junior-qiraat)' not in text
        with pdfplumber.open(BytesIO(content)) as pdf:
            fonts = {char['fontname'] for char in pdf.pages[0].chars}
        assert any('Helvetica' not in font for font in fonts)

    def test_register_font_is_idempotent(self, ttf_path):
        assert register_report_font(ttf_path) == 'Report-Vera'
        assert register_report_font(ttf_path) == 'Report-Vera'

    def test_missing_font_falls_back_to_program_ids(self):
        assert register_report_font(None) is None
        assert register_report_font('/nonexistent/NotoSansMalayalam.ttf') is None

        text = pdf_text(build_registration_pdf(make('A'), font_path='/nonexistent/NotoSansMalayalam.ttf'))
        assert '(junior-qiraat)' in text

    def test_program_text(self):
        assert program_text('qiraat') == get_program_label('junior-qiraat')
        assert program_text('qiraat', with_id=True) == f"{get_program_label('junior-qiraat')} (junior-qiraat)"
        assert program_text('retired', with_id=True) == 'retired'


class TestFilters:
    """Test custom report filtering"""

    @pytest.fixture
    def registrations(self):
        return [
            make('today-stage', programs=['junior-qiraat'], created_at=NOW - timedelta(hours=1)),
            make('week-nonstage', programs=['drawing'], created_at=NOW - timedelta(days=3)),
            make('month-senior', category='senior', programs=['senior-qiraat', 'poster'],
                 created_at=NOW - timedelta(days=20)),
            make('old-legacy', programs=['retired'], created_at=NOW - timedelta(days=60)),
        ]

    def names(self, registrations):
        return [r.full_name for r in registrations]

    def test_no_filters(self, registrations):
        assert len(filter_registrations(registrations, now=NOW)) == 4

    def test_category(self, registrations):
        assert self.names(filter_registrations(registrations, category='senior', now=NOW)) == ['month-senior']

    def test_program_type(self, registrations):
        assert self.names(filter_registrations(registrations, program_type='stage', now=NOW)) == [
            'today-stage', 'month-senior'
        ]
        assert self.names(filter_registrations(registrations, program_type='non-stage', now=NOW)) == [
            'week-nonstage', 'month-senior'
        ]

    @pytest.mark.parametrize('date_range, expected', [
        ('today', ['today-stage']),
        ('week', ['today-stage', 'week-nonstage']),
        ('month', ['today-stage', 'week-nonstage', 'month-senior']),
        ('all', ['today-stage', 'week-nonstage', 'month-senior', 'old-legacy']),
    ])
    def test_date_range(self, registrations, date_range, expected):
        assert self.names(filter_registrations(registrations, date_range=date_range, now=NOW)) == expected


class TestEndpoints:
    """Test /api/reports"""

    @pytest.fixture
    def stored(self, storage):
        storage.create_registration(make('A', created_at=datetime.now()))
        storage.create_registration(make('S', category='senior', programs=['senior-qiraat'], created_at=datetime.now()))

    def test_category_pdf(self, leader_client, stored):
        response = leader_client.get('/api/reports/junior/pdf')
        assert response.status_code == 200
        assert response.mimetype == 'application/pdf'
        assert 'attachment' in response.headers['Content-Disposition']
        text = pdf_text(response.data)
        assert '(junior-qiraat)' in text
        assert '(senior-qiraat)' not in text

    def test_category_pdf_uses_configured_font(self):
        font_path = os.path.join(os.path.dirname(reportlab.__file__), 'fonts', 'Vera.ttf')
        app = create_app('testing', {'PDF_FONT_PATH': font_path})
        app.extensions['storage'].create_registration(make('A', created_at=datetime.now()))
        client = app.test_client()
        assert login(client, ADMIN_USERNAME, ADMIN_PASSWORD).status_code == 200

        response = client.get('/api/reports/junior/pdf')

        assert response.status_code == 200
        assert '(junior-qiraat)' not in pdf_text(response.data)

    def test_category_excel(self, admin_client, stored):
        response = admin_client.get('/api/reports/senior/excel')

        assert response.status_code == 200
        frame = pd.read_excel(BytesIO(response.data))
        assert list(frame['Name']) == ['S']

    def test_unknown_category(self, admin_client):
        assert admin_client.get('/api/reports/adult/pdf').status_code == 400

    def test_registration_pdf(self, admin_client, storage, stored):
        registration = storage.get_registrations_by_category('junior')[0]
        response = admin_client.get(f'/api/reports/registrations/{registration.id}/pdf')
        assert response.status_code == 200
        assert response.data.startswith(b'%PDF')
        assert admin_client.get('/api/reports/registrations/missing/pdf').status_code == 404

    def test_custom_json(self, admin_client, stored):
        body = admin_client.get('/api/reports/custom?category=senior&programType=stage&dateRange=today').get_json()

        assert [r['fullName'] for r in body['data']] == ['S']
        assert body['filters'] == {'category': 'senior', 'programType': 'stage', 'dateRange': 'today'}

    @pytest.mark.parametrize('fmt, mimetype', [
        ('pdf', 'application/pdf'),
        ('excel', 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'),
    ])
    def test_custom_downloads(self, admin_client, stored, fmt, mimetype):
        response = admin_client.get(f'/api/reports/custom?format={fmt}')
        assert response.status_code == 200
        assert response.mimetype == mimetype

    @pytest.mark.parametrize('query', ['programType=both', 'dateRange=year', 'format=csv', 'category=adult'])
    def test_custom_rejects_bad_filters(self, admin_client, query):
        assert admin_client.get(f'/api/reports/custom?{query}').status_code == 400


class TestSystemStatus:
    """Test /api/system/status"""

    def test_status(self, leader_client):
        data = leader_client.get('/api/system/status').get_json()['data']

        assert data['overallStatus'] == 'healthy'
        assert data['health']['database']['backend'] == 'memory'
        assert data['metrics']['activePrograms'] > 0
