"""
Integration Tests for public endpoints
Tests for: program listing, autocomplete suggestions, public search sanitization
"""
from datetime import datetime, timedelta

import pytest

from models import Registration

from conftest import pdf_text


@pytest.fixture
def people(storage):
    now = datetime.now()
    for i in range(12):
        storage.create_registration(Registration(
            full_name=f'Amina {i}', place='Kochi', team_name='Blue', category='junior',
            programs=['junior-qiraat'], phone_number='9876543210', aadhar_number='123456789012',
            created_at=now - timedelta(minutes=i),
        ))
    storage.create_registration(Registration(
        full_name='Basil', place='Aminabad', team_name='Green', category='senior',
        programs=['senior-qiraat'], phone_number='9123456780',
    ))


class TestPrograms:
    """Test GET /api/programs"""

    def test_active_programs_by_category(self, client):
        body = client.get('/api/programs?category=junior').get_json()
        assert body['total'] > 0
        assert {p['category'] for p in body['data']} == {'junior'}
        assert all(p['isActive'] for p in body['data'])

    def test_catalog_tables(self, client):
        data = client.get('/api/programs/catalog').get_json()['data']
        assert data['aliases']['drawing'] == 'junior-drawing'
        assert 'junior-drawing' in data['categories']['junior']['nonStage']


class TestSuggestions:
    """Test GET /api/public/suggestions"""

    @pytest.mark.parametrize('name', ['', 'A'])
    def test_short_query_returns_empty(self, client, people, name):
        body = client.get(f'/api/public/suggestions?name={name}').get_json()
        assert body['data'] == []

    def test_limited_to_ten_minimal_records(self, client, people):
        body = client.get('/api/public/suggestions?name=am').get_json()

        assert len(body['data']) == 10
        for suggestion in body['data']:
            assert set(suggestion) == {'id', 'fullName', 'place'}
            assert suggestion['fullName'].startswith('Amina')


class TestSearch:
    """Test GET /api/public/search"""

    def test_two_characters_is_rejected(self, client, people):
        response = client.get('/api/public/search?name=Am')
        assert response.status_code == 400
        assert response.get_json()['errors'][0]['field'] == 'name'

    def test_three_characters_returns_sanitized_records(self, client, people):
        response = client.get('/api/public/search?name=Ami')

        assert response.status_code == 200
        body = response.get_json()
        assert body['total'] == 13
        for record in body['data']:
            assert 'phoneNumber' not in record
            assert 'aadharNumber' not in record
            assert '9876543210' not in str(record)
            assert '123456789012' not in str(record)

    def test_public_pdf_omits_contact_fields(self, client, storage, people):
        registration = storage.search_registrations('Basil')[0]

        response = client.get(f'/api/public/registrations/{registration.id}/pdf')

        assert response.status_code == 200
        assert response.mimetype == 'application/pdf'
        text = pdf_text(response.data)
        assert 'Basil' in text
        assert '9123456780' not in text
        assert 'Phone Number' not in text
        assert 'Aadhar Number' not in text

    def test_public_pdf_missing(self, client):
        assert client.get('/api/public/registrations/missing/pdf').status_code == 404
