"""
Event Registration System - test configuration and fixtures
"""
from io import BytesIO

import pdfplumber
import pytest

from app import create_app
from models import UserRole
from user_manager import UserManager

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin-password'
LEADER_USERNAME = 'leader'
LEADER_PASSWORD = 'leader-password'


def login(client, username, password):
    return client.post('/api/auth/login', json={'username': username, 'password': password})


def pdf_text(content):
    """Extracted text of every page of a PDF"""
    with pdfplumber.open(BytesIO(content)) as pdf:
        return '\n'.join(page.extract_text() or '' for page in pdf.pages)


@pytest.fixture
def app():
    """Fresh app per test: memory storage, seeded catalog, bootstrap admin"""
    app = create_app('testing')
    yield app


@pytest.fixture
def storage(app):
    return app.extensions['storage']


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def team_leader(storage):
    return UserManager(storage).create_user(LEADER_USERNAME, LEADER_PASSWORD, UserRole.TEAM_LEADER)


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def leader_client(app, team_leader):
    client = app.test_client()
    response = login(client, LEADER_USERNAME, LEADER_PASSWORD)
    assert response.status_code == 200
    return client


@pytest.fixture
def registration_payload():
    return {
        'fullName': 'A',
        'place': 'P',
        'teamName': 'T1',
        'category': 'junior',
        'programs': ['junior-qiraat', 'junior-drawing'],
    }
