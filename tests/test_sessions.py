"""
Tests for server-side sessions
Tests for: store TTL, destroy on logout, id regeneration, cookie flags
"""
from datetime import datetime, timedelta

from utils.sessions import MemorySessionStore

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME, login


class TestMemorySessionStore:
    """Test in-process store"""

    def test_set_and_get(self):
        store = MemorySessionStore()
        store.set('sid', {'user_id': 'u1'}, datetime.now() + timedelta(hours=1))
        assert store.get('sid') == {'user_id': 'u1'}

    def test_expired_entry_is_dropped(self):
        store = MemorySessionStore()
        store.set('sid', {'user_id': 'u1'}, datetime.now() - timedelta(seconds=1))

        assert store.get('sid') is None
        assert len(store) == 0

    def test_purge_expired(self):
        store = MemorySessionStore()
        store.set('old', {}, datetime.now() - timedelta(seconds=1))
        store.set('live', {}, datetime.now() + timedelta(hours=1))

        assert store.purge_expired() == 1
        assert store.get('live') == {}

    def test_delete_is_idempotent(self):
        store = MemorySessionStore()
        store.delete('missing')
        store.set('sid', {}, datetime.now() + timedelta(hours=1))
        store.delete('sid')
        assert store.get('sid') is None

    def test_returned_data_is_a_copy(self):
        store = MemorySessionStore()
        store.set('sid', {'a': 1}, datetime.now() + timedelta(hours=1))
        store.get('sid')['a'] = 2
        assert store.get('sid') == {'a': 1}


class TestSessionInterface:
    """Test cookie and store behaviour through the app"""

    def store(self, app):
        return app.session_interface.store

    def test_anonymous_requests_store_nothing(self, app, client):
        client.get('/api/auth/me')
        assert len(self.store(app)) == 0
        assert client.get_cookie(app.config['SESSION_COOKIE_NAME']) is None

    def test_login_sets_signed_http_only_cookie(self, app, client):
        response = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)

        cookie_header = response.headers['Set-Cookie']
        assert app.config['SESSION_COOKIE_NAME'] in cookie_header
        assert 'HttpOnly' in cookie_header
        assert 'SameSite=Lax' in cookie_header
        assert len(self.store(app)) == 1

        cookie = client.get_cookie(app.config['SESSION_COOKIE_NAME'])
        assert ADMIN_USERNAME not in cookie.value

    def test_login_issues_new_session_id(self, app, client):
        login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        first = client.get_cookie(app.config['SESSION_COOKIE_NAME']).value

        login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        second = client.get_cookie(app.config['SESSION_COOKIE_NAME']).value

        assert first != second
        assert len(self.store(app)) == 1

    def test_logout_destroys_server_side_record(self, app, client):
        login(client, ADMIN_USERNAME, ADMIN_PASSWORD)

        client.post('/api/auth/logout')

        assert len(self.store(app)) == 0
        assert client.get_cookie(app.config['SESSION_COOKIE_NAME']) is None

    def test_tampered_cookie_is_anonymous(self, app, client):
        login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        name = app.config['SESSION_COOKIE_NAME']
        value = client.get_cookie(name).value
        client.set_cookie(name, value[:-2] + 'xx')

        assert client.get('/api/auth/me').get_json() == {'authenticated': False}

    def test_expired_server_side_session_is_anonymous(self, app, client):
        login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        store = self.store(app)
        for sid in list(store._sessions):
            data, _ = store._sessions[sid]
            store._sessions[sid] = (data, datetime.now() - timedelta(seconds=1))

        assert client.get('/api/auth/me').get_json() == {'authenticated': False}
