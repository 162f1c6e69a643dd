#!/usr/bin/env python3
"""
Event Registration System - server-side sessions

The cookie carries only a signed, opaque session id. Session data lives in a
store: in-process for development and tests, the MySQL sessions table in
production. Both stores expire entries after PERMANENT_SESSION_LIFETIME and
drop them when the session is cleared.
"""

import logging
import secrets
import threading
from datetime import datetime

from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

logger = logging.getLogger(__name__)

SESSION_SALT = 'registration-session'


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict that tracks modification and can request a new id"""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.regenerate_requested = False

    def regenerate(self):
        """Issue a fresh id on save (used at login)"""
        self.regenerate_requested = True
        self.modified = True


class MemorySessionStore:
    """Process-local session store"""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions = {}

    def get(self, sid):
        with self._lock:
            entry = self._sessions.get(sid)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at <= datetime.now():
                del self._sessions[sid]
                return None
            return dict(data)

    def set(self, sid, data, expires_at):
        with self._lock:
            self._sessions[sid] = (dict(data), expires_at)

    def delete(self, sid):
        with self._lock:
            self._sessions.pop(sid, None)

    def purge_expired(self):
        now = datetime.now()
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
            return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


class DatabaseSessionStore:
    """Session store backed by the sessions table"""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def get(self, sid):
        return self.db_manager.load_session(sid)

    def set(self, sid, data, expires_at):
        self.db_manager.store_session(sid, data, expires_at)

    def delete(self, sid):
        self.db_manager.remove_session(sid)

    def purge_expired(self):
        return self.db_manager.purge_expired_sessions()


class ServerSideSessionInterface(SessionInterface):
    """Flask session interface over a session store"""

    session_class = ServerSideSession

    def __init__(self, store):
        self.store = store

    def _signer(self, app):
        return Signer(app.secret_key, salt=SESSION_SALT)

    @staticmethod
    def _generate_sid():
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        if not app.secret_key:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if not cookie:
            return self.session_class(sid=self._generate_sid(), new=True)

        try:
            sid = self._signer(app).unsign(cookie).decode('utf-8')
        except BadSignature:
            logger.warning("Rejected session cookie with a bad signature")
            return self.session_class(sid=self._generate_sid(), new=True)

        data = self.store.get(sid)
        if data is None:
            return self.session_class(sid=self._generate_sid(), new=True)
        return self.session_class(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if session.regenerate_requested:
            self.store.delete(session.sid)
            session.sid = self._generate_sid()
            session.regenerate_requested = False

        if not self.should_set_cookie(app, session):
            return

        store_expires_at = datetime.now() + app.permanent_session_lifetime
        self.store.set(session.sid, dict(session), store_expires_at)

        response.set_cookie(
            name,
            self._signer(app).sign(session.sid.encode('utf-8')).decode('utf-8'),
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


def create_session_store(settings, storage):
    """Session store named by SESSION_BACKEND, defaulting to the storage backend"""
    backend = (settings.get('SESSION_BACKEND') or getattr(storage, 'backend_name', 'memory')).lower()
    if backend == 'memory':
        return MemorySessionStore()
    if backend == 'mysql':
        if getattr(storage, 'backend_name', None) == 'mysql':
            return DatabaseSessionStore(storage)
        from database import DatabaseManager
        return DatabaseSessionStore(DatabaseManager(settings))
    raise RuntimeError(f"Unknown SESSION_BACKEND: {backend}")
