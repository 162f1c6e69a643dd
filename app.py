#!/usr/bin/env python3
"""
Event Registration System - application factory
"""

import sys
import time

import click
from flask import Flask, request, g
from mysql.connector import Error as MySQLError
from werkzeug.middleware.proxy_fix import ProxyFix

from config import config as config_map, current_env_name
from database import create_storage, seed_program_catalog
from user_manager import UserManager
from utils.errors import register_error_handlers
from utils.sessions import ServerSideSessionInterface, create_session_store

from api.auth import auth_bp
from api.registrations import registrations_bp
from api.programs import programs_bp
from api.teams import teams_bp
from api.users import users_bp
from api.public import public_bp
from api.reports import reports_bp
from api.system import system_bp


def create_app(env_name=None, overrides=None):
    env_name = (env_name or current_env_name()).lower()
    config_class = config_map.get(env_name, config_map['default'])

    app = Flask(__name__)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    missing = [name for name in app.config.get('REQUIRED_SETTINGS', ()) if not app.config.get(name)]
    if missing:
        raise RuntimeError(f"Missing required settings for {env_name}: {', '.join(missing)}")

    config_class.init_app(app)

    if app.config.get('TRUST_PROXY'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    storage = create_storage(app.config)
    app.extensions['storage'] = storage
    app.session_interface = ServerSideSessionInterface(create_session_store(app.config, storage))

    # The memory backend starts empty in every process
    if storage.backend_name == 'memory':
        seed_program_catalog(storage)

    try:
        for user in UserManager(storage).bootstrap_admins(app.config):
            app.logger.info("Bootstrap admin %s created", user.username)
    except MySQLError as e:
        # Schema may not exist yet; `flask init-db` creates it
        app.logger.error(f"Admin bootstrap failed: {e}")

    register_error_handlers(app)

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info(
                "Request %s %s took %.2fms, status %d",
                request.method,
                request.path,
                duration_ms,
                response.status_code,
            )
        return response

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(registrations_bp, url_prefix='/api')
    app.register_blueprint(programs_bp, url_prefix='/api')
    app.register_blueprint(teams_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api/admin')
    app.register_blueprint(public_bp, url_prefix='/api/public')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')
    app.register_blueprint(system_bp, url_prefix='/api/system')

    register_commands(app)

    return app


def register_commands(app):

    @app.cli.command('init-db')
    @click.option('--no-seed', is_flag=True, help='Create tables without seeding programs.')
    @click.option('--force', is_flag=True, help='Drop and recreate all tables.')
    def init_db_command(no_seed, force):
        """Create the tables and seed the default program catalog."""
        storage = app.extensions['storage']
        storage.init_database(force_recreate=force)
        click.echo(f"Database ready ({storage.backend_name})")

        created = UserManager(storage).bootstrap_admins(app.config)
        for user in created:
            click.echo(f"Created admin {user.username}")

        if not no_seed:
            count = seed_program_catalog(storage)
            click.echo(f"Seeded {count} programs")

    @app.cli.command('seed-programs')
    def seed_programs_command():
        """Seed the default program catalog into an empty programs table."""
        count = seed_program_catalog(app.extensions['storage'])
        click.echo(f"Seeded {count} programs")

    @app.cli.command('purge-sessions')
    def purge_sessions_command():
        """Delete expired server-side sessions."""
        count = app.session_interface.store.purge_expired()
        click.echo(f"Purged {count} expired sessions")


if __name__ == '__main__':
    try:
        app = create_app()
        app.run(
            host=app.config.get('HOST', '0.0.0.0'),
            port=app.config.get('PORT', 5000),
            debug=app.config.get('DEBUG', False)
        )
    except KeyboardInterrupt:
        sys.exit(0)
