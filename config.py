#!/usr/bin/env python3
"""
Event Registration System - configuration
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ['true', 'on', '1', 'yes']


class Config:
    """Base configuration"""

    ENV_NAME = 'default'

    # Signs the session id cookie
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY')

    # Bootstrap admins
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN2_USERNAME = os.environ.get('ADMIN2_USERNAME')
    ADMIN2_PASSWORD = os.environ.get('ADMIN2_PASSWORD')

    # Storage: 'memory' or 'mysql'
    STORAGE_BACKEND = (os.environ.get('STORAGE_BACKEND') or 'memory').lower()
    SESSION_BACKEND = (os.environ.get('SESSION_BACKEND') or '').lower() or None

    # Database
    DB_HOST = os.environ.get('DB_HOST') or 'localhost'
    DB_PORT = int(os.environ.get('DB_PORT') or 3306)
    DB_USER = os.environ.get('DB_USER') or 'registration'
    DB_PASSWORD = os.environ.get('DB_PASSWORD') or ''
    DB_NAME = os.environ.get('DB_NAME') or 'event_registration'
    DB_POOL_NAME = os.environ.get('DB_POOL_NAME') or 'registration_pool'
    DB_POOL_SIZE = int(os.environ.get('DB_POOL_SIZE') or 5)
    SLOW_QUERY_THRESHOLD_MS = int(os.environ.get('SLOW_QUERY_THRESHOLD_MS') or 50)

    # Server
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 5000)
    DEBUG = _env_flag('DEBUG')
    TRUST_PROXY = False

    # Session
    SESSION_COOKIE_NAME = 'registration_session'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Registrations must name an active team
    REQUIRE_ACTIVE_TEAM = _env_flag('REQUIRE_ACTIVE_TEAM')

    # Public lookups
    SUGGESTION_MIN_LENGTH = 2
    SUGGESTION_LIMIT = 10
    PUBLIC_SEARCH_MIN_LENGTH = 3

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'event_registration.log'

    # TrueType font for Malayalam program labels in PDF reports
    PDF_FONT_PATH = os.environ.get('PDF_FONT_PATH')

    SYSTEM_NAME = 'Registration Management System'
    SYSTEM_VERSION = '1.0.0'

    # Capabilities per role
    ROLE_PERMISSIONS = {
        'admin': [
            'view_registrations',
            'edit_registrations',
            'delete_registrations',
            'view_statistics',
            'view_reports',
            'view_system_status',
            'manage_programs',
            'manage_teams',
            'manage_users',
        ],
        'team_leader': [
            'view_registrations',
            'edit_registrations',
            'delete_registrations',
            'view_statistics',
            'view_reports',
            'view_system_status',
        ],
    }

    @staticmethod
    def init_app(app):
        """Configure logging"""
        import logging

        handlers = [logging.StreamHandler()]
        log_file = app.config.get('LOG_FILE')
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

        logging.basicConfig(
            level=getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers,
        )


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    SECRET_KEY = Config.SECRET_KEY or 'event-registration-dev-secret'
    ADMIN_USERNAME = Config.ADMIN_USERNAME or 'admin'
    ADMIN_PASSWORD = Config.ADMIN_PASSWORD or '123@Admin'


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False
    TRUST_PROXY = True
    SESSION_COOKIE_SECURE = True
    STORAGE_BACKEND = (os.environ.get('STORAGE_BACKEND') or 'mysql').lower()

    # Required settings, checked when the app is created
    REQUIRED_SETTINGS = ('SECRET_KEY', 'ADMIN_USERNAME', 'ADMIN_PASSWORD')


class TestingConfig(Config):
    """Test configuration"""
    ENV_NAME = 'testing'
    TESTING = True
    SECRET_KEY = 'event-registration-test-secret'
    STORAGE_BACKEND = 'memory'
    SESSION_BACKEND = 'memory'
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin-password'
    ADMIN2_USERNAME = None
    ADMIN2_PASSWORD = None
    REQUIRE_ACTIVE_TEAM = False
    LOG_FILE = None
    PDF_FONT_PATH = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def current_env_name():
    return (os.environ.get('APP_ENV') or os.environ.get('NODE_ENV') or 'default').lower()
