#!/usr/bin/env python3
"""
Event Registration System - database connection and storage selection
"""

import mysql.connector
from mysql.connector import Error, pooling
from contextlib import contextmanager
import logging
import time

from flask import current_app

from models import DATABASE_SCHEMA, Program
from program_catalog import DEFAULT_PROGRAMS
from db_modules.db_users import UserDbMixin
from db_modules.db_teams import TeamDbMixin
from db_modules.db_programs import ProgramDbMixin
from db_modules.db_registrations import RegistrationDbMixin
from db_modules.db_sessions import SessionDbMixin
from db_modules.memory_storage import MemoryStorage

logger = logging.getLogger(__name__)


class TimedCursorWrapper:
    def __init__(self, cursor, slow_threshold_ms=50):
        self._cursor = cursor
        self._slow_threshold_ms = slow_threshold_ms

    def execute(self, operation, params=None, multi=False):
        start = time.perf_counter()
        try:
            return self._cursor.execute(operation, params, multi)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            if duration_ms >= self._slow_threshold_ms:
                logger.warning(
                    "Slow query took %.1f ms: %s",
                    duration_ms,
                    operation,
                )

    def executemany(self, operation, seq_params):
        start = time.perf_counter()
        try:
            return self._cursor.executemany(operation, seq_params)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            if duration_ms >= self._slow_threshold_ms:
                logger.warning(
                    "Slow query (executemany) took %.1f ms: %s; params_count=%d",
                    duration_ms,
                    operation,
                    len(seq_params) if seq_params is not None else 0,
                )

    def __getattr__(self, item):
        return getattr(self._cursor, item)


_connection_pools = {}


def _get_connection_pool(config):
    """Process-wide pool per pool name; None falls back to direct connections"""
    pool_config = config.copy()
    pool_size = pool_config.pop('pool_size', 5)
    pool_name = pool_config.pop('pool_name', 'registration_pool')

    if pool_name not in _connection_pools:
        try:
            _connection_pools[pool_name] = pooling.MySQLConnectionPool(
                pool_name=pool_name,
                pool_size=pool_size,
                **pool_config
            )
            logger.info(f"Database pool created, size: {pool_size}")
        except Error as e:
            logger.error(f"Could not create database pool, using direct connections: {e}")
            return None
    return _connection_pools[pool_name]


class DatabaseManager(
    UserDbMixin,
    TeamDbMixin,
    ProgramDbMixin,
    RegistrationDbMixin,
    SessionDbMixin,
):
    """MySQL storage"""

    backend_name = 'mysql'

    def __init__(self, settings, use_pool=True):
        self.config = {
            'host': settings['DB_HOST'],
            'port': settings['DB_PORT'],
            'user': settings['DB_USER'],
            'password': settings['DB_PASSWORD'],
            'database': settings['DB_NAME'],
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'raise_on_warnings': False,
            'connection_timeout': 30,
        }
        self.slow_threshold_ms = settings.get('SLOW_QUERY_THRESHOLD_MS', 50)
        self.pool = None
        if use_pool:
            pool_config = dict(self.config)
            pool_config['pool_size'] = settings.get('DB_POOL_SIZE', 5)
            pool_config['pool_name'] = settings.get('DB_POOL_NAME', 'registration_pool')
            pool_config['pool_reset_session'] = True
            self.pool = _get_connection_pool(pool_config)

    @contextmanager
    def get_connection(self):
        """Connection context manager; rolls back on error and always returns the connection"""
        connection = None
        try:
            if self.pool:
                connection = self.pool.get_connection()
            else:
                connection = mysql.connector.connect(**self.config)

            original_cursor = connection.cursor

            def timed_cursor(*args, **kwargs):
                base_cursor = original_cursor(*args, **kwargs)
                return TimedCursorWrapper(base_cursor, slow_threshold_ms=self.slow_threshold_ms)

            connection.cursor = timed_cursor

            yield connection
        except Error as e:
            logger.error(f"Database connection error: {e}")
            if connection:
                connection.rollback()
            raise
        finally:
            if connection and connection.is_connected():
                connection.close()

    def ping(self):
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT 1')
            cursor.fetchone()
        return True

    def init_database(self, force_recreate=False):
        """Create the database and tables

        Args:
            force_recreate (bool): drop existing tables first
        """
        try:
            temp_config = self.config.copy()
            temp_config.pop('database', None)

            with mysql.connector.connect(**temp_config) as connection:
                cursor = connection.cursor()
                cursor.execute(
                    f"CREATE DATABASE IF NOT EXISTS `{self.config['database']}` "
                    "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                )

            with self.get_connection() as connection:
                cursor = connection.cursor()

                if force_recreate:
                    logger.info("Force recreate: dropping existing tables")
                    for table_name in reversed(list(DATABASE_SCHEMA.keys())):
                        cursor.execute(f"DROP TABLE IF EXISTS {table_name}")
                        logger.info(f"Dropped table {table_name}")

                for table_name, schema in DATABASE_SCHEMA.items():
                    cursor.execute(schema)

                connection.commit()
                logger.info("Database schema is up to date")

        except Error as e:
            logger.error(f"Database initialization failed: {e}")
            raise


def create_storage(settings):
    """Storage backend named by STORAGE_BACKEND"""
    backend = (settings.get('STORAGE_BACKEND') or 'memory').lower()
    if backend == 'memory':
        return MemoryStorage()
    if backend == 'mysql':
        return DatabaseManager(settings)
    raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend}")


def get_storage():
    """Storage bound to the current app"""
    return current_app.extensions['storage']


def seed_program_catalog(storage):
    """Insert the default catalog into an empty programs table; returns rows created"""
    if storage.count_programs() > 0:
        logger.info("Programs table already populated, skipping seed")
        return 0

    for entry in DEFAULT_PROGRAMS:
        storage.create_program(Program(**entry))
    logger.info(f"Seeded {len(DEFAULT_PROGRAMS)} default programs")
    return len(DEFAULT_PROGRAMS)
