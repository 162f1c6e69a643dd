#!/usr/bin/env python3
"""
Event Registration System - API error types and handlers
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error rendered as a JSON failure response"""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Validation error'

    def __init__(self, errors, message=None):
        super().__init__(message)
        # [{'field': ..., 'issue': ...}]
        self.errors = list(errors)

    def to_dict(self):
        data = super().to_dict()
        data['errors'] = self.errors
        return data


class AuthenticationRequired(ApiError):
    status_code = 401
    message = 'Authentication required'


class InvalidCredentials(ApiError):
    status_code = 401
    message = 'Invalid credentials'


class AuthorizationDenied(ApiError):
    status_code = 403
    message = 'Permission denied'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class Conflict(ApiError):
    status_code = 409
    message = 'Already exists'


def field_error(field, issue):
    return {'field': field, 'issue': issue}


def register_error_handlers(app):
    """Render every failure as the JSON failure envelope"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'success': False, 'message': error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error: %s', error)
        return jsonify({'success': False, 'message': 'Internal server error'}), 500
