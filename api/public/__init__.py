from flask import Blueprint
import logging


public_bp = Blueprint('public', __name__)

logger = logging.getLogger(__name__)

from . import (
    get_suggestions,
    search_registrations,
    registration_pdf,
)

__all__ = ['public_bp']
