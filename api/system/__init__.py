from flask import Blueprint
import logging


system_bp = Blueprint('system', __name__)

logger = logging.getLogger(__name__)

from . import status

__all__ = ['system_bp']
