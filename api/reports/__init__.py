from flask import Blueprint
import logging

from models import Category
from utils.errors import ValidationError, field_error


reports_bp = Blueprint('reports', __name__)

logger = logging.getLogger(__name__)

PDF_MIMETYPE = 'application/pdf'
XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def require_category(category):
    categories = [c.value for c in Category]
    if category not in categories:
        raise ValidationError([field_error('category', f"Must be one of: {', '.join(categories)}")])
    return category


from . import (
    registration_pdf,
    category_pdf,
    category_excel,
    custom_report,
)

__all__ = ['reports_bp']
