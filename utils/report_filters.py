#!/usr/bin/env python3
"""
Event Registration System - custom report filters
"""

import calendar
from datetime import datetime, timedelta

from program_catalog import categorize_programs
from utils.errors import ValidationError, field_error

CATEGORY_CHOICES = ('all', 'junior', 'senior')
PROGRAM_TYPE_CHOICES = ('all', 'stage', 'non-stage')
DATE_RANGE_CHOICES = ('all', 'today', 'week', 'month')


def _one_month_before(now):
    year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def date_range_start(date_range, now):
    """Earliest createdAt kept by a date range, or None for 'all'"""
    if date_range == 'today':
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range == 'week':
        return now - timedelta(days=7)
    if date_range == 'month':
        return _one_month_before(now)
    return None


def parse_report_filters(args):
    """Read category / programType / dateRange query args, defaulting to 'all'"""
    errors = []
    filters = {}
    for key, name, choices in (
        ('category', 'category', CATEGORY_CHOICES),
        ('program_type', 'programType', PROGRAM_TYPE_CHOICES),
        ('date_range', 'dateRange', DATE_RANGE_CHOICES),
    ):
        value = (args.get(name) or 'all').strip().lower()
        if value not in choices:
            errors.append(field_error(name, f"Must be one of: {', '.join(choices)}"))
        filters[key] = value
    if errors:
        raise ValidationError(errors)
    return filters


def filter_registrations(registrations, category='all', program_type='all', date_range='all', now=None):
    """Registrations matching the custom report filters, input order kept.

    program_type keeps registrations with at least one program of that type;
    classification goes through the static catalog so legacy ids count.
    """
    now = now or datetime.now()
    start = date_range_start(date_range, now)

    selected = []
    for registration in registrations:
        if category not in (None, 'all') and registration.category.value != category:
            continue

        if program_type not in (None, 'all'):
            buckets = categorize_programs(registration.programs)
            bucket = 'stage' if program_type == 'stage' else 'non_stage'
            if not buckets[bucket]:
                continue

        if start is not None and (registration.created_at is None or registration.created_at < start):
            continue

        selected.append(registration)
    return selected
