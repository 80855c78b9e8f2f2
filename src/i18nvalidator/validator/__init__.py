"""Validators.

Public API:
    AbstractValidator - Base class: options, message templates, error recording
    DateTimeValidator - Locale-aware date/time string validator

Python 3.11+.
"""

from .base import AbstractValidator
from .datetime_validator import DateTimeValidator

__all__ = ["AbstractValidator", "DateTimeValidator"]
