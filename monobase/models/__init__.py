"""
SQLAlchemy models for Monobase API tooling.

Usage:
    from monobase.models import EmailTemplate
"""

from .base import Base
from .email_template import EmailTemplate, tag_set_key

__all__ = [
    "Base",
    "EmailTemplate",
    "tag_set_key",
]
