"""
Repository pattern implementations for data access.

Usage:
    from monobase.repositories import EmailTemplateRepository
    from monobase.db import db

    with db.session() as session:
        repo = EmailTemplateRepository(session)
        existing = repo.find_many(tags=["auth.welcome"], limit=1)
"""

from .base import BaseRepository
from .email_template_repository import EmailTemplateRepository

__all__ = [
    "BaseRepository",
    "EmailTemplateRepository",
]
