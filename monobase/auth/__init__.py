"""
Auth module.

Extended user/session types and the module's email templates.
"""

from .email_templates import AUTH_TEMPLATES, register_auth_templates
from .types import Session, User, UserRole

__all__ = [
    "AUTH_TEMPLATES",
    "register_auth_templates",
    "Session",
    "User",
    "UserRole",
]
