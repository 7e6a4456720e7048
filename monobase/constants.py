"""
Application constants for Monobase API tooling.

Contains email template tags, template statuses and build sentinels.
"""

from enum import Enum

# =============================================================================
# Email Templates
# =============================================================================


class EmailTemplateTags(str, Enum):
    """Tags identifying module-provided email templates."""
    AUTH_EMAIL_VERIFY = "auth.email-verify"
    AUTH_PASSWORD_RESET = "auth.password-reset"
    AUTH_2FA = "auth.2fa"
    AUTH_WELCOME = "auth.welcome"


class EmailTemplateStatus(str, Enum):
    """Lifecycle status of a stored email template."""
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class TemplateVariableType(str, Enum):
    """Value type of a template variable."""
    STRING = "string"
    EMAIL = "email"
    URL = "url"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


# Separator used when deriving the normalized tag-set key
TAG_KEY_SEPARATOR = "|"

# =============================================================================
# Build
# =============================================================================

UNKNOWN = "unknown"
DEFAULT_VERSION = "0.0.0"
