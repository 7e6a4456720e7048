"""
Monobase API tooling.

Build tooling, email template registration, logging and auth types for the
Monobase API service.

Usage:
    # Config
    from monobase.config import get_settings, Settings

    # Logging
    from monobase.logging import create_logger, get_logger

    # Database
    from monobase.db import db
    from monobase.repositories import EmailTemplateRepository

    # Templates
    from monobase.mail import register_templates
    from monobase.auth import register_auth_templates
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from monobase.db import db
#   from monobase.config import get_settings
#   from monobase.logging import get_logger
