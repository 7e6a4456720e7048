"""
Email template registration utilities.

Lets modules register their email templates in a decentralized way.

Usage:
    from monobase.mail import register_templates
    from monobase.schemas import TemplateDefinition

    register_templates(session, MY_TEMPLATES, logger)
"""

from .registry import register_templates

__all__ = ["register_templates"]
