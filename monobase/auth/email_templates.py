"""
Auth module email templates.

Registers authentication-related email templates:
- Email verification
- Password reset
- Two-factor authentication
- Welcome email

Template bodies are Handlebars sources shipped in `templates/`.
"""

from pathlib import Path

from sqlalchemy.orm import Session

from monobase.constants import EmailTemplateTags, TemplateVariableType
from monobase.logging import NULL_LOGGER, Logger
from monobase.mail import register_templates
from monobase.schemas import (
    TemplateContent,
    TemplateDefinition,
    TemplateMetadata,
    TemplateVariable,
)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _read_template(filename: str) -> str:
    return (TEMPLATES_DIR / filename).read_text(encoding="utf-8")


def _content(basename: str) -> TemplateContent:
    return TemplateContent(
        html=_read_template(f"{basename}.html.hbs"),
        text=_read_template(f"{basename}.text.hbs"),
    )


_NAME = TemplateVariable(
    id="name", type=TemplateVariableType.STRING, label="Recipient Name", required=True
)
_EMAIL = TemplateVariable(
    id="email", type=TemplateVariableType.EMAIL, label="Email Address", required=True
)

AUTH_TEMPLATES: list[TemplateDefinition] = [
    TemplateDefinition(
        metadata=TemplateMetadata(
            name="Email Verification",
            description="Email verification template for new user registration",
            subject="Verify your email address",
            tags=[EmailTemplateTags.AUTH_EMAIL_VERIFY],
            variables=[
                _NAME,
                _EMAIL,
                TemplateVariable(
                    id="verificationLink",
                    type=TemplateVariableType.URL,
                    label="Verification Link",
                    required=True,
                ),
            ],
        ),
        content=_content("email-verify"),
    ),
    TemplateDefinition(
        metadata=TemplateMetadata(
            name="Password Reset",
            description="Password reset template for forgot password flow",
            subject="Reset your password",
            tags=[EmailTemplateTags.AUTH_PASSWORD_RESET],
            variables=[
                _NAME,
                _EMAIL,
                TemplateVariable(
                    id="resetLink",
                    type=TemplateVariableType.URL,
                    label="Password Reset Link",
                    required=True,
                ),
                TemplateVariable(
                    id="expirationTime",
                    type=TemplateVariableType.NUMBER,
                    label="Link Expiration Time (minutes)",
                    required=True,
                    default_value=15,
                ),
            ],
        ),
        content=_content("password-reset"),
    ),
    TemplateDefinition(
        metadata=TemplateMetadata(
            name="Two-Factor Authentication",
            description="2FA verification code template",
            subject="Your verification code",
            tags=[EmailTemplateTags.AUTH_2FA],
            variables=[
                _NAME,
                _EMAIL,
                TemplateVariable(
                    id="code",
                    type=TemplateVariableType.STRING,
                    label="Verification Code",
                    required=True,
                    min_length=4,
                    max_length=8,
                ),
                TemplateVariable(
                    id="expirationTime",
                    type=TemplateVariableType.NUMBER,
                    label="Code Expiration Time (minutes)",
                    required=True,
                    default_value=5,
                ),
            ],
        ),
        content=_content("2fa"),
    ),
    TemplateDefinition(
        metadata=TemplateMetadata(
            name="Welcome Email",
            description="Welcome email for new users after successful registration",
            subject="Welcome to Monobase!",
            tags=[EmailTemplateTags.AUTH_WELCOME],
            variables=[
                _NAME,
                _EMAIL,
                TemplateVariable(
                    id="dashboardLink",
                    type=TemplateVariableType.URL,
                    label="Dashboard Link",
                    required=True,
                ),
            ],
        ),
        content=_content("welcome"),
    ),
]


def register_auth_templates(session: Session, logger: Logger | None = None) -> None:
    """
    Register auth module email templates.

    Args:
        session: Database session
        logger: Optional logger for debugging
    """
    log = logger or NULL_LOGGER
    log.debug("registering_auth_email_templates")
    register_templates(session, AUTH_TEMPLATES, logger)
    log.debug("auth_email_templates_registered")
