"""
Email template SQLAlchemy model.
"""

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from monobase.constants import TAG_KEY_SEPARATOR, EmailTemplateStatus

from .base import Base


def tag_set_key(tags: Iterable[str]) -> str:
    """Normalize a tag collection into an order-independent key."""
    return TAG_KEY_SEPARATOR.join(sorted({str(tag) for tag in tags}))


class EmailTemplate(Base):
    """
    Stored email template.

    Templates are identified by their tag set rather than by name. The
    derived `tag_key` column carries the normalized tag set, and at most one
    active template may exist per tag set.

    Attributes:
        id: Generated UUID string
        tags: Tag labels as stored
        tag_key: Normalized tag set used for lookups
        variables: Variable specs (id, type, label, required, ...)
        status: draft, active or archived
    """

    __tablename__ = "email_templates"
    __table_args__ = (
        Index(
            "uq_email_templates_active_tag_key",
            "tag_key",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    subject: Mapped[str] = mapped_column(String(998))
    body_html: Mapped[str] = mapped_column(Text)
    body_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    tag_key: Mapped[str] = mapped_column(String(1024), index=True)
    variables: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    from_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    from_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reply_to_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reply_to_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), default=EmailTemplateStatus.ACTIVE.value, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<EmailTemplate id={self.id!r} name={self.name!r} tags={self.tags!r}>"
