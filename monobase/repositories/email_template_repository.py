"""Email template repository."""

from collections.abc import Iterable

from monobase.models import EmailTemplate, tag_set_key
from monobase.schemas import NewEmailTemplate

from .base import BaseRepository


class EmailTemplateRepository(BaseRepository[EmailTemplate]):
    """Repository for EmailTemplate operations."""

    model = EmailTemplate

    def find_many(
        self,
        *,
        tags: Iterable[str] | None = None,
        status: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[EmailTemplate]:
        """
        Find templates, optionally filtered.

        A tag filter matches templates whose tag set equals the given set,
        regardless of tag order or duplicates.
        """
        query = self.session.query(EmailTemplate)
        if tags is not None:
            query = query.filter(EmailTemplate.tag_key == tag_set_key(tags))
        if status is not None:
            query = query.filter(EmailTemplate.status == status)
        return query.order_by(EmailTemplate.created_at).offset(offset).limit(limit).all()

    def create_template(self, data: NewEmailTemplate) -> EmailTemplate:
        """Insert a template and return it with its generated ID."""
        template = EmailTemplate(
            **data.model_dump(mode="json"),
            tag_key=tag_set_key(data.tags),
        )
        self.session.add(template)
        self.session.flush()
        return template
