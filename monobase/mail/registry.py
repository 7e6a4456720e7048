"""
Email template registration.

Modules declare their templates statically and register them at startup.
Registration is idempotent: a template whose tag set already exists in the
store is left untouched, so running it on every boot is safe.
"""

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from monobase.logging import NULL_LOGGER, Logger
from monobase.repositories import EmailTemplateRepository
from monobase.schemas import NewEmailTemplate, TemplateDefinition


def register_templates(
    session: Session,
    templates: Sequence[TemplateDefinition],
    logger: Logger | None = None,
    *,
    repository: EmailTemplateRepository | None = None,
) -> None:
    """
    Register email templates for a module.

    Templates are matched on tag set only. A failure for one template is
    logged and does not stop the remaining ones from being registered. An
    integrity error counts as "already exists" only when the tag set is
    found in the store afterwards.

    Args:
        session: Database session
        templates: Template definitions to register, in order
        logger: Optional logger for debugging
        repository: Store override, defaults to an EmailTemplateRepository on session
    """
    log = logger or NULL_LOGGER
    repo = repository if repository is not None else EmailTemplateRepository(session)

    for definition in templates:
        metadata = definition.metadata
        try:
            with repo.savepoint():
                existing = repo.find_many(tags=metadata.tags, limit=1, offset=0)
                if existing:
                    log.debug(
                        "email_template_exists_skipping",
                        tags=list(metadata.tags),
                        name=metadata.name,
                    )
                    continue

                created = repo.create_template(NewEmailTemplate.from_definition(definition))

            log.debug(
                "email_template_registered",
                id=created.id,
                name=created.name,
                tags=list(created.tags),
            )
        except IntegrityError as e:
            if _held_by_another_writer(repo, metadata.tags):
                log.debug(
                    "email_template_exists_skipping",
                    tags=list(metadata.tags),
                    name=metadata.name,
                    concurrent=True,
                )
            else:
                _log_failure(log, definition, e)
        except Exception as e:
            _log_failure(log, definition, e)


def _held_by_another_writer(repo: EmailTemplateRepository, tags: Sequence[str]) -> bool:
    """Whether a colliding insert lost the race for this tag set."""
    try:
        return bool(repo.find_many(tags=tags, limit=1, offset=0))
    except SQLAlchemyError:
        return False


def _log_failure(log: Logger, definition: TemplateDefinition, error: Exception) -> None:
    log.error(
        "email_template_registration_failed",
        name=definition.metadata.name,
        tags=list(definition.metadata.tags),
        error=str(error),
        error_type=type(error).__name__,
    )
