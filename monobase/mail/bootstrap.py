"""
Template registration entrypoint.

Initializes the database and runs every module's template loader in a single
session. Safe to run repeatedly.

Usage:
    monobase-register-templates
    python -m monobase.mail.bootstrap
"""

import argparse
import sys
from collections.abc import Callable

from dotenv import load_dotenv
from pydantic import ValidationError
from sqlalchemy.orm import Session

from monobase.auth.email_templates import register_auth_templates
from monobase.config import get_settings
from monobase.db import db
from monobase.logging import Logger, create_logger

TemplateLoader = Callable[[Session, Logger | None], None]

MODULE_LOADERS: tuple[TemplateLoader, ...] = (register_auth_templates,)


def register_module_templates(session: Session, logger: Logger | None = None) -> None:
    """Run every module template loader against one session."""
    for loader in MODULE_LOADERS:
        loader(session, logger)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="monobase-register-templates",
        description="Register module email templates in the database",
    )
    parser.parse_args(argv)

    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    logger = create_logger(settings)

    try:
        db.initialize()
        db.create_all_tables()
        with db.session() as session:
            register_module_templates(session, logger)
    except Exception as e:
        logger.error("template_registration_aborted", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("template_registration_complete")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
