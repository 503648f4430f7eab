"""Logging configuration for the application."""

import logging
import sys

from dirauth.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Application events go through logfire; this only configures the
    standard library loggers used by third-party libraries.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # ldap3 logs every protocol message at DEBUG
    logging.getLogger("ldap3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("dirauth").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
