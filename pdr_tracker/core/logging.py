import logging

from pdr_tracker.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure le logging racine une seule fois (appelée au démarrage)."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # SQLAlchemy reste discret hors dev
    if settings.ENV != "dev":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
