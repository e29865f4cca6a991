# folio/app/core/logging.py
import logging

from folio.app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # passlib complains about the bcrypt version attribute on every start
    logging.getLogger("passlib").setLevel(logging.ERROR)
