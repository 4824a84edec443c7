import logging
from typing import Optional

from accountkit.core.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging defaults for the application."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
