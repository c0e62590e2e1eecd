import logging
import sys

from app.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return the `catalog.<name>` logger, attaching a stdout handler the first
    time it is requested. Output looks like `[PRODUCTS] created id=3 sku=S-1`.
    """
    log = logging.getLogger(f"catalog.{name}")
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter(f"%(asctime)s [{name.upper()}] %(levelname)s %(message)s")
        )
        log.addHandler(h)
        log.propagate = False
    return log
