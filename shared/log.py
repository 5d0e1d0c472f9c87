import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Installs a single stream handler on the root logger.
    Safe to call more than once, later calls only change the level.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG, too noisy for a crawl
    logging.getLogger("urllib3").setLevel(logging.WARNING)
