# catalog/log.py
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# loggers outside the catalog package that talk on every request
CHATTY_LOGGERS = ("uvicorn.access", "httpx")


def configure_logging(level: str = "INFO", access_log: bool = False) -> None:
    """Route catalog.* logs to stdout at ``level``.

    Per-request chatter from uvicorn and the SDK's httpx client stays at
    WARNING unless ``access_log`` is on. Product payloads and API keys are
    never logged.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("catalog").setLevel(numeric)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(numeric if access_log else logging.WARNING)
