from sys import stderr
import logging

# logging module doesn't provide an easy way to get this
LOG_LEVELS = [
    "CRITICAL",
    "ERROR",
    "WARNING",
    "INFO",
    "DEBUG",
]

CONFIGURED = False


def configure_logging(level: str = "INFO"):
    """Configure our logging - to stderr, once per process."""
    global CONFIGURED
    if not CONFIGURED:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)-8s %(name)-35s - %(message)s",
            stream=stderr,
        )
    CONFIGURED = True
