import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Bind stderr logging for the whole process.

    Safe to call more than once; only the first call installs a handler.
    Unknown level names fall back to INFO.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(
        level=resolved,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )
    logging.getLogger("extractor").setLevel(resolved)
