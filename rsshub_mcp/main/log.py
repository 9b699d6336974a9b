import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def init_log(default_level: str = "INFO") -> None:
    """Configure root logging on stderr.

    ``LOG_LEVEL`` in the environment overrides *default_level*.  stdout stays
    untouched because the stdio MCP transport owns it.
    """
    level_name = (os.getenv("LOG_LEVEL") or default_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # httpx logs every request at INFO; keep it quiet unless debugging.
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
