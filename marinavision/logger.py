# marinavision/logger.py
import logging
import sys
from typing import Optional
from marinavision.config import config

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_configured = False

def configure_logging(level: Optional[str] = None, fmt: str = _DEFAULT_FMT) -> None:
    """Configure logging once, respecting LOG_LEVEL and overruling prior basicConfig."""
    global _configured
    if _configured:
        return

    level_name = (level or config.log_level).upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)

    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setLevel(level_value)
        h.setFormatter(logging.Formatter(fmt))
        root.addHandler(h)
    else:
        for h in root.handlers:
            h.setLevel(level_value)
            if not h.formatter:
                h.setFormatter(logging.Formatter(fmt))

    # uvicorn/gunicorn keep their own loggers; align them with ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "gunicorn.error", "gunicorn.access"):
        logging.getLogger(name).setLevel(level_value)

    # requests/urllib3 debug output includes full data URIs
    logging.getLogger("urllib3").setLevel(max(level_value, logging.INFO))

    _configured = True

def get_logger(name: Optional[str] = None) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name or __name__)
