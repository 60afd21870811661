# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Logging set-up for the blog backend.

Handlers, formats and rotation are defined in etc/logging.conf.  The only
value that file cannot know is where log/app.log lives, so it is written as
``%(log_file)s`` and filled in here before ``fileConfig`` runs.  The
``LOG_LEVEL`` setting then overrides the level of the ``midnight`` logger,
so verbosity can change per deployment without editing the file.

Usage:
    from core.logger import logger
    logger.info("blog_created blog_id=%d", blog.id)
"""

import configparser
import logging
import logging.config
from pathlib import Path

from core.config import settings

# backend/core/logger.py  →  ../../  →  project root
_ROOT = Path(__file__).resolve().parents[2]
_LOG_FILE = _ROOT / "log" / "app.log"
_CONF = _ROOT / "etc" / "logging.conf"


def _configure() -> None:
    _LOG_FILE.parent.mkdir(exist_ok=True)

    text = _CONF.read_text(encoding="utf-8").replace("%(log_file)s", _LOG_FILE.as_posix())
    # Raw: the format strings hold %(asctime)s and friends.
    parser = configparser.RawConfigParser()
    parser.read_string(text)
    logging.config.fileConfig(parser, disable_existing_loggers=False)


_configure()

logger = logging.getLogger("midnight")
logger.setLevel(settings.log_level.upper())
