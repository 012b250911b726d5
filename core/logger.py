import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

class RelayFormatter(logging.Formatter):

    _STANDARD_FMT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
    _DATE_FMT     = "%Y-%m-%d %H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:

        # Embed summaries are logged as dicts: {"title": ..., "fields": ..., "url": ...}
        if isinstance(record.msg, dict) and "title" in record.msg and "fields" in record.msg:
            ts     = datetime.fromtimestamp(record.created).strftime(self._DATE_FMT)
            title  = record.msg["title"]
            fields = record.msg["fields"]
            url    = record.msg.get("url") or "-"
            return (
                f"[{ts}] Embed: {title}\n"
                f"Fields: {fields} | Link: {url}"
            )

        formatter = logging.Formatter(self._STANDARD_FMT, datefmt=self._DATE_FMT)
        return formatter.format(record)

def _build_logger(name: str = "status_relay", env_path: Path = _ENV_PATH) -> logging.Logger:

    log = logging.getLogger(name)

    if log.handlers:
        return log

    # LOG_LEVEL may only be set in .env, and this can run before core.config loads it.
    load_dotenv(env_path)

    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    log.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(RelayFormatter())

    log.addHandler(handler)
    log.propagate = False

    return log


logger: logging.Logger = _build_logger()
