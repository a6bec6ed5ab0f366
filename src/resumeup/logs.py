"""
Logging setup for resumeup.

Two modes:
- Console: everything to stdout (used with --print)
- File: rotating log file, rotated files optionally gzip-compressed and
  deleted once they are older than log.max_age_days
"""

import glob
import gzip
import logging
import os
import shutil
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
HANDLER_NAME = "resumeup"
SECONDS_PER_DAY = 24 * 60 * 60


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def _rename_rotator(source: str, dest: str) -> None:
    if os.path.exists(source):
        os.rename(source, dest)


def prune_old_backups(
    log_path: Path, max_age_days: Optional[int], now: Optional[float] = None
) -> List[Path]:
    """
    Delete rotated copies of log_path last modified more than max_age_days ago.

    The live log file is never touched. 0 or None disables pruning.

    Returns:
        Paths that were removed
    """
    if not max_age_days:
        return []

    cutoff = (time.time() if now is None else now) - max_age_days * SECONDS_PER_DAY
    removed = []
    for backup in sorted(log_path.parent.glob(glob.escape(log_path.name) + ".*")):
        if not backup.is_file() or backup.stat().st_mtime >= cutoff:
            continue
        try:
            backup.unlink()
        except OSError as e:
            logging.getLogger(__name__).warning("Failed to remove old log %s: %s", backup, e)
            continue
        removed.append(backup)
    return removed


def make_file_handler(log_settings: Dict[str, Any]) -> RotatingFileHandler:
    """
    Build the rotating file handler described by the "log" settings section.

    Backups older than max_age_days are pruned when the handler is built
    and after every rotation.

    Args:
        log_settings: Dict with file, max_bytes, backup_count, compress, max_age_days
    """
    log_path = Path(log_settings["file"])
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=log_settings["max_bytes"],
        backupCount=log_settings["backup_count"],
        encoding="utf-8",
    )

    compress = log_settings.get("compress")
    max_age_days = log_settings.get("max_age_days")
    if compress:
        handler.namer = _gzip_namer

    def rotate(source: str, dest: str) -> None:
        if compress:
            _gzip_rotator(source, dest)
        else:
            _rename_rotator(source, dest)
        prune_old_backups(log_path, max_age_days)

    handler.rotator = rotate
    prune_old_backups(log_path, max_age_days)

    return handler


def setup_logging(settings: Dict[str, Any], to_console: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        settings: Settings from load_settings()
        to_console: Log to stdout instead of the rotating file
    """
    log_settings = settings["log"]

    if to_console:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    else:
        handler = make_file_handler(log_settings)

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.set_name(HANDLER_NAME)

    # Replace only our own handler, leave foreign ones alone
    root = logging.getLogger()
    for old in list(root.handlers):
        if old.get_name() == HANDLER_NAME:
            root.removeHandler(old)
            old.close()
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(log_settings.get("level", "INFO")).upper(), logging.INFO))

    # Telethon is chatty at INFO
    logging.getLogger("telethon").setLevel(logging.WARNING)
