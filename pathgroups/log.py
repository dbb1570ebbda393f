import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "pathgroups"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure the package logger: stderr always, a UTF-8 file when asked."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    fmt = logging.Formatter(LOG_FORMAT)

    # Avoid duplicate handlers if main() is called more than once
    stream = next((h for h in logger.handlers if type(h) is logging.StreamHandler), None)
    if stream is None:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(fmt)
        logger.addHandler(stream)
    else:
        stream.setStream(sys.stderr)
    stream.setLevel(logging.INFO if verbose else logging.WARNING)

    if log_file:
        log_path = str(Path(log_file).resolve())
        if not any(isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == log_path
                   for h in logger.handlers):
            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(logging.INFO)
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    return logger
