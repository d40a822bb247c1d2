import logging
import os
import sys

from .models import DEFAULT_LARGE_CLASS, DEFAULT_THRESHOLD_MINUTES, Settings

LOGGER_NAME = "attendance"

THRESHOLD_MINUTES = float(os.getenv("ATTENDANCE_THRESHOLD_MINUTES", DEFAULT_THRESHOLD_MINUTES))
LARGE_CLASS = int(os.getenv("ATTENDANCE_LARGE_CLASS", DEFAULT_LARGE_CLASS))
DATA_FILE = os.getenv("ATTENDANCE_DATA_FILE", "attendance_data.json")
DEBUG = os.getenv("ATTENDANCE_DEBUG", "").lower() in ("1", "true", "yes")


def default_settings() -> Settings:
    return Settings(time_threshold=THRESHOLD_MINUTES, large_class_threshold=LARGE_CLASS,
                    batch_code_display_limit=LARGE_CLASS)

def setup_logging(debug: bool = DEBUG) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if logger.handlers:
        return logger
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(sh)
    return logger
