"""
Constants, logging, process and file helpers shared by the preset and
transcode packages.
"""

from .constants import (
    ALTERNATE_EXTENSION,
    ANALYZE_DURATION,
    CONVERTED_FOLDER,
    FFMPEG_BIN,
    FFPROBE_BIN,
    IGNORE_FLAG,
    LOG_FILE,
    MEDIA_EXTENSIONS,
    PROBE_SIZE,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_PLAN,
    STATUS_SKIP,
)
from .logger import LogLevel

__all__ = [
    "ALTERNATE_EXTENSION",
    "ANALYZE_DURATION",
    "CONVERTED_FOLDER",
    "FFMPEG_BIN",
    "FFPROBE_BIN",
    "IGNORE_FLAG",
    "LOG_FILE",
    "MEDIA_EXTENSIONS",
    "PROBE_SIZE",
    "STATUS_DRY_RUN",
    "STATUS_FAIL",
    "STATUS_OK",
    "STATUS_PLAN",
    "STATUS_SKIP",
    "LogLevel",
]
