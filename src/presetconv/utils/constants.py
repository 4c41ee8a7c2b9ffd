"""
Constants and configuration settings for preset conversion.

This module contains the defaults used when translating presets and running
batches: accepted media extensions, ffmpeg input-analysis tuning, the ignore
flag file name and the external program names. Several of them can be
overridden with environment variables, which are also read from a ``.env``
file when one is present.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


# External programs
FFMPEG_BIN = os.getenv("PRESETCONV_FFMPEG", "ffmpeg")
FFPROBE_BIN = os.getenv("PRESETCONV_FFPROBE", "ffprobe")

# Input analysis tuning passed to every ffmpeg invocation (100MB each)
ANALYZE_DURATION = _env_int("PRESETCONV_ANALYZE_DURATION", 100000000)
PROBE_SIZE = _env_int("PRESETCONV_PROBE_SIZE", 100000000)

# Files in a directory holding this file are skipped
IGNORE_FLAG = os.getenv("PRESETCONV_IGNORE_FLAG", ".noconvert")

# Default log file (overridden by --log-file)
LOG_FILE = os.getenv("PRESETCONV_LOG_FILE")

# Output folder created under the input directory when none is given
CONVERTED_FOLDER = "converted"

# Extension used by --force-m4v
ALTERNATE_EXTENSION = "m4v"

# Accepted media file extensions
MEDIA_EXTENSIONS = {
    ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv",
    ".webm", ".m4v", ".mpg", ".mpeg", ".ts",
}

# Processing status codes
STATUS_OK = "OK"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
STATUS_DRY_RUN = "DRY-RUN"
STATUS_PLAN = "PLAN"
