"""ffmpeg command building and batch processing for translated presets.

This package provides two levels of functionality:
- core: Low-level FFmpeg utilities (command building, rendering, running, probing)
- batch: High-level orchestration (file discovery, ignore gate, per-file processing)
"""

from .core import (
    MediaInfo,
    build_commands,
    build_ffmpeg_cmd,
    build_multipass_cmds,
    null_device,
    probe_file_info,
    render_cmd,
    render_cmds,
    run_commands,
)
from .batch import (
    BatchOptions,
    BatchOrchestrator,
    BatchResult,
    DiscoveredFile,
    iter_media_files,
    should_ignore,
)

__all__ = [
    # Commands
    "build_ffmpeg_cmd",
    "build_multipass_cmds",
    "build_commands",
    "render_cmd",
    "render_cmds",
    "run_commands",
    "null_device",
    # Probing
    "MediaInfo",
    "probe_file_info",
    # Batch
    "BatchOptions",
    "BatchOrchestrator",
    "BatchResult",
    "DiscoveredFile",
    "iter_media_files",
    "should_ignore",
]
