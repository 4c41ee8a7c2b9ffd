"""
Functions to build, render and run ffmpeg commands for a translated preset.

This module turns encode parameters plus an input/output path into ffmpeg
argument lists (one for single-pass, two for two-pass encoding), renders them
as display strings, runs them sequentially and, when a run fails, probes the
input with ffprobe to report what the file contains.
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from presetconv.preset.translate import EncodeParameters
from presetconv.utils import FFMPEG_BIN, FFPROBE_BIN, LogLevel, logger, system_util, time_util


def null_device() -> str:
    """Return the platform null device used as pass-1 output."""
    return "NUL" if os.name == "nt" else "/dev/null"


def _fragment(text: str) -> List[str]:
    return [part for part in text.split(" ") if part]


def _is_set(value: str) -> bool:
    return bool(value) and value != "auto"


def build_ffmpeg_cmd(src: str, dst: str, params: EncodeParameters, analyze_duration: int,
                     probe_size: int, verbose: bool = False) -> List[str]:
    """Build a single ffmpeg invocation for ``src`` -> ``dst``."""
    cmd = [
        FFMPEG_BIN,
        "-analyzeduration", str(analyze_duration),
        "-probesize", str(probe_size),
        "-i", str(src),
        "-c:v", params.vcodec,
    ]
    cmd += _fragment(params.quality.fragment)
    cmd += ["-preset", params.preset]

    if _is_set(params.framerate):
        cmd += ["-r", params.framerate]

    cmd += ["-s", params.resolution]
    cmd += _fragment(params.acodec)

    if params.audio_channels:
        cmd += _fragment(params.audio_channels)

    if _is_set(params.profile):
        cmd += ["-profile:v", params.profile]

    if not verbose:
        cmd += ["-v", "error", "-stats"]

    cmd += ["-map", "0", str(dst)]
    return cmd


def build_multipass_cmds(src: str, dst: str, params: EncodeParameters, analyze_duration: int,
                         probe_size: int, verbose: bool = False) -> Tuple[List[str], List[str]]:
    """
    Build the two invocations of a two-pass encode.

    Pass 1 writes statistics only: its output goes to the null device as a
    ``null`` format. Pass 2 produces ``dst``.
    """
    null = null_device()
    pass1 = build_ffmpeg_cmd(src, null, params, analyze_duration, probe_size, verbose)
    pass1.pop()
    pass1 += ["-pass", "1", "-f", "null", null]

    pass2 = build_ffmpeg_cmd(src, dst, params, analyze_duration, probe_size, verbose)
    pass2 += ["-pass", "2"]
    return pass1, pass2


def build_commands(src: str, dst: str, params: EncodeParameters, analyze_duration: int,
                   probe_size: int, verbose: bool = False) -> List[List[str]]:
    """Return the invocations needed for one file, in the order they must run."""
    if params.effective_multipass:
        return list(build_multipass_cmds(src, dst, params, analyze_duration, probe_size, verbose))
    return [build_ffmpeg_cmd(src, dst, params, analyze_duration, probe_size, verbose)]


def quote_arg(arg: str) -> str:
    # Embedded double quotes are not escaped.
    if not arg or any(c.isspace() for c in arg):
        return f'"{arg}"'
    return arg


def render_cmd(cmd: List[str]) -> str:
    return " ".join(quote_arg(a) for a in cmd)


def render_cmds(cmds: List[List[str]]) -> str:
    """Render dependent invocations as one shell-style line joined by ``&&``."""
    return " && ".join(render_cmd(c) for c in cmds)


def run_commands(cmds: List[List[str]], verbose: bool = False, stream: Optional[TextIO] = None) -> int:
    """
    Run ``cmds`` one after another, stopping at the first nonzero exit.

    Returns the exit code of the last invocation that ran.
    """
    code = 0
    total = len(cmds)
    for i, cmd in enumerate(cmds, start=1):
        if total > 1:
            logger.safe_print(f"Running pass {i} of {total}...", file=stream)
        if verbose:
            logger.safe_print(f"Executing: {render_cmd(cmd)}", file=stream)
        code = system_util.run_passthrough(cmd)
        if code != 0:
            break
    return code


@dataclass
class StreamInfo:
    index: int
    codec_type: str
    codec: str
    width: Optional[int] = None
    height: Optional[int] = None
    channels: Optional[int] = None


@dataclass
class MediaInfo:
    format_name: str
    duration: Optional[float]
    streams: List[StreamInfo] = field(default_factory=list)


def parse_probe_output(out: str) -> Optional[MediaInfo]:
    """Parse ffprobe ``-of json`` output into a MediaInfo."""
    try:
        data = json.loads(out)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    fmt = data.get("format") or {}
    duration = None
    if "duration" in fmt:
        try:
            duration = float(fmt["duration"])
        except (ValueError, TypeError):
            duration = None

    streams = []
    for s in data.get("streams") or []:
        streams.append(StreamInfo(
            index=s.get("index", len(streams)),
            codec_type=s.get("codec_type", "unknown"),
            codec=s.get("codec_name", "unknown"),
            width=s.get("width"),
            height=s.get("height"),
            channels=s.get("channels"),
        ))
    return MediaInfo(format_name=fmt.get("format_name", "unknown"), duration=duration, streams=streams)


def probe_file_info(path: Path, stream: Optional[TextIO] = None) -> Optional[MediaInfo]:
    """
    Probe ``path`` with ffprobe and report what it contains.

    Read-only diagnostic used after a failed transcode. Returns the parsed
    info, or None when ffprobe could not describe the file.
    """
    logger.safe_print(f"File information for {path}:", file=stream)
    cmd = [
        FFPROBE_BIN, "-hide_banner", "-v", "error",
        "-show_format", "-show_streams",
        "-of", "json",
        str(path),
    ]
    try:
        code, out, err = system_util.run_cmd(cmd)
    except OSError as e:
        logger.log("probe.failed", LogLevel.ERROR, stream=stream, file=str(path), error=str(e))
        return None

    if code != 0:
        logger.log("probe.failed", LogLevel.ERROR, stream=stream, file=str(path), exit_code=code,
                   error=err.strip() or "no output")
        return None

    info = parse_probe_output(out)
    if info is None:
        logger.log("probe.failed", LogLevel.ERROR, stream=stream, file=str(path), error="unreadable ffprobe output")
        return None

    duration = time_util.format_duration(info.duration) if info.duration is not None else "N/A"
    logger.safe_print(f"  Format:   {info.format_name}", file=stream)
    logger.safe_print(f"  Duration: {duration}", file=stream)
    for s in info.streams:
        line = f"  Stream #{s.index}: {s.codec_type} {s.codec}"
        if s.codec_type == "video" and s.width and s.height:
            line += f" {s.width}x{s.height}"
        elif s.codec_type == "audio" and s.channels:
            line += f" {s.channels}ch"
        logger.safe_print(line, file=stream)
    return info
