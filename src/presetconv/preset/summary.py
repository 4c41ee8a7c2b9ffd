"""Human-readable report of a translated preset (``--show-preset``)."""
from typing import List

from presetconv.preset.translate import EncodeParameters

RULE = "=" * 44


def format_preset_summary(params: EncodeParameters, output_format: str, analyze_duration: int,
                          probe_size: int, example_cmd: str) -> List[str]:
    """
    Build the preset report as a list of lines.

    Args:
        params: Translated encode parameters.
        output_format: Extension the output files will get.
        analyze_duration: ffmpeg ``-analyzeduration`` value.
        probe_size: ffmpeg ``-probesize`` value.
        example_cmd: Rendered command line for a sample input/output pair.
    """
    lines = [
        RULE,
        f"Handbrake Preset: {params.preset_name}",
        "FFmpeg Equivalent Parameters:",
        RULE,
        f"Video codec:      -c:v {params.vcodec}",
        f"Quality:          {params.quality.fragment}",
        f"Preset:           -preset {params.preset}",
    ]
    if params.framerate and params.framerate != "auto":
        lines.append(f"Framerate:        -r {params.framerate}")
    lines.append(f"Resolution:       -s {params.resolution}")
    lines.append(f"Audio:            {params.acodec} {params.audio_channels}".rstrip())
    if params.profile and params.profile != "auto":
        lines.append(f"Profile:          -profile:v {params.profile}")
    lines.append(f"Output format:    {output_format}")
    if params.effective_multipass:
        lines.append("Multipass:        Enabled (two-pass encoding)")
    else:
        lines.append("Multipass:        Disabled (single-pass encoding)")
    lines += [
        f"Analyze duration: {analyze_duration}",
        f"Probe size:       {probe_size}",
        RULE,
        "Example usage:",
        example_cmd,
        RULE,
    ]
    return lines
