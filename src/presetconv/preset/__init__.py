"""
Preset loading and translation.

- extract: read the preset document and normalize the first preset into
  `Settings`.
- translate: map `Settings` onto ffmpeg-facing `EncodeParameters`.
- summary: format a human-readable report of the translated preset.

Example:
    from pathlib import Path
    from presetconv import preset
    params = preset.translate(preset.load_settings(Path("Fast 1080p.json")))
"""

from .extract import (
    QualityMode,
    Settings,
    extract_settings,
    load_preset_document,
    load_settings,
)
from .translate import (
    BitrateTarget,
    ConstantQuality,
    EncodeParameters,
    translate,
)
from .summary import format_preset_summary

__all__ = [
    "QualityMode",
    "Settings",
    "extract_settings",
    "load_preset_document",
    "load_settings",
    "BitrateTarget",
    "ConstantQuality",
    "EncodeParameters",
    "translate",
    "format_preset_summary",
]
