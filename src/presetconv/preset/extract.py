"""
Load a saved preset document and extract a normalized settings record.

The preset document is JSON with a ``PresetList`` array; the first preset is
authoritative and, within it, the first entry of ``AudioList``. Missing keys
never fail extraction: string fields default to ``""``, numeric fields to
``"0"`` and booleans to ``False``. Numeric fields may be stored either as
numbers or as numeric strings and are normalized to a canonical string form.
"""
import json
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from presetconv.errors import PresetError

# VideoQualityType value that selects constant-quality encoding
CONSTANT_QUALITY_SENTINEL = "2"


class QualityMode(Enum):
    """How the preset targets video quality."""
    BITRATE = "bitrate"
    CONSTANT_QUALITY = "constant-quality"


@dataclass(frozen=True)
class Settings:
    preset_name: str = ""
    video_encoder: str = ""
    video_bitrate: str = "0"
    video_preset: str = ""
    video_profile: str = ""
    video_framerate: str = ""
    video_quality: str = "0"
    quality_mode: QualityMode = QualityMode.BITRATE
    video_multipass: bool = False
    picture_width: str = "0"
    picture_height: str = "0"
    audio_encoder: str = ""
    audio_bitrate: str = "0"
    audio_mixdown: str = ""
    container: str = ""


def load_preset_document(path: Path) -> dict:
    """Read and parse the preset document at ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise PresetError(f"Preset file '{path}' does not exist.")
    except (OSError, UnicodeDecodeError) as e:
        raise PresetError(f"Could not read preset file '{path}': {e}")
    except ValueError as e:
        raise PresetError(f"Failed to parse '{path}' as valid JSON: {e}")

    if not isinstance(data, dict):
        raise PresetError(f"Preset file '{path}' does not contain a JSON object.")
    return data


def _first_entry(value: Any) -> Mapping[str, Any]:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def _to_number(value: Any) -> int | float | None:
    """Numeric value of ``value``; JSON integers stay exact ints."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _format_decimal(number: float) -> str:
    # shortest round-tripping form, without a trailing ".0"
    text = repr(float(number))
    return text[:-2] if text.endswith(".0") else text


def _int_field(data: Mapping[str, Any], key: str) -> str:
    """Integer field rendered without a decimal part; absent or invalid is "0"."""
    number = _to_number(data.get(key))
    if number is None or (isinstance(number, float) and not math.isfinite(number)):
        return "0"
    return str(max(int(number), 0))


def _decimal_field(data: Mapping[str, Any], key: str) -> str:
    """Numeric field keeping any fractional part (e.g. a quality slider of 20.5)."""
    number = _to_number(data.get(key))
    if number is None:
        return "0"
    if isinstance(number, int):
        return str(max(number, 0))
    if not math.isfinite(number):
        return "0"
    return _format_decimal(max(number, 0.0))


def _text_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return _format_decimal(value)
    return str(value)


def _bool_field(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _quality_mode(data: Mapping[str, Any]) -> QualityMode:
    raw = data.get("VideoQualityType")
    if isinstance(raw, int) and not isinstance(raw, bool):
        raw = str(raw)
    elif isinstance(raw, float):
        raw = str(int(raw)) if math.isfinite(raw) else ""
    if isinstance(raw, str) and raw.strip() == CONSTANT_QUALITY_SENTINEL:
        return QualityMode.CONSTANT_QUALITY
    return QualityMode.BITRATE


def extract_settings(document: Mapping[str, Any]) -> Settings:
    """
    Extract normalized settings from a parsed preset document.

    Args:
        document: Parsed preset document holding a non-empty ``PresetList``.

    Returns:
        Settings built from the first preset and its first audio track.

    Raises:
        PresetError: When the document holds no preset.
    """
    presets = document.get("PresetList")
    if not isinstance(presets, list) or not presets or not isinstance(presets[0], dict):
        raise PresetError("Preset document contains no entry in 'PresetList'.")
    preset = presets[0]
    audio = _first_entry(preset.get("AudioList"))

    return Settings(
        preset_name=_text_field(preset, "PresetName"),
        video_encoder=_text_field(preset, "VideoEncoder"),
        video_bitrate=_int_field(preset, "VideoAvgBitrate"),
        video_preset=_text_field(preset, "VideoPreset"),
        video_profile=_text_field(preset, "VideoProfile"),
        video_framerate=_text_field(preset, "VideoFramerate"),
        video_quality=_decimal_field(preset, "VideoQualitySlider"),
        quality_mode=_quality_mode(preset),
        video_multipass=_bool_field(preset, "VideoMultiPass"),
        picture_width=_int_field(preset, "PictureWidth"),
        picture_height=_int_field(preset, "PictureHeight"),
        audio_encoder=_text_field(audio, "AudioEncoder"),
        audio_bitrate=_int_field(audio, "AudioBitrate"),
        audio_mixdown=_text_field(audio, "AudioMixdown"),
        container=_text_field(preset, "FileFormat"),
    )


def load_settings(path: Path) -> Settings:
    """Load the preset document at ``path`` and extract its settings."""
    return extract_settings(load_preset_document(path))
