"""Shared test fixtures for presetconv."""

import json
from pathlib import Path

import pytest

from presetconv.utils import LogLevel, logger


@pytest.fixture(autouse=True)
def reset_log_level():
    """Keep the module-level log threshold from leaking between tests."""
    logger.set_log_level(LogLevel.INFO)
    yield
    logger.set_log_level(LogLevel.INFO)


def make_preset(audio: dict | None = None, **overrides) -> dict:
    """Return a preset document with one preset, overriding preset keys."""
    preset = {
        "PresetName": "Fast 1080p30",
        "VideoEncoder": "x265",
        "VideoAvgBitrate": 6000,
        "VideoPreset": "medium",
        "VideoProfile": "main",
        "VideoFramerate": "auto",
        "VideoQualitySlider": 20,
        "VideoQualityType": 2,
        "VideoMultiPass": False,
        "PictureWidth": 1920,
        "PictureHeight": 1080,
        "FileFormat": "av_mkv",
        "AudioList": [
            audio if audio is not None else {
                "AudioEncoder": "av_aac",
                "AudioBitrate": 160,
                "AudioMixdown": "stereo",
            }
        ],
    }
    preset.update(overrides)
    return {"PresetList": [preset]}


@pytest.fixture
def preset_doc() -> dict:
    return make_preset()


@pytest.fixture
def write_preset(tmp_path: Path):
    """Write a preset document to ``tmp_path`` and return its path."""

    def _write(doc: dict, name: str = "preset.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def media_tree(tmp_path: Path) -> Path:
    """Create a small media tree with nested folders and non-media files."""
    root = tmp_path / "media"
    root.mkdir()
    (root / "clip.mp4").touch()
    (root / "Holiday_Video.MKV").touch()
    (root / "notes.txt").touch()

    nested = root / "season_1"
    nested.mkdir()
    (nested / "episode_01.avi").touch()

    deeper = nested / "extras"
    deeper.mkdir()
    (deeper / "trailer.webm").touch()
    return root


def snapshot(root: Path) -> set[Path]:
    """Every path below ``root``."""
    return set(root.rglob("*"))
