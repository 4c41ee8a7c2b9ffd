"""
Translate extracted preset settings into ffmpeg-facing encode parameters.

The translation is a pure function of the settings and is computed once per
run; the same parameters are reused for every file in a batch.
"""
from dataclasses import dataclass
from typing import Union

from presetconv.preset.extract import QualityMode, Settings

VIDEO_CODECS = {
    "x265": "libx265",
    "x264": "libx264",
}

AUDIO_CHANNELS = {
    "5point1": 6,
    "stereo": 2,
    "mono": 1,
}

CONTAINERS = {
    "av_mkv": "mkv",
    "av_mp4": "mp4",
}
DEFAULT_CONTAINER = "mkv"

COPY_PREFIX = "copy:"


@dataclass(frozen=True)
class ConstantQuality:
    """Target a fixed perceptual quality (CRF)."""
    value: str

    @property
    def fragment(self) -> str:
        return f"-crf {self.value}"


@dataclass(frozen=True)
class BitrateTarget:
    """Target an average video bitrate in kbps."""
    kbps: str

    @property
    def fragment(self) -> str:
        return f"-b:v {self.kbps}k"


Quality = Union[ConstantQuality, BitrateTarget]


@dataclass(frozen=True)
class EncodeParameters:
    vcodec: str
    acodec: str
    audio_channels: str
    quality: Quality
    format: str
    preset: str
    profile: str
    framerate: str
    resolution: str
    multipass: bool
    preset_name: str = ""

    @property
    def is_constant_quality(self) -> bool:
        return isinstance(self.quality, ConstantQuality)

    @property
    def effective_multipass(self) -> bool:
        """Two-pass only applies to bitrate targets; CRF always runs single-pass."""
        return self.multipass and isinstance(self.quality, BitrateTarget)


def video_codec(encoder: str) -> str:
    return VIDEO_CODECS.get(encoder, encoder)


def audio_codec(encoder: str, bitrate: str) -> str:
    # The suffix after "copy:" names the source codec; stream copy ignores it.
    if encoder.startswith(COPY_PREFIX):
        return "-c:a copy"
    return f"-c:a aac -b:a {bitrate}k"


def audio_channels(mixdown: str) -> str:
    channels = AUDIO_CHANNELS.get(mixdown)
    if channels is None:
        return ""
    return f"-ac {channels}"


def quality_for(settings: Settings) -> Quality:
    if settings.quality_mode is QualityMode.CONSTANT_QUALITY:
        return ConstantQuality(settings.video_quality)
    return BitrateTarget(settings.video_bitrate)


def container_format(container: str) -> str:
    return CONTAINERS.get(container, DEFAULT_CONTAINER)


def translate(settings: Settings) -> EncodeParameters:
    """Map normalized preset settings onto ffmpeg encode parameters."""
    return EncodeParameters(
        vcodec=video_codec(settings.video_encoder),
        acodec=audio_codec(settings.audio_encoder, settings.audio_bitrate),
        audio_channels=audio_channels(settings.audio_mixdown),
        quality=quality_for(settings),
        format=container_format(settings.container),
        preset=settings.video_preset,
        profile=settings.video_profile,
        framerate=settings.video_framerate,
        resolution=f"{settings.picture_width}x{settings.picture_height}",
        multipass=settings.video_multipass,
        preset_name=settings.preset_name,
    )
