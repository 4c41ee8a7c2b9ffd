"""Unit tests for preset translation."""

import pytest

from presetconv.preset.extract import QualityMode, Settings
from presetconv.preset.translate import BitrateTarget, ConstantQuality, translate


def _settings(**kwargs) -> Settings:
    return Settings(**kwargs)


class TestVideo:
    @pytest.mark.parametrize("encoder,expected", [("x265", "libx265"), ("x264", "libx264"),
                                                  ("svt_av1", "svt_av1"), ("", "")])
    def test_codec_mapping_passes_unknown_through(self, encoder: str, expected: str) -> None:
        assert translate(_settings(video_encoder=encoder)).vcodec == expected

    def test_constant_quality_mode_uses_crf(self) -> None:
        params = translate(_settings(quality_mode=QualityMode.CONSTANT_QUALITY,
                                     video_quality="20", video_bitrate="6000"))
        assert params.quality == ConstantQuality("20")
        assert params.quality.fragment == "-crf 20"
        assert "-b:v" not in params.quality.fragment

    def test_bitrate_mode_uses_average_bitrate(self) -> None:
        params = translate(_settings(quality_mode=QualityMode.BITRATE,
                                     video_quality="20", video_bitrate="6000"))
        assert params.quality == BitrateTarget("6000")
        assert params.quality.fragment == "-b:v 6000k"
        assert not params.is_constant_quality

    def test_resolution_is_literal_even_when_zero(self) -> None:
        assert translate(_settings()).resolution == "0x0"
        assert translate(_settings(picture_width="1280", picture_height="720")).resolution == "1280x720"

    def test_passthrough_fields(self) -> None:
        params = translate(_settings(video_preset="slow", video_profile="high", video_framerate="25",
                                     preset_name="Archive", video_multipass=True))
        assert params.preset == "slow"
        assert params.profile == "high"
        assert params.framerate == "25"
        assert params.preset_name == "Archive"
        assert params.multipass is True


class TestMultipass:
    def test_effective_only_with_bitrate_target(self) -> None:
        bitrate = translate(_settings(video_multipass=True, quality_mode=QualityMode.BITRATE))
        crf = translate(_settings(video_multipass=True, quality_mode=QualityMode.CONSTANT_QUALITY))
        off = translate(_settings(video_multipass=False, quality_mode=QualityMode.BITRATE))

        assert bitrate.effective_multipass is True
        assert crf.multipass is True
        assert crf.effective_multipass is False
        assert off.effective_multipass is False


class TestAudio:
    def test_copy_prefix_becomes_stream_copy(self) -> None:
        params = translate(_settings(audio_encoder="copy:aac", audio_bitrate="160"))
        assert params.acodec == "-c:a copy"

    def test_copy_suffix_is_ignored(self) -> None:
        assert translate(_settings(audio_encoder="copy:dts")).acodec == "-c:a copy"

    def test_other_encoders_use_aac_with_bitrate(self) -> None:
        assert translate(_settings(audio_encoder="av_aac", audio_bitrate="160")).acodec == "-c:a aac -b:a 160k"
        assert translate(_settings(audio_encoder="")).acodec == "-c:a aac -b:a 0k"

    @pytest.mark.parametrize("mixdown,expected", [("5point1", "-ac 6"), ("stereo", "-ac 2"), ("mono", "-ac 1"),
                                                  ("", ""), ("7point1", ""), ("dpl2", "")])
    def test_mixdown_channels(self, mixdown: str, expected: str) -> None:
        assert translate(_settings(audio_mixdown=mixdown)).audio_channels == expected


class TestContainer:
    @pytest.mark.parametrize("container,expected", [("av_mkv", "mkv"), ("av_mp4", "mp4"),
                                                    ("av_webm", "mkv"), ("", "mkv")])
    def test_container_mapping_defaults_to_mkv(self, container: str, expected: str) -> None:
        assert translate(_settings(container=container)).format == expected
