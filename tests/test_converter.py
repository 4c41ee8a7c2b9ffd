"""End-to-end tests for the presetconv command line."""

from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import make_preset, snapshot
from presetconv import converter


@pytest.fixture
def tools_present():
    with patch("presetconv.utils.system_util.missing_binaries", return_value=[]) as mock_missing:
        yield mock_missing


@pytest.fixture
def clip_folder(tmp_path: Path, write_preset) -> Path:
    """A folder holding the preset and one media file; returns the preset path."""
    (tmp_path / "clip.mp4").touch()
    return write_preset(make_preset(VideoEncoder="x265", VideoQualityType="2", VideoQualitySlider="20",
                                    FileFormat="av_mkv"))


class TestMain:
    def test_dry_run_shows_command_without_changes(self, tools_present, clip_folder: Path, capsys) -> None:
        before = snapshot(clip_folder.parent)
        with patch("presetconv.utils.system_util.run_passthrough") as mock_run:
            code = converter.main([str(clip_folder), "--dry-run"])

        out = capsys.readouterr().out
        assert code == 0
        assert "-c:v libx265 -crf 20" in out
        assert "clip.mkv" in out
        mock_run.assert_not_called()
        assert snapshot(clip_folder.parent) == before

    def test_execute_processes_file(self, tools_present, clip_folder: Path, capsys) -> None:
        with patch("presetconv.utils.system_util.run_passthrough", return_value=0) as mock_run:
            code = converter.main([str(clip_folder), "--execute"])

        out = capsys.readouterr().out
        assert code == 0
        mock_run.assert_called_once()
        assert "Successfully processed: 1 files" in out
        assert "Failed: 0 files" in out
        assert (clip_folder.parent / "converted").is_dir()

    def test_failed_file_gives_exit_code_one(self, tools_present, clip_folder: Path, capsys) -> None:
        with patch("presetconv.utils.system_util.run_passthrough", return_value=1), \
                patch("presetconv.utils.system_util.run_cmd", return_value=(1, "", "bad file")):
            code = converter.main([str(clip_folder), "-e"])

        out = capsys.readouterr().out
        assert code == 1
        assert "Failed: 1 files" in out
        assert "Checking input file..." in out

    def test_show_preset_prints_summary_only(self, tools_present, clip_folder: Path, capsys) -> None:
        before = snapshot(clip_folder.parent)
        code = converter.main([str(clip_folder), "--show-preset"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Video codec:      -c:v libx265" in out
        assert "Quality:          -crf 20" in out
        assert "Multipass:        Disabled (single-pass encoding)" in out
        assert "Analyze duration: 100000000" in out
        assert "output.mkv" in out
        assert "Searching for media files" not in out
        assert snapshot(clip_folder.parent) == before

    def test_show_preset_reports_two_pass(self, tools_present, write_preset, capsys) -> None:
        path = write_preset(make_preset(VideoQualityType=1, VideoMultiPass=True))
        assert converter.main([str(path), "-p"]) == 0
        out = capsys.readouterr().out
        assert "Quality:          -b:v 6000k" in out
        assert "Multipass:        Enabled (two-pass encoding)" in out

    def test_custom_dirs_and_recursion(self, tools_present, tmp_path: Path, write_preset, capsys) -> None:
        preset = write_preset(make_preset())
        src = tmp_path / "in"
        (src / "show").mkdir(parents=True)
        (src / "show" / "ep_1.mp4").touch()
        dst = tmp_path / "out"

        with patch("presetconv.utils.system_util.run_passthrough", return_value=0) as mock_run:
            code = converter.main([str(preset), "-r", "-e", "-i", str(src), "-o", str(dst)])

        assert code == 0
        cmd = mock_run.call_args.args[0]
        assert cmd[-1] == str(dst / "show" / "ep 1.mkv")

    def test_ignore_flag_option(self, tools_present, clip_folder: Path, capsys) -> None:
        (clip_folder.parent / ".skip").touch()
        code = converter.main([str(clip_folder), "--ignore-flag=.skip"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Skipped: 1 files" in out

    def test_force_m4v_plan_uses_m4v(self, tools_present, clip_folder: Path, capsys) -> None:
        assert converter.main([str(clip_folder), "-m", "-d"]) == 0
        out = capsys.readouterr().out
        assert "Forcing output extension to .m4v" in out
        assert "clip.m4v" in out

    def test_log_file_captures_output(self, tools_present, clip_folder: Path, tmp_path: Path, capsys) -> None:
        log_path = tmp_path / "logs" / "run.log"
        code = converter.main([str(clip_folder), "-d", "--log-file", str(log_path)])

        assert code == 0
        assert "Processing complete:" not in capsys.readouterr().out
        assert "Processing complete:" in log_path.read_text(encoding="utf-8")

    def test_missing_tools_is_fatal(self, clip_folder: Path, capsys) -> None:
        with patch("presetconv.utils.system_util.missing_binaries", return_value=["ffprobe"]):
            code = converter.main([str(clip_folder), "-e"])

        out = capsys.readouterr().out
        assert code == 1
        assert "ffprobe" in out
        assert "startup.error" in out

    def test_missing_preset_is_fatal(self, tools_present, tmp_path: Path, capsys) -> None:
        code = converter.main([str(tmp_path / "nope.json")])
        assert code == 1
        assert "does not exist" in capsys.readouterr().out

    def test_missing_input_dir_is_fatal(self, tools_present, clip_folder: Path, tmp_path: Path, capsys) -> None:
        code = converter.main([str(clip_folder), "-i", str(tmp_path / "missing")])
        assert code == 1
        assert not (tmp_path / "missing").exists()

    def test_output_dir_creation_failure_is_fatal(self, tools_present, clip_folder: Path, tmp_path: Path,
                                                  capsys) -> None:
        target = tmp_path / "out"
        with patch.object(Path, "mkdir", side_effect=PermissionError(13, "Permission denied")), \
                patch("presetconv.utils.system_util.run_passthrough") as mock_run:
            code = converter.main([str(clip_folder), "-e", "-o", str(target)])

        out = capsys.readouterr().out
        assert code == 1
        assert "startup.error" in out
        assert "Error creating output directory" in out
        assert "Searching for media files" not in out
        mock_run.assert_not_called()
        assert not target.exists()

    def test_dry_run_announces_output_root(self, tools_present, clip_folder: Path, capsys) -> None:
        code = converter.main([str(clip_folder), "-d"])

        out = capsys.readouterr().out
        assert code == 0
        assert f"[DRY RUN] Would create output directory: {clip_folder.parent / 'converted'}" in out
        assert "Creating output directory" not in out
        assert not (clip_folder.parent / "converted").exists()

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            converter.main(["--version"])
        assert exc.value.code == 0
        assert "presetconv" in capsys.readouterr().out
