"""
This module provides discovery of media files and the batch orchestration
that applies a translated preset to each of them.

Discovery walks an input directory (optionally recursively) for files with a
known media extension. The orchestrator then takes each file through its
lifecycle: ignore-flag gate, output path resolution, output directory
creation, access check, command building and dispatch (preview, plan or
execute), tallying the outcome in a BatchResult.
"""
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple

from tqdm import tqdm

from presetconv.preset.translate import EncodeParameters
from presetconv.utils import (
    ALTERNATE_EXTENSION,
    ANALYZE_DURATION,
    IGNORE_FLAG,
    MEDIA_EXTENSIONS,
    PROBE_SIZE,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_PLAN,
    STATUS_SKIP,
    LogLevel,
    file_util,
    logger,
    time_util,
)
from . import core


@dataclass(frozen=True)
class DiscoveredFile:
    path: Path
    extension: str


def _media_file(path: Path, extensions: Iterable[str]) -> Optional[DiscoveredFile]:
    ext = path.suffix.lower()
    if ext and ext in extensions:
        return DiscoveredFile(path, ext.lstrip("."))
    return None


def iter_media_files(root: Path, recursive: bool = False, extensions: Iterable[str] = MEDIA_EXTENSIONS,
                     stream: Optional[TextIO] = None) -> Iterator[DiscoveredFile]:
    """
    Yield media files under ``root``.

    Extensions are compared case-insensitively against ``extensions`` (dotted,
    lowercase). With ``recursive`` False only the top level is listed.
    Unreadable subdirectories are reported and skipped.
    """
    extensions = {e.lower() for e in extensions}

    def _on_error(err: OSError) -> None:
        logger.log("discover.error", LogLevel.WARN, stream=stream,
                   path=str(err.filename or root), error=err.strerror or str(err))

    if recursive:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames.sort()
            for name in sorted(filenames):
                found = _media_file(Path(dirpath) / name, extensions)
                if found:
                    yield found
        return

    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        _on_error(e)
        return
    for entry in entries:
        try:
            is_file = entry.is_file()
        except OSError:
            is_file = False
        if is_file:
            found = _media_file(Path(entry.path), extensions)
            if found:
                yield found


def should_ignore(path: Path, ignore_flag: str = IGNORE_FLAG) -> bool:
    """True when the ignore flag file sits in the same directory as ``path``."""
    return (path.parent / ignore_flag).exists()


@dataclass
class BatchOptions:
    input_root: Path
    output_root: Path
    recursive: bool = False
    execute: bool = False
    dry_run: bool = False
    force_m4v: bool = False
    replace_underscores: bool = True
    ignore_flag: str = IGNORE_FLAG
    analyze_duration: int = ANALYZE_DURATION
    probe_size: int = PROBE_SIZE
    verbose: bool = False
    preset_file: Optional[Path] = None


@dataclass
class BatchResult:
    processed: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.processed + self.skipped + self.failed

    def record(self, status: str) -> None:
        if status.startswith(STATUS_SKIP):
            self.skipped += 1
        elif status.startswith(STATUS_FAIL):
            self.failed += 1
        else:
            self.processed += 1


class BatchOrchestrator:
    """
    Apply one set of encode parameters to every discovered media file.

    All report output goes to ``out``; files are handled sequentially and a
    failure never stops the batch.
    """

    def __init__(self, params: EncodeParameters, options: BatchOptions, out: Optional[TextIO] = None):
        self.params = params
        self.options = options
        self.out = out
        self.result = BatchResult()

    def _print(self, text: str) -> None:
        logger.safe_print(text, file=self.out)

    def _log(self, event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
        logger.log(event, level, stream=self.out, **kwargs)

    @property
    def produced_format(self) -> str:
        """Extension of the file ffmpeg writes."""
        opts = self.options
        if opts.force_m4v and not opts.execute:
            return ALTERNATE_EXTENSION
        return self.params.format

    @property
    def renames_after_encode(self) -> bool:
        return self.options.force_m4v and self.produced_format != ALTERNATE_EXTENSION

    def output_path(self, src: Path) -> Path:
        """Mirror ``src`` under the output root with the produced extension."""
        opts = self.options
        out_dir = file_util.mirror_output_dir(src, opts.input_root, opts.output_root)
        stem = file_util.format_filename(src.stem, opts.replace_underscores)
        return out_dir / f"{stem}.{self.produced_format}"

    def _ensure_dir(self, out_dir: Path) -> bool:
        if out_dir.exists():
            return True
        if self.options.dry_run:
            self._print(f"[DRY RUN] Would create directory: {out_dir}")
            return True
        self._print(f"Creating output directory: {out_dir}")
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._log("file.mkdir_failed", LogLevel.ERROR, dir=str(out_dir), error=str(e))
            return False
        return True

    def _rename_to_alternate(self, dst: Path) -> bool:
        target = file_util.with_extension(dst, ALTERNATE_EXTENSION)
        self._print(f"Renaming {dst} to {target}")
        try:
            dst.rename(target)
        except OSError as e:
            self._log("file.rename_failed", LogLevel.WARN, file=str(dst), target=str(target), error=str(e))
            return False
        return True

    def process_file(self, src: Path) -> Tuple[Path, Optional[Path], str]:
        """Take one file through the pipeline; returns (source, output, status)."""
        opts = self.options
        if should_ignore(src, opts.ignore_flag):
            self._print(f"Skipping: {src} (ignore flag found)")
            return src, None, f"{STATUS_SKIP} (ignore flag)"

        dst = self.output_path(src)
        if not self._ensure_dir(dst.parent):
            return src, None, f"{STATUS_FAIL} (could not create output directory)"

        if opts.execute and not opts.dry_run:
            problem = file_util.check_output_access(dst)
            if problem:
                self._print(f"Error: {problem}")
                self._print(f"Skipping {src} due to output file access issues.")
                return src, None, f"{STATUS_FAIL} (output not writable)"

        cmds = core.build_commands(str(src), str(dst), self.params, opts.analyze_duration,
                                   opts.probe_size, opts.verbose)
        cmd_str = core.render_cmds(cmds)

        if opts.dry_run:
            self._print("[DRY RUN] Would execute:")
            self._print(cmd_str)
            if self.renames_after_encode:
                target = file_util.with_extension(dst, ALTERNATE_EXTENSION)
                self._print(f"[DRY RUN] Would rename {dst} to {target}")
            return src, dst, STATUS_DRY_RUN

        if not opts.execute:
            self._print(f"Generated command for {src}:")
            self._print(cmd_str)
            if opts.force_m4v:
                self._print(f"Note: If executed, the file will be converted to {self.params.format} "
                            f"then renamed to .{ALTERNATE_EXTENSION}")
            return src, dst, STATUS_PLAN

        self._print(f"Processing: {src}")
        self._print(f"Output: {dst}")
        self._print(f"Command: {cmd_str}")
        try:
            code = core.run_commands(cmds, verbose=opts.verbose, stream=self.out)
        except OSError as e:
            self._log("file.failed", LogLevel.ERROR, file=str(src), error=str(e))
            return src, None, f"{STATUS_FAIL} (could not start ffmpeg)"

        if code != 0:
            self._print(f"Error: FFmpeg command failed with return code {code}")
            self._print("Checking input file...")
            core.probe_file_info(src, stream=self.out)
            return src, None, f"{STATUS_FAIL} (ffmpeg code {code})"

        self._print("Conversion successful")
        if self.renames_after_encode:
            if self._rename_to_alternate(dst):
                dst = file_util.with_extension(dst, ALTERNATE_EXTENSION)
            else:
                self._print(f"Warning: Failed to rename file to .{ALTERNATE_EXTENSION}")
        return src, dst, STATUS_OK

    def run(self, files: Optional[Iterable[DiscoveredFile]] = None) -> BatchResult:
        """Process every discovered file and return the tallied result."""
        opts = self.options
        if files is None:
            files = iter_media_files(opts.input_root, opts.recursive, stream=self.out)
        file_list: List[DiscoveredFile] = list(files)
        start_time = time.time()

        self._log("batch.start", LogLevel.DEBUG, files_found=len(file_list), source=str(opts.input_root),
                  output=str(opts.output_root), execute=opts.execute, dry_run=opts.dry_run)

        for found in tqdm(file_list, desc="Converting", unit="file", file=self.out, disable=None):
            src = found.path
            if opts.preset_file is not None and file_util.is_same_file(src, opts.preset_file):
                self._log("file.skip", LogLevel.DEBUG, file=str(src), reason="preset document")
                continue

            src, dst, status = self.process_file(src)
            self.result.record(status)
            if status.startswith(STATUS_FAIL):
                self._print(f"Failed to process: {src}")
                self._log("file.failed", LogLevel.ERROR, file=str(src), status=status)
            else:
                self._log("file.done", LogLevel.DEBUG, file=str(src), dst=str(dst) if dst else None,
                          status=status)

        self.report(time.time() - start_time)
        return self.result

    def report(self, elapsed: float) -> None:
        r = self.result
        self._print("Processing complete:")
        self._print(f"  - Successfully processed: {r.processed} files")
        self._print(f"  - Skipped: {r.skipped} files")
        self._print(f"  - Failed: {r.failed} files")
        if r.total == 0:
            self._print("No media files found in the specified directory.")
        self._log("batch.end", LogLevel.INFO, runtime=time_util.format_runtime(elapsed),
                  processed=r.processed, skipped=r.skipped, failed=r.failed)
