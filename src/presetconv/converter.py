"""
Convert a saved transcoding preset to ffmpeg and apply it to a media folder.

Reads the preset document, translates it to ffmpeg parameters and either
shows the equivalent command (``--show-preset``), prints the command for each
media file (default), previews what would happen (``--dry-run``) or runs the
conversions (``--execute``).
"""

import argparse
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

import presetconv
from presetconv.errors import ConverterError, MissingToolError, OutputDirectoryError
from presetconv.preset import format_preset_summary, load_settings, translate
from presetconv.transcode import BatchOptions, BatchOrchestrator, build_ffmpeg_cmd, render_cmd
from presetconv.utils import (
    ALTERNATE_EXTENSION,
    ANALYZE_DURATION,
    CONVERTED_FOLDER,
    FFMPEG_BIN,
    FFPROBE_BIN,
    IGNORE_FLAG,
    LOG_FILE,
    PROBE_SIZE,
    LogLevel,
    file_util,
    logger,
    system_util,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="presetconv",
        description="Convert a saved transcoding preset (JSON) to the equivalent ffmpeg command "
                    "and optionally apply it to every media file in a folder.",
        epilog="Special features: files are skipped when an ignore flag file (default: .noconvert) "
               "exists in their directory; underscores in output filenames are replaced with spaces "
               "unless -u is given. Example: presetconv ~/Videos/Fast1080p.json -r -e",
    )
    parser.add_argument("preset", help="Preset JSON file")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Process media files recursively in subdirectories")
    parser.add_argument("-e", "--execute", action="store_true", help="Execute the generated ffmpeg commands")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Show what would be done without actually doing it")
    parser.add_argument("-p", "--show-preset", action="store_true",
                        help="Show only the ffmpeg equivalent of the preset")
    parser.add_argument("-i", "--input-dir", help="Input directory (default: same as the preset file)")
    parser.add_argument("-o", "--output-dir", help="Output directory (default: <input-dir>/converted)")
    parser.add_argument("-m", "--force-m4v", action="store_true",
                        help="Force output extension to .m4v regardless of container")
    parser.add_argument("-u", "--no-underscore-replace", action="store_true",
                        help="Don't replace underscores with spaces in output filenames")
    parser.add_argument("--ignore-flag", default=IGNORE_FLAG,
                        help=f"Ignore flag file name (default: {IGNORE_FLAG})")
    parser.add_argument("--verbose", action="store_true", help="Show verbose output and ffmpeg logs")
    parser.add_argument("-l", "--log-file",
                        help="Write all output to this file instead of the console "
                             "(default: $PRESETCONV_LOG_FILE)")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {presetconv.__version__}")
    return parser


@contextmanager
def output_sink(log_file: Optional[str]) -> Iterator[TextIO]:
    """Yield the stream all run output goes to: the log file, or stdout."""
    if not log_file:
        yield sys.stdout
        return

    path = Path(log_file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, "w", encoding="utf-8", buffering=1)
    except OSError as e:
        logger.log("log.open_failed", LogLevel.WARN, stream=sys.stderr, path=str(path), error=str(e))
        yield sys.stdout
        return

    try:
        yield handle
    finally:
        handle.close()


def check_required_tools() -> None:
    missing = system_util.missing_binaries([FFMPEG_BIN, FFPROBE_BIN])
    if missing:
        raise MissingToolError(missing)


def run(args: argparse.Namespace, out: TextIO) -> int:
    """Run the conversion described by ``args``; returns the exit code."""

    def say(text: str) -> None:
        logger.safe_print(text, file=out)

    check_required_tools()

    preset_path = Path(args.preset).expanduser()
    params = translate(load_settings(preset_path))
    analyze_duration, probe_size = ANALYZE_DURATION, PROBE_SIZE

    output_format = params.format
    if args.force_m4v and not args.execute:
        output_format = ALTERNATE_EXTENSION
        say(f"Forcing output extension to .{ALTERNATE_EXTENSION}")
    elif args.force_m4v:
        say(f"Force m4v is enabled. Files will be converted to {params.format} "
            f"first, then renamed to .{ALTERNATE_EXTENSION}")

    if args.show_preset:
        example = build_ffmpeg_cmd("input.mp4", f"output.{output_format}", params,
                                   analyze_duration, probe_size, args.verbose)
        for line in format_preset_summary(params, output_format, analyze_duration, probe_size,
                                          render_cmd(example)):
            say(line)
        return 0

    if args.input_dir:
        input_root = Path(args.input_dir).expanduser()
    else:
        input_root = preset_path.parent
        say(f"Using media directory: {input_root}")
    if not input_root.is_dir():
        raise ConverterError(f"Input directory '{input_root}' does not exist.")

    if args.output_dir:
        output_root = Path(args.output_dir).expanduser()
    else:
        output_root = input_root / CONVERTED_FOLDER
        say(f"Using output directory: {output_root}")
    output_root = file_util.collapse_converted(output_root)

    if not output_root.exists():
        if args.dry_run:
            say(f"[DRY RUN] Would create output directory: {output_root}")
        else:
            say(f"Creating output directory: {output_root}")
            try:
                output_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputDirectoryError(f"Error creating output directory '{output_root}': {e}")

    say(f"Searching for media files in {input_root}")
    say(f"Files with the '{args.ignore_flag}' file in their directory will be skipped")
    say(f"Output directory set to: {output_root}")
    say(f"Using analyzeduration: {analyze_duration}, probesize: {probe_size}")
    if args.no_underscore_replace:
        say("Output filenames will maintain the same format as input filenames")
    else:
        say("Underscores in filenames will be replaced with spaces in output files")
    say("Recursive search enabled" if args.recursive else "Non-recursive search")
    if args.verbose:
        say("Verbose output enabled")

    options = BatchOptions(
        input_root=input_root,
        output_root=output_root,
        recursive=args.recursive,
        execute=args.execute,
        dry_run=args.dry_run,
        force_m4v=args.force_m4v,
        replace_underscores=not args.no_underscore_replace,
        ignore_flag=args.ignore_flag,
        analyze_duration=analyze_duration,
        probe_size=probe_size,
        verbose=args.verbose,
        preset_file=preset_path,
    )
    result = BatchOrchestrator(params, options, out=out).run()
    return 1 if result.failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger.set_log_level(LogLevel.DEBUG if args.verbose else LogLevel.INFO)

    with output_sink(args.log_file or LOG_FILE) as out:
        try:
            return run(args, out)
        except ConverterError as e:
            logger.log("startup.error", LogLevel.ERROR, stream=out, error=str(e))
            if out is not sys.stdout:
                logger.safe_print(f"Error: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
