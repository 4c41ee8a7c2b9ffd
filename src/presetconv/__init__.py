"""
Translate saved transcoding presets into ffmpeg command lines.

This package reads a GUI transcoder preset (a JSON document with a
``PresetList``), maps its video/audio settings onto equivalent ffmpeg
arguments and optionally batch-applies the resulting command to every media
file under a directory tree, mirroring the directory structure on the output
side.

The package is organized into several parts:
- preset: loading the preset document, extracting settings and translating
  them to encode parameters.
- transcode: building ffmpeg invocations, discovering media files and
  driving the batch.
- utils: constants, structured logging, process and file helpers.
"""

__version__ = "0.9.0"

__all__ = ["__version__"]
