"""Exceptions raised during setup, before any file is processed."""


class ConverterError(Exception):
    """Base class for fatal setup errors; maps to a nonzero exit code."""


class PresetError(ConverterError):
    """Preset document is missing, unreadable, malformed or has no preset."""


class MissingToolError(ConverterError):
    """A required external binary was not found on PATH."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        names = ", ".join(missing)
        super().__init__(f"required tool(s) not found on PATH: {names}. Install ffmpeg first.")


class OutputDirectoryError(ConverterError):
    """The top-level output directory could not be created."""
