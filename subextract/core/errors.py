# File: subextract/core/errors.py


class SubtitleExtractorError(Exception):
    """Base class for all errors raised by this service."""


class InputError(SubtitleExtractorError, ValueError):
    """
    Missing or unreadable source, or malformed request metadata.
    Fails the whole run.
    """


class ToolInvocationError(SubtitleExtractorError, RuntimeError):
    """
    The external extraction tool is missing, crashed or timed out.
    Scoped to a single stream.
    """

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class ArtifactValidationError(SubtitleExtractorError, RuntimeError):
    """The tool produced no file, or one too small to hold any cue."""


class LinkError(SubtitleExtractorError, IOError):
    """Writing to the metadata store failed."""
