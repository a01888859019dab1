"""Errors raised by the audio conversion pipeline."""
from typing import Optional


class AudioConversionError(Exception):
    """Base error for a failed conversion job. ``details`` is shown to the client."""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.details = details or message


class StagingError(AudioConversionError):
    """Raised when decoding the payload or reading/writing temp files fails."""


class TranscoderError(AudioConversionError):
    """Raised when ffmpeg cannot be started or exits with a non-zero code."""

    def __init__(self, message: str, details: str = "", returncode: Optional[int] = None):
        super().__init__(message, details)
        self.returncode = returncode
