"""Validation of user-uploaded audio and video files."""

from __future__ import annotations

from pathlib import PurePath

from clipcards.core.exceptions import InputValidationError

DEFAULT_MAX_UPLOAD_BYTES = 200 * 1024 * 1024

# Whisper API request limit; larger audio must be compressed by the caller.
WHISPER_MAX_BYTES = 25 * 1024 * 1024

ALLOWED_AUDIO_TYPES = frozenset(
    {
        "audio/mpeg",
        "audio/mp3",
        "audio/mp4",
        "audio/x-m4a",
        "audio/m4a",
        "audio/wav",
        "audio/x-wav",
        "audio/ogg",
        "audio/webm",
        "audio/aac",
    }
)

ALLOWED_VIDEO_TYPES = frozenset(
    {
        "video/mp4",
        "video/x-matroska",
        "video/webm",
        "video/quicktime",
        "video/x-msvideo",
    }
)

VIDEO_EXTENSIONS = frozenset({".mp4", ".mkv", ".webm", ".mov", ".avi"})

# Fallback when the browser sends a generic MIME type.
ALLOWED_EXTENSIONS = frozenset({".mp3", ".m4a", ".wav", ".ogg", ".aac"}) | VIDEO_EXTENSIONS


def _extension(filename: str) -> str:
    return PurePath(filename).suffix.lower()


def is_allowed_file(mime_type: str, filename: str) -> bool:
    if mime_type in ALLOWED_AUDIO_TYPES or mime_type in ALLOWED_VIDEO_TYPES:
        return True
    return _extension(filename) in ALLOWED_EXTENSIONS


def is_video_file(mime_type: str, filename: str) -> bool:
    if mime_type in ALLOWED_VIDEO_TYPES:
        return True
    return _extension(filename) in VIDEO_EXTENSIONS


def needs_compression(size_bytes: int) -> bool:
    """Whether audio of this size exceeds the speech-to-text upload limit."""
    return size_bytes > WHISPER_MAX_BYTES


def format_file_size(size_bytes: int) -> str:
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def validate_upload(
    filename: str,
    mime_type: str,
    size_bytes: int,
    max_size_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> bool:
    """Check an upload before any processing.

    Returns:
        True if the upload is a video (audio must be extracted first).

    Raises:
        InputValidationError: With a user-facing message when the file is
            empty, too large or of an unsupported type.
    """
    if size_bytes <= 0:
        raise InputValidationError("No file provided. Please select an audio or video file.")

    if size_bytes > max_size_bytes:
        raise InputValidationError(
            f"File is too large ({format_file_size(size_bytes)}). "
            f"Maximum allowed size is {format_file_size(max_size_bytes)}."
        )

    if not is_allowed_file(mime_type, filename):
        raise InputValidationError(
            f'Unsupported file type "{mime_type or "unknown"}". Please upload an audio '
            "(mp3, m4a, wav, ogg) or video (mp4, mkv, webm) file."
        )

    return is_video_file(mime_type, filename)
