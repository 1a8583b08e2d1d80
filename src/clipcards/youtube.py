"""YouTube URL parsing."""

from __future__ import annotations

import re

from clipcards.core.exceptions import InputValidationError

_YOUTUBE_URL = re.compile(
    r"^(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)


def extract_video_id(url: str) -> str | None:
    """Return the 11-character video id of a YouTube URL, or None.

    Accepts ``youtube.com/watch?v=``, ``/embed/``, ``/v/`` and ``youtu.be/``
    forms, with or without scheme and ``www.``.
    """
    match = _YOUTUBE_URL.match(url.strip())
    if not match:
        return None
    return match.group(1)


def is_valid_youtube_url(url: str) -> bool:
    return extract_video_id(url) is not None


def require_video_id(url: str) -> str:
    """Like extract_video_id, but raise InputValidationError on a bad URL."""
    video_id = extract_video_id(url)
    if video_id is None:
        raise InputValidationError("Please provide a valid YouTube URL.")
    return video_id
