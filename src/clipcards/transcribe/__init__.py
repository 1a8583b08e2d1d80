"""Transcription (STT) providers."""

from __future__ import annotations


def __getattr__(name: str):
    """Lazy import with clear error messages for missing dependencies."""
    if name == "OpenAITranscriber":
        try:
            from clipcards.transcribe.openai import OpenAITranscriber

            return OpenAITranscriber
        except ImportError:
            raise ImportError(
                "OpenAITranscriber requires 'openai'. Install with: pip install openai"
            ) from None
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "OpenAITranscriber",
]
