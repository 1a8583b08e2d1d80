"""clipcards package.

Turns YouTube videos and uploaded recordings into short summaries or study
flashcards. Long transcripts are split into ~20 minute chunks at natural
pauses, each chunk is sent to the LLM concurrently, and the per-chunk
flashcard sets are merged into one.

Usage:
    from clipcards import ClipCardsConfig, ClipCardsPipeline, Language

    async with ClipCardsPipeline(ClipCardsConfig()) as pipeline:
        transcript = await pipeline.transcribe("lecture.mp3", Language.EN)
        cards = await pipeline.flashcards(transcript, Language.EN)

    # Chunking on its own
    from clipcards.chunking import chunk_transcript
    chunks = chunk_transcript(transcript.segments, transcript.duration_seconds)
"""

from __future__ import annotations

from clipcards.core import (
    AllChunksFailedError,
    ChunkingPolicy,
    ClipCardsConfig,
    ClipCardsError,
    FlashcardSet,
    Language,
    Summary,
    Transcript,
    TranscriptChunk,
    TranscriptSegment,
    configure_logging,
    get_logger,
)
from clipcards.pipeline import ClipCardsPipeline

__version__ = "0.1.0"

__all__ = [
    "AllChunksFailedError",
    "ChunkingPolicy",
    "ClipCardsConfig",
    "ClipCardsError",
    "ClipCardsPipeline",
    "FlashcardSet",
    "Language",
    "Summary",
    "Transcript",
    "TranscriptChunk",
    "TranscriptSegment",
    "__version__",
    "configure_logging",
    "get_logger",
]
