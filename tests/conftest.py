"""Shared pytest fixtures for the clipcards test suite."""

from collections.abc import Callable, Sequence
from unittest.mock import AsyncMock

import pytest

from clipcards.core.models import (
    Difficulty,
    Flashcard,
    FlashcardSet,
    Language,
    Summary,
    TopicPoint,
    Transcript,
    TranscriptChunk,
    TranscriptSegment,
)

# ============================================================================
# Segment Builders
# ============================================================================


def build_segments(
    durations: Sequence[float], gaps: Sequence[float] | float = 0.0, start: float = 0.0
) -> list[TranscriptSegment]:
    """Build consecutive segments.

    ``gaps[i]`` is the silence after segment ``i``; a single float applies to
    every boundary.
    """
    if isinstance(gaps, int | float):
        gaps = [float(gaps)] * len(durations)
    segments = []
    cursor = start
    for i, duration in enumerate(durations):
        segments.append(TranscriptSegment(text=f"segment {i}", start=cursor, duration=duration))
        cursor += duration + (gaps[i] if i < len(gaps) else 0.0)
    return segments


def uniform_segments(
    total_seconds: float, segment_seconds: float = 10.0, gap: float = 0.5
) -> list[TranscriptSegment]:
    """Segments of ``segment_seconds`` separated by ``gap`` covering ``total_seconds``."""
    segments = []
    cursor = 0.0
    i = 0
    while cursor < total_seconds:
        duration = min(segment_seconds, total_seconds - cursor)
        segments.append(TranscriptSegment(text=f"segment {i}", start=cursor, duration=duration))
        cursor += duration + gap
        i += 1
    return segments


@pytest.fixture
def segment_builder() -> Callable[..., list[TranscriptSegment]]:
    return build_segments


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_segments() -> list[TranscriptSegment]:
    """Four short segments covering 25 seconds."""
    return [
        TranscriptSegment(text="Welcome to the lecture.", start=0.0, duration=5.5),
        TranscriptSegment(text="Today we cover photosynthesis.", start=5.5, duration=5.7),
        TranscriptSegment(text="Light reactions come first.", start=11.2, duration=7.6),
        TranscriptSegment(text="Then the Calvin cycle.", start=18.8, duration=6.2),
    ]


@pytest.fixture
def sample_transcript(sample_segments: list[TranscriptSegment]) -> Transcript:
    return Transcript(segments=sample_segments, duration_seconds=25.0)


@pytest.fixture
def long_transcript() -> Transcript:
    """A 2500 second transcript of 10 second segments."""
    segments = uniform_segments(2500.0)
    return Transcript(segments=segments, duration_seconds=segments[-1].end)


@pytest.fixture
def sample_chunk(sample_segments: list[TranscriptSegment]) -> TranscriptChunk:
    return TranscriptChunk.from_segments(0, sample_segments)


def make_flashcard_set(
    topic: str = "Photosynthesis",
    difficulty: Difficulty = Difficulty.INTERMEDIATE,
    card_count: int = 2,
    language: Language = Language.EN,
) -> FlashcardSet:
    return FlashcardSet(
        topic=topic,
        difficulty=difficulty,
        language=language,
        flashcards=[
            Flashcard(
                id=str(i),
                question=f"{topic} question {i}?",
                answer=f"{topic} answer {i}.",
                tags=[topic.lower()],
            )
            for i in range(1, card_count + 1)
        ],
    )


@pytest.fixture
def sample_flashcard_set() -> FlashcardSet:
    return make_flashcard_set()


@pytest.fixture
def sample_summary() -> Summary:
    return Summary(
        paragraph="The lecture explains how plants turn light into sugar.",
        topics=[
            TopicPoint(title="Light reactions", timestamp="00:11"),
            TopicPoint(title="Calvin cycle", timestamp="00:18"),
        ],
    )


# ============================================================================
# Mock Provider Fixtures
# ============================================================================


@pytest.fixture
def mock_stt_provider(sample_transcript: Transcript) -> AsyncMock:
    mock = AsyncMock()
    mock.transcribe = AsyncMock(return_value=sample_transcript)
    return mock


@pytest.fixture
def mock_generation_provider(sample_summary: Summary) -> AsyncMock:
    """Generator returning one two-card set per chunk, topic named after the chunk."""
    mock = AsyncMock()

    async def generate_flashcards(chunk: TranscriptChunk, language: Language) -> FlashcardSet:
        return make_flashcard_set(topic=f"Topic {chunk.index}", language=language)

    mock.generate_flashcards = AsyncMock(side_effect=generate_flashcards)
    mock.summarize = AsyncMock(return_value=sample_summary)
    return mock


# ============================================================================
# Environment Isolation
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Drop CLIPCARDS_* variables and run from a directory without a .env file."""
    import os

    for key in list(os.environ):
        if key.startswith("CLIPCARDS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
