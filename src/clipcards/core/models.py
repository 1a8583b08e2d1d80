"""Pydantic data models for clipcards."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Language(StrEnum):
    """Output languages supported for summaries and flashcards."""

    EN = "en"
    PT_BR = "pt-BR"

    @property
    def label(self) -> str:
        """Human-readable name used inside LLM prompts."""
        if self is Language.PT_BR:
            return "Portuguese (Brazil)"
        return "English"

    @property
    def stt_code(self) -> str:
        """ISO-639-1 code expected by speech-to-text providers."""
        return self.value.split("-")[0]


class TranscriptSegment(BaseModel):
    """One span of transcribed speech. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    text: str
    start: float = Field(ge=0)
    duration: float = Field(ge=0)

    @property
    def end(self) -> float:
        return self.start + self.duration


class Transcript(BaseModel):
    """Ordered segments plus the total duration reported by the transcriber."""

    segments: list[TranscriptSegment]
    duration_seconds: float = Field(ge=0)

    @property
    def text(self) -> str:
        return " ".join(segment.text for segment in self.segments)


class TranscriptChunk(BaseModel):
    """A contiguous, non-overlapping run of segments."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    items: tuple[TranscriptSegment, ...]
    start_time: float
    end_time: float
    text: str

    @classmethod
    def from_segments(cls, index: int, items: list[TranscriptSegment]) -> TranscriptChunk:
        """Build a chunk, deriving times and text from its segments."""
        return cls(
            index=index,
            items=tuple(items),
            start_time=items[0].start,
            end_time=items[-1].end,
            text=" ".join(item.text for item in items),
        )

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class Difficulty(StrEnum):
    """Difficulty tiers, ordered from easiest to hardest."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Flashcard(BaseModel):
    """A single question/answer card."""

    id: str = Field(min_length=1)
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    tags: list[str] | None = None


class FlashcardSetResponse(BaseModel):
    """Structural contract an LLM flashcard response must satisfy."""

    topic: str = Field(min_length=1)
    difficulty: Difficulty
    flashcards: list[Flashcard] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_card_ids(self) -> FlashcardSetResponse:
        ids = [card.id for card in self.flashcards]
        if len(set(ids)) != len(ids):
            raise ValueError(f"flashcard ids must be unique, got {ids}")
        return self


class FlashcardSetMetadata(BaseModel):
    """Provenance of a merged flashcard set."""

    total_chunks: int = Field(ge=0)
    successful_chunks: int = Field(ge=0)
    source_url: str | None = None


class FlashcardSet(BaseModel):
    """Flashcards for one chunk, or merged across all chunks of a transcript."""

    topic: str
    difficulty: Difficulty
    language: Language
    flashcards: list[Flashcard]
    metadata: FlashcardSetMetadata | None = None


class TopicPoint(BaseModel):
    """A topic of a summary with its approximate start time (MM:SS or HH:MM:SS)."""

    title: str = Field(min_length=1)
    timestamp: str = Field(min_length=1)


class Summary(BaseModel):
    """Short summary of a whole transcript."""

    paragraph: str = Field(min_length=1)
    topics: list[TopicPoint] = Field(min_length=1)
