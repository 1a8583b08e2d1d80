"""Tests for clipcards data models."""

import pytest
from pydantic import ValidationError

from clipcards.core.exceptions import (
    AggregationError,
    AllChunksFailedError,
    ChunkFailure,
    ClipCardsError,
    NoChunksProvidedError,
    ProviderError,
    ResponseValidationError,
)
from clipcards.core.models import (
    Difficulty,
    FlashcardSetResponse,
    Language,
    Summary,
    Transcript,
    TranscriptChunk,
    TranscriptSegment,
)


class TestTranscriptSegment:
    def test_end(self):
        segment = TranscriptSegment(text="hi", start=1.5, duration=2.0)
        assert segment.end == 3.5

    @pytest.mark.parametrize(("start", "duration"), [(-1.0, 1.0), (0.0, -0.5)])
    def test_rejects_negative_times(self, start, duration):
        with pytest.raises(ValidationError):
            TranscriptSegment(text="hi", start=start, duration=duration)

    def test_is_immutable(self):
        segment = TranscriptSegment(text="hi", start=0.0, duration=1.0)
        with pytest.raises(ValidationError):
            segment.text = "changed"


class TestTranscriptChunk:
    def test_from_segments(self, sample_segments):
        chunk = TranscriptChunk.from_segments(3, sample_segments[1:3])

        assert chunk.index == 3
        assert chunk.start_time == 5.5
        assert chunk.end_time == pytest.approx(18.8)
        assert chunk.duration == pytest.approx(13.3)
        assert chunk.text == "Today we cover photosynthesis. Light reactions come first."

    def test_transcript_text(self, sample_transcript):
        assert sample_transcript.text.startswith("Welcome to the lecture. Today")

    def test_transcript_json_round_trip(self, sample_transcript):
        restored = Transcript.model_validate_json(sample_transcript.model_dump_json())
        assert restored == sample_transcript


class TestLanguage:
    def test_values(self):
        assert Language("pt-BR") is Language.PT_BR
        assert Language.PT_BR.label == "Portuguese (Brazil)"
        assert Language.PT_BR.stt_code == "pt"
        assert Language.EN.label == "English"
        assert Language.EN.stt_code == "en"

    def test_unknown_language(self):
        with pytest.raises(ValueError):
            Language("fr")


class TestResponseSchemas:
    def test_flashcard_response(self):
        parsed = FlashcardSetResponse.model_validate(
            {
                "topic": "Cells",
                "difficulty": "advanced",
                "flashcards": [{"id": "1", "question": "Q?", "answer": "A."}],
            }
        )
        assert parsed.difficulty is Difficulty.ADVANCED
        assert parsed.flashcards[0].tags is None

    def test_flashcard_requires_question_and_answer(self):
        with pytest.raises(ValidationError):
            FlashcardSetResponse.model_validate(
                {
                    "topic": "Cells",
                    "difficulty": "advanced",
                    "flashcards": [{"id": "1", "question": "", "answer": "A."}],
                }
            )

    def test_flashcard_ids_must_be_unique(self):
        with pytest.raises(ValidationError, match="unique"):
            FlashcardSetResponse.model_validate(
                {
                    "topic": "Cells",
                    "difficulty": "advanced",
                    "flashcards": [
                        {"id": "1", "question": "Q1?", "answer": "A1."},
                        {"id": "1", "question": "Q2?", "answer": "A2."},
                    ],
                }
            )

    def test_summary_requires_paragraph(self):
        with pytest.raises(ValidationError):
            Summary.model_validate(
                {"paragraph": "", "topics": [{"title": "t", "timestamp": "00:00"}]}
            )


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(ResponseValidationError, ProviderError)
        assert issubclass(NoChunksProvidedError, AggregationError)
        assert issubclass(AllChunksFailedError, AggregationError)
        assert issubclass(AggregationError, ClipCardsError)

    def test_all_chunks_failed_carries_failures(self):
        failures = [ChunkFailure(chunk_index=0, error=TimeoutError("slow"))]
        error = AllChunksFailedError(total_chunks=1, failures=failures)

        assert error.total_chunks == 1
        assert error.failures[0].error_type == "TimeoutError"
        assert "All chunks failed" in str(error)
