"""End-to-end orchestration: transcribe, chunk, generate, aggregate."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from clipcards.aggregation import aggregate_flashcards
from clipcards.chunking import TranscriptChunker
from clipcards.core.config import ClipCardsConfig
from clipcards.core.exceptions import InputValidationError
from clipcards.core.logging_config import Timer, configure_logging, get_logger
from clipcards.core.models import FlashcardSet, Language, Summary, Transcript, TranscriptChunk
from clipcards.core.protocols import GenerationProvider, STTProvider
from clipcards.core.provider_factory import create_generation_provider, create_stt_provider
from clipcards.uploads import format_file_size, needs_compression, validate_upload

logger = get_logger(__name__)


class ClipCardsPipeline:
    """Turns audio or transcripts into summaries and flashcard sets.

    Providers passed in are used as-is and left open on ``close``. Providers
    built from the config are created on first use and closed by ``close``,
    so a pipeline that only chunks never needs an API key.
    """

    def __init__(
        self,
        config: ClipCardsConfig | None = None,
        *,
        stt: STTProvider | None = None,
        generator: GenerationProvider | None = None,
    ) -> None:
        """Initialize the pipeline with config and optional provider overrides.

        Args:
            config: clipcards configuration. Read from the environment if omitted.
            stt: Custom speech-to-text provider.
            generator: Custom LLM generation provider.
        """
        self._config = config or ClipCardsConfig()

        configure_logging(
            log_level=self._config.log_level,
            log_format=self._config.log_format,
            log_timestamps=self._config.log_timestamps,
        )

        self._retry_config = self._config.retry_config()
        self._chunker = TranscriptChunker(self._config.chunking_policy())
        self._stt = stt
        self._generator = generator
        self._owned: list[Any] = []

    @property
    def config(self) -> ClipCardsConfig:
        return self._config

    @property
    def stt(self) -> STTProvider:
        if self._stt is None:
            self._stt = create_stt_provider(self._config, self._retry_config)
            self._owned.append(self._stt)
        return self._stt

    @property
    def generator(self) -> GenerationProvider:
        if self._generator is None:
            self._generator = create_generation_provider(self._config, self._retry_config)
            self._owned.append(self._generator)
        return self._generator

    async def close(self) -> None:
        """Close providers created by this pipeline. Safe to call twice."""
        owned, self._owned = self._owned, []
        for provider in owned:
            close = getattr(provider, "close", None)
            if close is not None:
                await close()
            if provider is self._stt:
                self._stt = None
            if provider is self._generator:
                self._generator = None

    async def __aenter__(self) -> ClipCardsPipeline:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _check_duration(self, transcript: Transcript) -> None:
        limit = self._config.max_video_duration_seconds
        if transcript.duration_seconds > limit:
            raise InputValidationError(
                f"Video duration ({round(transcript.duration_seconds / 60)} minutes) "
                f"exceeds the {round(limit / 60)}-minute limit."
            )

    async def transcribe(self, audio_path: Path | str, language: Language) -> Transcript:
        """Transcribe an audio or video file.

        Files that cannot be uploaded are rejected before any
        provider call, and media longer than the duration limit after it.
        """
        path = Path(audio_path)
        if not path.is_file():
            raise InputValidationError(f"Audio file not found: {path}")

        size_bytes = path.stat().st_size
        is_video = validate_upload(path.name, "", size_bytes, self._config.max_upload_size_bytes)
        if needs_compression(size_bytes):
            logger.warning(
                "audio_exceeds_stt_limit",
                audio_path=str(path),
                size=format_file_size(size_bytes),
                is_video=is_video,
            )

        with Timer(logger, "transcribe", audio_path=str(path), language=str(language)) as timer:
            transcript = await self.stt.transcribe(path, language)
            timer.complete(
                segments_count=len(transcript.segments),
                duration_seconds=transcript.duration_seconds,
            )

        self._check_duration(transcript)
        return transcript

    def chunk(self, transcript: Transcript) -> list[TranscriptChunk]:
        """Split a transcript with the configured chunking policy."""
        return self._chunker.chunk(transcript.segments, transcript.duration_seconds)

    async def flashcards(
        self,
        transcript: Transcript,
        language: Language,
        source_url: str | None = None,
    ) -> FlashcardSet:
        """Generate one merged flashcard set for a transcript.

        Raises:
            InputValidationError: If the transcript is over the duration limit.
            NoChunksProvidedError: If the transcript has no segments.
            AllChunksFailedError: If generation failed for every chunk.
        """
        self._check_duration(transcript)
        chunks = self.chunk(transcript)

        with Timer(
            logger,
            "flashcards",
            chunks_count=len(chunks),
            duration_minutes=round(transcript.duration_seconds / 60),
            language=str(language),
        ) as timer:
            result = await aggregate_flashcards(
                chunks,
                self.generator.generate_flashcards,
                language,
                source_url=source_url,
            )
            timer.complete(
                flashcards_count=len(result.flashcards),
                successful_chunks=result.metadata.successful_chunks if result.metadata else 0,
            )
        return result

    async def summarize(self, transcript: Transcript, language: Language) -> Summary:
        """Summarize a whole transcript in one LLM call."""
        if not transcript.segments:
            raise InputValidationError("No transcript segments were generated.")
        self._check_duration(transcript)

        with Timer(logger, "summarize", language=str(language)) as timer:
            summary = await self.generator.summarize(transcript.text, language)
            timer.complete(topics_count=len(summary.topics))
        return summary

    async def flashcards_from_file(
        self,
        audio_path: Path | str,
        language: Language,
        source_url: str | None = None,
    ) -> FlashcardSet:
        """Transcribe an audio file and generate flashcards from it.

        ``source_url`` defaults to ``file:<name>`` of the audio file.
        """
        transcript = await self.transcribe(audio_path, language)
        return await self.flashcards(
            transcript,
            language,
            source_url=source_url or f"file:{Path(audio_path).name}",
        )

    async def summarize_from_file(self, audio_path: Path | str, language: Language) -> Summary:
        transcript = await self.transcribe(audio_path, language)
        return await self.summarize(transcript, language)
