"""OpenAI Speech-to-Text provider using Whisper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from openai import APIConnectionError, APITimeoutError, AsyncOpenAI, RateLimitError  # type: ignore

from clipcards.core.exceptions import ProviderError
from clipcards.core.logging_config import get_logger
from clipcards.core.models import Language, Transcript
from clipcards.core.retry_config import RetryConfig
from clipcards.transcribe._base import TranscriberMixin

logger = get_logger(__name__)


class OpenAITranscriber(TranscriberMixin):
    """Speech-to-Text provider using OpenAI's Whisper API."""

    _provider_name: str = "openai_stt"
    _retryable_exceptions: tuple[type[Exception], ...] = (
        RateLimitError,
        APITimeoutError,
        APIConnectionError,
        ConnectionError,
    )

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "whisper-1",
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize OpenAI STT provider."""
        super().__init__(api_key=api_key, model=model, retry_config=retry_config)
        self.client = AsyncOpenAI(api_key=api_key)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    async def transcribe(self, audio_path: Path, language: Language) -> Transcript:
        """Transcribe an audio file into timestamped segments."""
        operation_logger = self._logger.bind(
            audio_path=str(audio_path),
            language=str(language),
            operation="transcribe",
        )
        operation_logger.debug("transcription_started")

        retry_decorator = self._get_retry_decorator()

        @retry_decorator
        async def _transcribe_with_retry() -> Any:
            with open(audio_path, "rb") as audio_file:
                return await self.client.audio.transcriptions.create(
                    model=self.model,
                    file=audio_file,
                    response_format="verbose_json",
                    timestamp_granularities=["segment"],
                    language=language.stt_code,
                )

        try:
            response = await _transcribe_with_retry()
        except Exception as e:
            raise await self._wrap_error(e, "transcribe") from e

        transcript = self._build_transcript(self._extract_spans(response))
        operation_logger.info(
            "transcription_completed",
            segments_count=len(transcript.segments),
            duration_seconds=transcript.duration_seconds,
        )
        return transcript

    def _extract_spans(self, response: Any) -> list[tuple[float, float, str]]:
        segments = getattr(response, "segments", None) or []
        spans = []
        for segment in segments:
            try:
                spans.append((float(segment.start), float(segment.end), str(segment.text)))
            except (AttributeError, TypeError, ValueError) as e:
                raise ProviderError(
                    f"Malformed transcription segment: {e}",
                    provider=self._provider_name,
                ) from e
        return spans
