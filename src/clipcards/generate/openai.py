"""OpenAI generation provider for flashcards and summaries."""

from __future__ import annotations

from typing import Any

from openai import APIConnectionError, APITimeoutError, AsyncOpenAI, RateLimitError  # type: ignore

from clipcards.core.logging_config import get_logger
from clipcards.core.models import (
    FlashcardSet,
    FlashcardSetResponse,
    Language,
    Summary,
    TranscriptChunk,
)
from clipcards.core.retry_config import RetryConfig
from clipcards.generate._base import GeneratorMixin
from clipcards.generate.prompts import (
    FLASHCARD_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    flashcard_user_prompt,
    summary_user_prompt,
)

logger = get_logger(__name__)


class OpenAIGenerator(GeneratorMixin):
    """OpenAI chat-completions provider returning validated JSON artifacts."""

    _provider_name: str = "openai_generation"
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
        model: str = "gpt-4.1-mini",
        retry_config: RetryConfig | None = None,
        flashcard_temperature: float = 0.3,
        summary_temperature: float = 0.2,
    ) -> None:
        """Initialize OpenAI generator."""
        super().__init__(api_key=api_key, model=model, retry_config=retry_config)
        self.client = AsyncOpenAI(api_key=api_key)
        self.flashcard_temperature = flashcard_temperature
        self.summary_temperature = summary_temperature

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    async def _complete_json(
        self, system_prompt: str, user_prompt: str, temperature: float, operation: str
    ) -> str | None:
        retry_decorator = self._get_retry_decorator()

        @retry_decorator
        async def _complete_with_retry() -> Any:
            return await self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
            )

        try:
            response = await _complete_with_retry()
        except Exception as e:
            raise await self._wrap_error(e, operation) from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def generate_flashcards(self, chunk: TranscriptChunk, language: Language) -> FlashcardSet:
        """Generate a flashcard set for one transcript chunk."""
        operation_logger = self._logger.bind(
            chunk_index=chunk.index,
            chunk_start=chunk.start_time,
            chunk_end=chunk.end_time,
            language=str(language),
            operation="generate_flashcards",
        )
        operation_logger.debug("flashcard_generation_started", text_length=len(chunk.text))

        content = await self._complete_json(
            FLASHCARD_SYSTEM_PROMPT,
            flashcard_user_prompt(chunk, language),
            self.flashcard_temperature,
            "generate_flashcards",
        )
        parsed = self._parse_response(content, FlashcardSetResponse)

        operation_logger.info(
            "flashcard_generation_completed",
            flashcards_count=len(parsed.flashcards),
            difficulty=str(parsed.difficulty),
        )
        return FlashcardSet(
            topic=parsed.topic,
            difficulty=parsed.difficulty,
            language=language,
            flashcards=parsed.flashcards,
        )

    async def summarize(self, transcript_text: str, language: Language) -> Summary:
        """Summarize a whole transcript into a paragraph and timestamped topics."""
        operation_logger = self._logger.bind(
            transcript_length=len(transcript_text),
            language=str(language),
            operation="summarize",
        )
        operation_logger.debug("summary_generation_started")

        content = await self._complete_json(
            SUMMARY_SYSTEM_PROMPT,
            summary_user_prompt(transcript_text, language),
            self.summary_temperature,
            "summarize",
        )
        summary = self._parse_response(content, Summary)

        operation_logger.info("summary_generation_completed", topics_count=len(summary.topics))
        return summary
