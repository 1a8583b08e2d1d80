"""Base transcriber mixin for STT providers."""

from __future__ import annotations

from typing import Any

from clipcards.core.exceptions import ProviderError
from clipcards.core.logging_config import get_logger
from clipcards.core.models import Transcript, TranscriptSegment
from clipcards.core.retry_config import RetryConfig, create_retry_decorator

logger = get_logger(__name__)


class TranscriberMixin:
    """Mixin providing common functionality for STT providers.

    Subclasses must set:
    - _provider_name: str
    - _retryable_exceptions: tuple[type[Exception], ...]
    """

    _provider_name: str = "transcriber"
    _retryable_exceptions: tuple[type[Exception], ...] = (
        ConnectionError,
        TimeoutError,
    )

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._model = model
        self._retry_config = retry_config or RetryConfig()
        self._logger = logger.bind(provider=self._provider_name, model=model)
        self._api_key = api_key

    @property
    def model(self) -> str:
        """Get the current model name."""
        return self._model

    def _get_retry_decorator(self) -> Any:
        return create_retry_decorator(
            config=self._retry_config,
            exception_types=self._retryable_exceptions,
        )

    async def _wrap_error(self, e: Exception, operation: str) -> ProviderError:
        return ProviderError(
            message=f"{self._provider_name} {operation} failed: {e}",
            provider=self._provider_name,
            retryable=isinstance(e, self._retryable_exceptions),
        )

    def _build_transcript(self, spans: list[tuple[float, float, str]]) -> Transcript:
        """Turn (start, end, text) spans into a transcript.

        Text is stripped, durations are ``end - start`` and the transcript
        duration is the end of the last segment.

        Raises:
            ProviderError: If the provider returned no segments.
        """
        if not spans:
            raise ProviderError(
                "No transcript segments were generated.",
                provider=self._provider_name,
            )

        segments = [
            TranscriptSegment(text=text.strip(), start=start, duration=max(end - start, 0.0))
            for start, end, text in spans
        ]
        return Transcript(segments=segments, duration_seconds=segments[-1].end)
