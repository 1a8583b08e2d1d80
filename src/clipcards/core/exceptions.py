"""Exception hierarchy for clipcards.

Exception Hierarchy:
    ClipCardsError (base)
    ├── ConfigurationError
    ├── ProviderError
    │   └── ResponseValidationError
    ├── InputValidationError
    └── AggregationError
        ├── NoChunksProvidedError
        └── AllChunksFailedError

Usage:
    from clipcards.core.exceptions import AllChunksFailedError, InputValidationError

    try:
        flashcards = await pipeline.flashcards(transcript, Language.EN)
    except AllChunksFailedError:
        show("Failed to generate flashcards. Please try again.")
    except InputValidationError as e:
        show(str(e))
"""

from __future__ import annotations

from dataclasses import dataclass


class ClipCardsError(Exception):
    """Base class for every error raised by clipcards."""

    pass


class ConfigurationError(ClipCardsError):
    """Raised when required configuration is missing or invalid.

    Example:
        raise ConfigurationError(
            "OpenAI API key is not configured. Set CLIPCARDS_OPENAI_API_KEY."
        )
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ProviderError(ClipCardsError):
    """Raised when an external provider (speech-to-text, LLM) fails.

    Args:
        message: Human-readable error message.
        provider: Name of the provider that failed (e.g. "openai_generation").
        retryable: Whether the failure is transient.

    Attributes:
        provider: Name of the failed provider.
        retryable: Whether the failure can be retried.
    """

    def __init__(self, message: str, provider: str, retryable: bool = False) -> None:
        super().__init__(message)
        self.provider = provider
        self.retryable = retryable


class ResponseValidationError(ProviderError):
    """Raised when an LLM response is not JSON or does not match the schema.

    Never retryable: the response is rejected, not repaired.
    """

    def __init__(self, message: str, provider: str, raw_content: str | None = None) -> None:
        super().__init__(message, provider=provider, retryable=False)
        self.raw_content = raw_content


class InputValidationError(ClipCardsError):
    """Raised when caller input is rejected before any provider is called.

    The message is meant to be shown to end users as-is.

    Example:
        raise InputValidationError("Please provide a valid YouTube URL.")
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AggregationError(ClipCardsError):
    """Base class for hard failures of the chunk result aggregator."""

    pass


class NoChunksProvidedError(AggregationError):
    """Raised when the aggregator is invoked with an empty chunk list."""

    def __init__(self, message: str = "No transcript chunks provided") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ChunkFailure:
    """A failed per-chunk generation, keyed by the original chunk index."""

    chunk_index: int
    error: BaseException

    @property
    def error_type(self) -> str:
        return type(self.error).__name__


class AllChunksFailedError(AggregationError):
    """Raised when every chunk failed to produce a result.

    Callers should present a "try again" message rather than partial output.

    Attributes:
        total_chunks: Number of chunks that were attempted.
        failures: One ChunkFailure per chunk, in chunk order.
    """

    def __init__(self, total_chunks: int, failures: list[ChunkFailure]) -> None:
        super().__init__(f"All chunks failed to generate flashcards ({total_chunks} attempted)")
        self.total_chunks = total_chunks
        self.failures = failures


__all__ = [
    "AggregationError",
    "AllChunksFailedError",
    "ChunkFailure",
    "ClipCardsError",
    "ConfigurationError",
    "InputValidationError",
    "NoChunksProvidedError",
    "ProviderError",
    "ResponseValidationError",
]
