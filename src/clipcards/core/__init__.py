"""Core clipcards components.

Models, protocols, configuration, errors and logging shared by the chunker,
the aggregator, the providers and the pipeline.
"""

from __future__ import annotations

from clipcards.core.config import ChunkingPolicy, ClipCardsConfig
from clipcards.core.exceptions import (
    AggregationError,
    AllChunksFailedError,
    ChunkFailure,
    ClipCardsError,
    ConfigurationError,
    InputValidationError,
    NoChunksProvidedError,
    ProviderError,
    ResponseValidationError,
)
from clipcards.core.logging_config import configure_logging, get_logger
from clipcards.core.models import (
    Difficulty,
    Flashcard,
    FlashcardSet,
    FlashcardSetMetadata,
    Language,
    Summary,
    TopicPoint,
    Transcript,
    TranscriptChunk,
    TranscriptSegment,
)
from clipcards.core.protocols import GenerationProvider, STTProvider
from clipcards.core.retry_config import RetryConfig, create_retry_decorator

__all__ = [
    # Exceptions
    "AggregationError",
    "AllChunksFailedError",
    "ChunkFailure",
    # Config
    "ChunkingPolicy",
    "ClipCardsConfig",
    "ClipCardsError",
    "ConfigurationError",
    # Models
    "Difficulty",
    "Flashcard",
    "FlashcardSet",
    "FlashcardSetMetadata",
    # Protocols
    "GenerationProvider",
    "InputValidationError",
    "Language",
    "NoChunksProvidedError",
    "ProviderError",
    "ResponseValidationError",
    "RetryConfig",
    "STTProvider",
    "Summary",
    "TopicPoint",
    "Transcript",
    "TranscriptChunk",
    "TranscriptSegment",
    # Logging
    "configure_logging",
    "create_retry_decorator",
    "get_logger",
]
