from __future__ import annotations

from clipcards.core.config import ClipCardsConfig
from clipcards.core.exceptions import ConfigurationError
from clipcards.core.protocols import GenerationProvider, STTProvider
from clipcards.core.retry_config import RetryConfig


def _require_openai_key(config: ClipCardsConfig) -> str:
    if not config.openai_api_key:
        raise ConfigurationError(
            "OpenAI API key is not configured. Set CLIPCARDS_OPENAI_API_KEY."
        )
    return config.openai_api_key


def create_stt_provider(config: ClipCardsConfig, retry_config: RetryConfig) -> STTProvider:
    """Create the speech-to-text provider described by ``config``."""
    from clipcards.transcribe.openai import OpenAITranscriber

    return OpenAITranscriber(
        api_key=_require_openai_key(config),
        model=config.stt_model,
        retry_config=retry_config,
    )


def create_generation_provider(
    config: ClipCardsConfig, retry_config: RetryConfig
) -> GenerationProvider:
    """Create the LLM generation provider described by ``config``."""
    from clipcards.generate.openai import OpenAIGenerator

    return OpenAIGenerator(
        api_key=_require_openai_key(config),
        model=config.generation_model,
        retry_config=retry_config,
        flashcard_temperature=config.flashcard_temperature,
        summary_temperature=config.summary_temperature,
    )
