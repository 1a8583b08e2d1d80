"""Configuration management for clipcards using pydantic-settings."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clipcards.core.retry_config import RetryConfig


@dataclass(frozen=True)
class ChunkingPolicy:
    """Constants steering how a transcript is split into chunks.

    Attributes:
        target_duration: Nominal chunk length in seconds.
        tolerance: Half-width in seconds of the window around the target end
            time in which a break point is searched.
        min_gap_for_break: Silence in seconds between two segments that makes
            the boundary a preferred break point.
        max_chunks: Once more chunks than this have been emitted, the rest of
            the transcript goes into one final chunk.
    """

    target_duration: float = 20 * 60
    tolerance: float = 2 * 60
    min_gap_for_break: float = 3.0
    max_chunks: int = 20

    def __post_init__(self) -> None:
        if self.target_duration <= 0:
            raise ValueError("target_duration must be positive")
        if self.tolerance < 0:
            raise ValueError("tolerance must not be negative")
        if self.min_gap_for_break < 0:
            raise ValueError("min_gap_for_break must not be negative")
        if self.max_chunks < 1:
            raise ValueError("max_chunks must be at least 1")


class ClipCardsConfig(BaseSettings):
    """clipcards configuration with environment variable support.

    All settings use the CLIPCARDS_ env prefix and may also come from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIPCARDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- OpenAI --
    openai_api_key: str = ""
    stt_model: str = "whisper-1"
    generation_model: str = "gpt-4.1-mini"
    flashcard_temperature: float = 0.3
    summary_temperature: float = 0.2

    # -- Chunking --
    chunk_target_duration_seconds: float = 1200
    chunk_tolerance_seconds: float = 120
    chunk_min_gap_seconds: float = 3.0
    chunk_max_chunks: int = 20

    # -- Input Limits --
    max_video_duration_seconds: float = 2 * 60 * 60
    max_upload_size_mb: int = 200

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "colored"
    log_timestamps: bool = True

    # -- Retry Configuration --
    retry_max_attempts: int = 3
    retry_min_wait_seconds: float = 4.0
    retry_max_wait_seconds: float = 60.0
    retry_exponential_multiplier: float = 1.0

    @field_validator("chunk_target_duration_seconds", "max_video_duration_seconds")
    @classmethod
    def _validate_positive_seconds(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("chunk_tolerance_seconds", "chunk_min_gap_seconds")
    @classmethod
    def _validate_non_negative_seconds(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("chunk_max_chunks", "retry_max_attempts", "max_upload_size_mb")
    @classmethod
    def _validate_at_least_one(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        if value not in ("colored", "plain", "json"):
            raise ValueError("must be one of 'colored', 'plain', 'json'")
        return value

    def chunking_policy(self) -> ChunkingPolicy:
        """Build the chunking policy from the chunk_* settings."""
        return ChunkingPolicy(
            target_duration=self.chunk_target_duration_seconds,
            tolerance=self.chunk_tolerance_seconds,
            min_gap_for_break=self.chunk_min_gap_seconds,
            max_chunks=self.chunk_max_chunks,
        )

    def retry_config(self) -> RetryConfig:
        """Build the provider retry configuration from the retry_* settings."""
        return RetryConfig(
            max_attempts=self.retry_max_attempts,
            min_wait_seconds=self.retry_min_wait_seconds,
            max_wait_seconds=self.retry_max_wait_seconds,
            exponential_multiplier=self.retry_exponential_multiplier,
        )

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024
