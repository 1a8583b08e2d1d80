"""Tests for ClipCardsPipeline orchestration."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from clipcards import ClipCardsConfig, ClipCardsPipeline
from clipcards.core.exceptions import (
    AllChunksFailedError,
    ConfigurationError,
    InputValidationError,
    NoChunksProvidedError,
    ProviderError,
)
from clipcards.core.models import Language, Transcript


@pytest.fixture
def config(clean_env) -> ClipCardsConfig:
    return ClipCardsConfig(log_format="plain")


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "talk.m4a"
    path.write_bytes(b"fake")
    return path


class TestPipelineChunking:
    def test_chunk_uses_configured_policy(self, config, long_transcript) -> None:
        pipeline = ClipCardsPipeline(config)

        assert len(pipeline.chunk(long_transcript)) == 2

        short_policy = config.model_copy(
            update={"chunk_target_duration_seconds": 600, "chunk_tolerance_seconds": 60}
        )
        assert len(ClipCardsPipeline(short_policy).chunk(long_transcript)) >= 4

    def test_missing_api_key_only_fails_on_provider_use(self, config) -> None:
        pipeline = ClipCardsPipeline(config)

        with pytest.raises(ConfigurationError):
            _ = pipeline.generator
        with pytest.raises(ConfigurationError):
            _ = pipeline.stt


class TestPipelineFlashcards:
    @pytest.mark.asyncio
    async def test_flashcards_for_long_transcript(
        self, config, long_transcript, mock_generation_provider
    ) -> None:
        pipeline = ClipCardsPipeline(config, generator=mock_generation_provider)

        result = await pipeline.flashcards(
            long_transcript, Language.EN, source_url="https://youtu.be/dQw4w9WgXcQ"
        )

        assert mock_generation_provider.generate_flashcards.await_count == 2
        assert result.metadata.total_chunks == 2
        assert result.metadata.successful_chunks == 2
        assert result.metadata.source_url == "https://youtu.be/dQw4w9WgXcQ"
        assert result.topic == "Topic 0 (and 1 more topic)"
        assert [c.id for c in result.flashcards] == ["1-1", "1-2", "2-1", "2-2"]

    @pytest.mark.asyncio
    async def test_all_chunks_failed_propagates(self, config, long_transcript) -> None:
        generator = AsyncMock()
        generator.generate_flashcards = AsyncMock(
            side_effect=ProviderError("rate limited", provider="fake", retryable=True)
        )
        pipeline = ClipCardsPipeline(config, generator=generator)

        with pytest.raises(AllChunksFailedError):
            await pipeline.flashcards(long_transcript, Language.EN)

    @pytest.mark.asyncio
    async def test_empty_transcript(self, config, mock_generation_provider) -> None:
        pipeline = ClipCardsPipeline(config, generator=mock_generation_provider)

        with pytest.raises(NoChunksProvidedError):
            await pipeline.flashcards(Transcript(segments=[], duration_seconds=0), Language.EN)

    @pytest.mark.asyncio
    async def test_rejects_transcripts_over_duration_limit(
        self, clean_env, long_transcript, mock_generation_provider
    ) -> None:
        config = ClipCardsConfig(max_video_duration_seconds=1800)
        pipeline = ClipCardsPipeline(config, generator=mock_generation_provider)

        with pytest.raises(InputValidationError, match="exceeds the 30-minute limit"):
            await pipeline.flashcards(long_transcript, Language.EN)
        mock_generation_provider.generate_flashcards.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_flashcards_from_file(
        self, config, audio_file, mock_stt_provider, mock_generation_provider
    ) -> None:
        pipeline = ClipCardsPipeline(
            config, stt=mock_stt_provider, generator=mock_generation_provider
        )

        result = await pipeline.flashcards_from_file(audio_file, Language.PT_BR)

        mock_stt_provider.transcribe.assert_awaited_once_with(audio_file, Language.PT_BR)
        assert result.language is Language.PT_BR
        assert result.metadata.total_chunks == 1
        assert result.metadata.source_url == "file:talk.m4a"
        assert result.topic == "Topic 0"


class TestPipelineSummarize:
    @pytest.mark.asyncio
    async def test_summarize_sends_full_text(
        self, config, sample_transcript, mock_generation_provider, sample_summary
    ) -> None:
        pipeline = ClipCardsPipeline(config, generator=mock_generation_provider)

        summary = await pipeline.summarize(sample_transcript, Language.EN)

        assert summary == sample_summary
        mock_generation_provider.summarize.assert_awaited_once_with(
            sample_transcript.text, Language.EN
        )

    @pytest.mark.asyncio
    async def test_summarize_empty_transcript(self, config, mock_generation_provider) -> None:
        pipeline = ClipCardsPipeline(config, generator=mock_generation_provider)

        with pytest.raises(InputValidationError):
            await pipeline.summarize(Transcript(segments=[], duration_seconds=0), Language.EN)

    @pytest.mark.asyncio
    async def test_summarize_from_file(
        self, config, audio_file, mock_stt_provider, mock_generation_provider
    ) -> None:
        pipeline = ClipCardsPipeline(
            config, stt=mock_stt_provider, generator=mock_generation_provider
        )

        summary = await pipeline.summarize_from_file(audio_file, Language.EN)

        assert summary.topics[0].title == "Light reactions"


class TestPipelineTranscribe:
    @pytest.mark.asyncio
    async def test_missing_file(self, config, mock_stt_provider, tmp_path) -> None:
        pipeline = ClipCardsPipeline(config, stt=mock_stt_provider)

        with pytest.raises(InputValidationError, match="not found"):
            await pipeline.transcribe(tmp_path / "nope.mp3", Language.EN)
        mock_stt_provider.transcribe.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("filename", "content", "message"),
        [
            ("notes.pdf", b"%PDF", "Unsupported file type"),
            ("empty.mp3", b"", "No file provided"),
        ],
    )
    async def test_rejects_unusable_files(
        self, config, mock_stt_provider, tmp_path, filename, content, message
    ) -> None:
        path = tmp_path / filename
        path.write_bytes(content)
        pipeline = ClipCardsPipeline(config, stt=mock_stt_provider)

        with pytest.raises(InputValidationError, match=message):
            await pipeline.transcribe(path, Language.EN)
        mock_stt_provider.transcribe.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_accepts_video_files(self, config, mock_stt_provider, tmp_path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"fake")
        pipeline = ClipCardsPipeline(config, stt=mock_stt_provider)

        await pipeline.transcribe(path, Language.EN)

        mock_stt_provider.transcribe.assert_awaited_once_with(path, Language.EN)

    @pytest.mark.asyncio
    async def test_accepts_string_path(self, config, audio_file, mock_stt_provider) -> None:
        pipeline = ClipCardsPipeline(config, stt=mock_stt_provider)

        transcript = await pipeline.transcribe(str(audio_file), Language.EN)

        assert len(transcript.segments) == 4


class TestPipelineLifecycle:
    @pytest.mark.asyncio
    async def test_closes_only_owned_providers(self, clean_env) -> None:
        config = ClipCardsConfig(openai_api_key="sk-test")
        injected = AsyncMock()
        async with ClipCardsPipeline(config, stt=injected) as pipeline:
            generator = pipeline.generator
            generator.client.close = AsyncMock()

        generator.client.close.assert_awaited_once()
        injected.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, config) -> None:
        pipeline = ClipCardsPipeline(config)
        await pipeline.close()
        await pipeline.close()
