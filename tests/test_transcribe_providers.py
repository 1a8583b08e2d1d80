"""Tests for the OpenAI Whisper transcription provider."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import APIConnectionError

from clipcards.core.exceptions import ProviderError
from clipcards.core.models import Language
from clipcards.core.protocols import STTProvider
from clipcards.core.retry_config import RetryConfig
from clipcards.transcribe.openai import OpenAITranscriber

FAST_RETRY = RetryConfig(max_attempts=2, min_wait_seconds=0, max_wait_seconds=0)


def whisper_response(*spans: tuple[float, float, str]) -> SimpleNamespace:
    return SimpleNamespace(
        text=" ".join(text for _, _, text in spans),
        segments=[
            SimpleNamespace(id=i, start=s, end=e, text=t) for i, (s, e, t) in enumerate(spans)
        ],
    )


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "lecture.mp3"
    path.write_bytes(b"ID3fake-audio")
    return path


def transcriber_returning(*responses) -> OpenAITranscriber:
    transcriber = OpenAITranscriber(api_key="test-key", retry_config=FAST_RETRY)
    transcriber.client = MagicMock()
    transcriber.client.audio.transcriptions.create = AsyncMock(side_effect=list(responses))
    return transcriber


class TestTranscriberInstantiation:
    def test_openai_transcriber_instantiation(self) -> None:
        from clipcards.transcribe import OpenAITranscriber as LazyTranscriber

        provider = LazyTranscriber(api_key="test-key")
        assert provider.model == "whisper-1"
        assert isinstance(provider, STTProvider)


class TestOpenAITranscriber:
    @pytest.mark.asyncio
    async def test_maps_segments(self, audio_file: Path) -> None:
        transcriber = transcriber_returning(
            whisper_response((0.0, 4.5, "  Hello there. "), (5.0, 9.0, "General Kenobi."))
        )

        transcript = await transcriber.transcribe(audio_file, Language.EN)

        assert [s.text for s in transcript.segments] == ["Hello there.", "General Kenobi."]
        assert transcript.segments[0].duration == pytest.approx(4.5)
        assert transcript.segments[1].start == 5.0
        assert transcript.segments[1].duration == pytest.approx(4.0)
        assert transcript.duration_seconds == pytest.approx(9.0)

    @pytest.mark.asyncio
    async def test_request_parameters(self, audio_file: Path) -> None:
        transcriber = transcriber_returning(whisper_response((0.0, 1.0, "Olá.")))

        await transcriber.transcribe(audio_file, Language.PT_BR)

        kwargs = transcriber.client.audio.transcriptions.create.await_args.kwargs
        assert kwargs["language"] == "pt"
        assert kwargs["response_format"] == "verbose_json"
        assert kwargs["model"] == "whisper-1"

    @pytest.mark.asyncio
    async def test_no_segments_is_an_error(self, audio_file: Path) -> None:
        transcriber = transcriber_returning(SimpleNamespace(text="", segments=[]))

        with pytest.raises(ProviderError, match="No transcript segments"):
            await transcriber.transcribe(audio_file, Language.EN)

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, audio_file: Path) -> None:
        transcriber = transcriber_returning(
            APIConnectionError(request=MagicMock()),
            whisper_response((0.0, 1.0, "Hi.")),
        )

        transcript = await transcriber.transcribe(audio_file, Language.EN)

        assert len(transcript.segments) == 1
        assert transcriber.client.audio.transcriptions.create.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_file_is_wrapped(self, tmp_path: Path) -> None:
        transcriber = transcriber_returning(whisper_response((0.0, 1.0, "Hi.")))

        with pytest.raises(ProviderError) as exc_info:
            await transcriber.transcribe(tmp_path / "missing.mp3", Language.EN)

        assert exc_info.value.provider == "openai_stt"
