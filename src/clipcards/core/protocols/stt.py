from pathlib import Path
from typing import Protocol, runtime_checkable

from clipcards.core.models import Language, Transcript


@runtime_checkable
class STTProvider(Protocol):
    async def transcribe(self, audio_path: Path, language: Language) -> Transcript: ...
