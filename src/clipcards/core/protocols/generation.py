from typing import Protocol, runtime_checkable

from clipcards.core.models import FlashcardSet, Language, Summary, TranscriptChunk


@runtime_checkable
class GenerationProvider(Protocol):
    async def generate_flashcards(
        self, chunk: TranscriptChunk, language: Language
    ) -> FlashcardSet: ...

    async def summarize(self, transcript_text: str, language: Language) -> Summary: ...
