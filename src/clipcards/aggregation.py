"""Fan-out flashcard generation over transcript chunks and merge the results."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from clipcards.core.exceptions import AllChunksFailedError, ChunkFailure, NoChunksProvidedError
from clipcards.core.logging_config import get_logger
from clipcards.core.models import (
    Difficulty,
    Flashcard,
    FlashcardSet,
    FlashcardSetMetadata,
    Language,
    TranscriptChunk,
)

logger = get_logger(__name__)

ChunkGenerator = Callable[[TranscriptChunk, Language], Awaitable[FlashcardSet]]

DEFAULT_DIFFICULTY = Difficulty.INTERMEDIATE

_TOPIC_SUFFIXES: dict[Language, tuple[str, str]] = {
    Language.EN: ("{topic} (and 1 more topic)", "{topic} (and {count} more topics)"),
    Language.PT_BR: ("{topic} (e mais 1 tópico)", "{topic} (e mais {count} tópicos)"),
}


@dataclass(frozen=True)
class ChunkSuccess:
    """A per-chunk result, keyed by the original chunk index."""

    chunk_index: int
    result: FlashcardSet


async def generate_for_chunks(
    chunks: Sequence[TranscriptChunk],
    generate: ChunkGenerator,
    language: Language,
) -> tuple[list[ChunkSuccess], list[ChunkFailure]]:
    """Run ``generate`` on every chunk concurrently and wait for all of them.

    A failing chunk never cancels the others. Failures are returned, not
    raised; cancellation of a branch is re-raised.
    """
    async def run(chunk: TranscriptChunk) -> FlashcardSet:
        return await generate(chunk, language)

    outcomes = await asyncio.gather(*(run(chunk) for chunk in chunks), return_exceptions=True)

    successes: list[ChunkSuccess] = []
    failures: list[ChunkFailure] = []
    for chunk, outcome in zip(chunks, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error(
                "chunk_generation_failed",
                chunk_index=chunk.index,
                error=str(outcome),
                error_type=type(outcome).__name__,
            )
            failures.append(ChunkFailure(chunk_index=chunk.index, error=outcome))
        else:
            successes.append(ChunkSuccess(chunk_index=chunk.index, result=outcome))

    return successes, failures


def merged_topic(topics: Sequence[str], language: Language) -> str:
    """First topic, with a note on how many further topics were folded in."""
    if len(topics) == 1:
        return topics[0]
    extra = len(topics) - 1
    singular, plural = _TOPIC_SUFFIXES[language]
    template = singular if extra == 1 else plural
    return template.format(topic=topics[0], count=extra)


def dominant_difficulty(difficulties: Sequence[Difficulty]) -> Difficulty:
    """Most frequent difficulty; ties go to the tier seen first."""
    if not difficulties:
        return DEFAULT_DIFFICULTY
    counts: dict[Difficulty, int] = {}
    for difficulty in difficulties:
        counts[difficulty] = counts.get(difficulty, 0) + 1
    return max(counts, key=counts.__getitem__)


def merge_flashcard_sets(
    results: Sequence[FlashcardSet],
    language: Language,
    total_chunks: int,
    source_url: str | None = None,
) -> FlashcardSet:
    """Merge successful per-chunk sets, in chunk order, into one set.

    Card ids are prefixed with the 1-based position of their set among
    ``results`` so they stay unique after the merge.
    """
    flashcards: list[Flashcard] = []
    for position, result in enumerate(results, start=1):
        for card in result.flashcards:
            flashcards.append(card.model_copy(update={"id": f"{position}-{card.id}"}))

    return FlashcardSet(
        topic=merged_topic([r.topic for r in results], language),
        difficulty=dominant_difficulty([r.difficulty for r in results]),
        language=language,
        flashcards=flashcards,
        metadata=FlashcardSetMetadata(
            total_chunks=total_chunks,
            successful_chunks=len(results),
            source_url=source_url,
        ),
    )


async def aggregate_flashcards(
    chunks: Sequence[TranscriptChunk],
    generate: ChunkGenerator,
    language: Language,
    source_url: str | None = None,
) -> FlashcardSet:
    """Generate flashcards for every chunk and merge what succeeded.

    Args:
        chunks: Chunks of one transcript, in order.
        generate: Async per-chunk generator, e.g. a provider's
            ``generate_flashcards``.
        language: Language tag for the merged set.
        source_url: Video URL or file tag recorded in the metadata.

    Returns:
        Merged set whose metadata reports total and successful chunk counts.

    Raises:
        NoChunksProvidedError: If ``chunks`` is empty.
        AllChunksFailedError: If no chunk produced a result.
    """
    if not chunks:
        raise NoChunksProvidedError()

    operation_logger = logger.bind(operation="aggregate", total_chunks=len(chunks))
    successes, failures = await generate_for_chunks(chunks, generate, language)

    if not successes:
        operation_logger.error("all_chunks_failed")
        raise AllChunksFailedError(total_chunks=len(chunks), failures=failures)

    if failures:
        operation_logger.warning(
            "partial_chunk_failure",
            successful_chunks=len(successes),
            failed_chunk_indexes=[f.chunk_index for f in failures],
        )

    merged = merge_flashcard_sets(
        [s.result for s in successes],
        language=language,
        total_chunks=len(chunks),
        source_url=source_url,
    )
    operation_logger.info(
        "aggregation_completed",
        successful_chunks=len(successes),
        flashcards_count=len(merged.flashcards),
    )
    return merged
