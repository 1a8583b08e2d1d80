"""Duration-bounded transcript chunking at natural speech pauses.

Long transcripts are split into chunks of roughly ``target_duration`` seconds
so that each one can be sent to the LLM on its own. Boundaries are placed on
segment boundaries only, preferring a silence gap between two segments that
falls near the target end time.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from clipcards.core.config import ChunkingPolicy
from clipcards.core.logging_config import get_logger
from clipcards.core.models import TranscriptChunk, TranscriptSegment

logger = get_logger(__name__)

DEFAULT_POLICY = ChunkingPolicy()


@dataclass(frozen=True)
class BreakCandidate:
    """A segment whose end falls inside the tolerance window."""

    index: int
    gap: float
    time_diff: float


def gap_after(segments: Sequence[TranscriptSegment], index: int) -> float:
    """Silence between the end of ``segments[index]`` and the start of the next one."""
    return segments[index + 1].start - segments[index].end


def _collect_candidates(
    segments: Sequence[TranscriptSegment],
    start_index: int,
    target_end_time: float,
    tolerance: float,
) -> list[BreakCandidate]:
    window_start = target_end_time - tolerance
    window_end = target_end_time + tolerance
    candidates: list[BreakCandidate] = []

    # The last segment has no following gap and is never a candidate.
    for i in range(start_index, len(segments) - 1):
        end = segments[i].end
        if window_start <= end <= window_end:
            candidates.append(
                BreakCandidate(
                    index=i,
                    gap=gap_after(segments, i),
                    time_diff=abs(end - target_end_time),
                )
            )
        if end > window_end:
            break

    return candidates


def _closest_segment(
    segments: Sequence[TranscriptSegment],
    start_index: int,
    target_end_time: float,
    tolerance: float,
) -> int:
    """Index of the segment ending closest to the target.

    Scans forward and stops after the first segment ending more than two
    tolerance windows past the target. Equal distances keep the earliest
    segment.
    """
    closest_index = start_index
    closest_diff = float("inf")
    search_limit = target_end_time + tolerance * 2

    for i in range(start_index, len(segments)):
        end = segments[i].end
        diff = abs(end - target_end_time)
        if diff < closest_diff:
            closest_diff = diff
            closest_index = i
        if end > search_limit:
            break

    return closest_index


def find_break_point(
    segments: Sequence[TranscriptSegment],
    start_index: int,
    target_end_time: float,
    policy: ChunkingPolicy = DEFAULT_POLICY,
) -> int:
    """Return the index of the last segment to include in the current chunk.

    Among segments ending within ``policy.tolerance`` of ``target_end_time``,
    a gap of at least ``policy.min_gap_for_break`` wins over any shorter gap,
    then the larger gap wins, then the end time closest to the target. With no
    segment in the window, the segment ending closest to the target is used.
    """
    candidates = _collect_candidates(segments, start_index, target_end_time, policy.tolerance)
    if not candidates:
        return _closest_segment(segments, start_index, target_end_time, policy.tolerance)

    best = min(
        candidates,
        key=lambda c: (c.gap < policy.min_gap_for_break, -c.gap, c.time_diff),
    )
    return best.index


class TranscriptChunker:
    """Splits ordered transcript segments into bounded-duration chunks.

    The chunks partition the input: concatenating ``chunk.items`` over the
    result gives back the original segments in order.
    """

    def __init__(self, policy: ChunkingPolicy | None = None) -> None:
        self.policy = policy or DEFAULT_POLICY
        self._logger = logger.bind(
            target_duration=self.policy.target_duration,
            tolerance=self.policy.tolerance,
        )

    def chunk(
        self, segments: Sequence[TranscriptSegment], total_duration: float
    ) -> list[TranscriptChunk]:
        """Split ``segments`` into chunks.

        Args:
            segments: Segments ordered by start time.
            total_duration: Total duration of the media in seconds. Only used
                to decide whether the transcript is short enough to keep whole.

        Returns:
            Chunks in time order, indexed from 0. Empty input gives no chunks.
        """
        if not segments:
            return []

        policy = self.policy
        items = list(segments)

        if total_duration <= policy.target_duration + policy.tolerance:
            return [TranscriptChunk.from_segments(0, items)]

        transcript_end = items[-1].end
        chunks: list[TranscriptChunk] = []
        start_index = 0

        while start_index < len(items):
            target_end_time = items[start_index].start + policy.target_duration

            if target_end_time >= transcript_end - policy.tolerance:
                chunks.append(TranscriptChunk.from_segments(len(chunks), items[start_index:]))
                break

            break_index = find_break_point(items, start_index, target_end_time, policy)
            chunks.append(
                TranscriptChunk.from_segments(len(chunks), items[start_index : break_index + 1])
            )
            start_index = break_index + 1

            if len(chunks) > policy.max_chunks:
                remaining = items[start_index:]
                self._logger.warning(
                    "max_chunks_exceeded",
                    max_chunks=policy.max_chunks,
                    remaining_segments=len(remaining),
                )
                if remaining:
                    chunks.append(TranscriptChunk.from_segments(len(chunks), remaining))
                break

        self._logger.debug(
            "transcript_chunked",
            segments_count=len(items),
            chunks_count=len(chunks),
            total_duration=total_duration,
        )
        return chunks


def chunk_transcript(
    segments: Sequence[TranscriptSegment],
    total_duration: float,
    policy: ChunkingPolicy | None = None,
) -> list[TranscriptChunk]:
    """Split transcript segments into chunks with the given (or default) policy."""
    return TranscriptChunker(policy).chunk(segments, total_duration)


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``M:SS``, or ``H:MM:SS`` from one hour on."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
