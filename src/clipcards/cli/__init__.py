"""Command line interface for clipcards."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from clipcards import ClipCardsConfig, ClipCardsPipeline
from clipcards.chunking import format_timestamp
from clipcards.core.exceptions import (
    AllChunksFailedError,
    ClipCardsError,
    ConfigurationError,
    InputValidationError,
)
from clipcards.core.models import (
    FlashcardSet,
    Language,
    Summary,
    Transcript,
    TranscriptChunk,
    TranscriptSegment,
)
from clipcards.youtube import require_video_id

CLIPCARDS_THEME = Theme(
    {
        "info": "bold cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "highlight": "bold magenta",
        "dim": "grey50",
    }
)

console = Console(theme=CLIPCARDS_THEME)

_SEGMENT_LIST = TypeAdapter(list[TranscriptSegment])


def load_transcript(path: Path) -> Transcript:
    """Load a transcript from JSON.

    Accepts either ``{"segments": [...], "duration_seconds": N}`` or a bare
    list of segments, in which case the duration is the end of the last one.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InputValidationError(f"Could not read transcript {path}: {e}") from e

    try:
        if isinstance(data, list):
            segments = _SEGMENT_LIST.validate_python(data)
            duration = segments[-1].end if segments else 0.0
            return Transcript(segments=segments, duration_seconds=duration)
        return Transcript.model_validate(data)
    except ValidationError as e:
        raise InputValidationError(f"Invalid transcript file {path}: {e}") from e


def user_message(error: ClipCardsError) -> str:
    """Message shown to the user for a failed command."""
    if isinstance(error, AllChunksFailedError):
        return "Failed to generate flashcards. Please try again."
    if isinstance(error, ConfigurationError | InputValidationError):
        return str(error)
    return f"Something went wrong: {error}"


def render_chunks(chunks: list[TranscriptChunk]) -> None:
    table = Table(
        box=None,
        show_header=True,
        header_style="highlight",
        title=f"{len(chunks)} chunk(s)",
        title_justify="left",
        title_style="dim",
        pad_edge=False,
    )
    table.add_column("#", style="dim", width=3)
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Segments", justify="right")
    table.add_column("Preview", ratio=3)

    for chunk in chunks:
        table.add_row(
            str(chunk.index),
            format_timestamp(chunk.start_time),
            format_timestamp(chunk.end_time),
            str(len(chunk.items)),
            chunk.text[:60],
        )
    console.print(table)


def render_flashcards(flashcards: FlashcardSet) -> None:
    subtitle = f"{flashcards.difficulty} | {len(flashcards.flashcards)} cards"
    if flashcards.metadata:
        subtitle += (
            f" | {flashcards.metadata.successful_chunks}/{flashcards.metadata.total_chunks} chunks"
        )
    console.print(
        Panel(flashcards.topic, title="Flashcards", subtitle=subtitle, border_style="success")
    )

    table = Table(show_header=True, header_style="highlight", pad_edge=False)
    table.add_column("ID", style="dim")
    table.add_column("Question", ratio=2)
    table.add_column("Answer", ratio=3)
    table.add_column("Tags", style="dim")
    for card in flashcards.flashcards:
        table.add_row(card.id, card.question, card.answer, ", ".join(card.tags or []))
    console.print(table)


def render_summary(summary: Summary) -> None:
    console.print(Panel(summary.paragraph, title="Summary", border_style="success", padding=(1, 2)))
    for topic in summary.topics:
        console.print(f"[dim]{topic.timestamp:>8}[/]  {topic.title}")


def _progress(message: str, quiet: bool) -> contextlib.AbstractContextManager:
    # JSON output must stay machine-readable.
    if quiet:
        return contextlib.nullcontext()
    return console.status(f"[info]{message}", spinner="dots")


def chunk_cmd(transcript_path: Path, as_json: bool, config: ClipCardsConfig) -> None:
    transcript = load_transcript(transcript_path)
    pipeline = ClipCardsPipeline(config)
    chunks = pipeline.chunk(transcript)
    if as_json:
        print(json.dumps([c.model_dump(mode="json", exclude={"items"}) for c in chunks], indent=2))
    else:
        render_chunks(chunks)


async def flashcards_cmd(
    audio_path: Path,
    language: Language,
    source_url: str | None,
    as_json: bool,
    config: ClipCardsConfig,
) -> None:
    if source_url is not None:
        source_url = f"https://www.youtube.com/watch?v={require_video_id(source_url)}"
    async with ClipCardsPipeline(config) as pipeline:
        with _progress("Transcribing and generating flashcards...", quiet=as_json):
            result = await pipeline.flashcards_from_file(audio_path, language, source_url)
    if as_json:
        print(result.model_dump_json(indent=2))
    else:
        render_flashcards(result)


async def summarize_cmd(
    audio_path: Path, language: Language, as_json: bool, config: ClipCardsConfig
) -> None:
    async with ClipCardsPipeline(config) as pipeline:
        with _progress("Transcribing and summarizing...", quiet=as_json):
            result = await pipeline.summarize_from_file(audio_path, language)
    if as_json:
        print(result.model_dump_json(indent=2))
    else:
        render_summary(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="clipcards: summaries and study flashcards from videos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clipcards flashcards lecture.mp3 --language en
  clipcards summarize talk.m4a --language pt-BR
  clipcards chunk transcript.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    language_kwargs = {
        "choices": [lang.value for lang in Language],
        "default": Language.EN.value,
        "help": "Output language (default: en)",
    }

    flashcards_parser = subparsers.add_parser("flashcards", help="Generate study flashcards")
    flashcards_parser.add_argument("audio", type=Path, help="Audio file to transcribe")
    flashcards_parser.add_argument("--language", **language_kwargs)
    flashcards_parser.add_argument("--source-url", help="YouTube URL recorded in the metadata")
    flashcards_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    summarize_parser = subparsers.add_parser("summarize", help="Summarize an audio file")
    summarize_parser.add_argument("audio", type=Path, help="Audio file to transcribe")
    summarize_parser.add_argument("--language", **language_kwargs)
    summarize_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    chunk_parser = subparsers.add_parser(
        "chunk", help="Show how a transcript JSON file would be chunked"
    )
    chunk_parser.add_argument("transcript", type=Path, help="Transcript JSON file")
    chunk_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``clipcards`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ClipCardsConfig()
        if args.command == "chunk":
            chunk_cmd(args.transcript, args.json, config)
        elif args.command == "flashcards":
            asyncio.run(
                flashcards_cmd(
                    args.audio, Language(args.language), args.source_url, args.json, config
                )
            )
        elif args.command == "summarize":
            asyncio.run(summarize_cmd(args.audio, Language(args.language), args.json, config))
        else:
            parser.print_help()
    except ClipCardsError as e:
        console.print(f"[error]Error:[/] {user_message(e)}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[warning]Operation cancelled by user.[/]")
        sys.exit(0)


if __name__ == "__main__":
    main()
