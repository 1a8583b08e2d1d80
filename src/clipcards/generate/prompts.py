"""Prompt templates for flashcard and summary generation."""

from __future__ import annotations

from clipcards.chunking import format_timestamp
from clipcards.core.models import Language, TranscriptChunk

FLASHCARD_SYSTEM_PROMPT = """\
You are an expert study assistant specialized in creating educational flashcards.
Your job is to analyze video/lecture transcripts and create high-quality flashcards \
that help students learn and retain key concepts.

Guidelines for creating flashcards:
- Focus on the most important concepts, definitions, and facts
- Create clear, specific questions that test understanding
- Provide concise but complete answers
- Avoid trivial or overly obvious questions
- Include relevant tags to categorize each flashcard
- Vary question types: definitions, explanations, comparisons, applications"""

FLASHCARD_USER_TEMPLATE = '''\
Language for flashcards: {language}

You will receive a transcript segment from a YouTube video/lecture.
Analyze it and create educational flashcards for studying.

RULES:
- Create between 5-15 flashcards depending on content density
- Questions should test understanding, not just recall
- Answers should be clear and educational
- Use the same language ({language}) for questions and answers
- Each flashcard must have a unique id (use format: "1", "2", "3", etc.)
- Assign appropriate tags to help categorize the content
- Determine the difficulty level based on content complexity

OUTPUT FORMAT (STRICT JSON only, no markdown):
{{
  "topic": "Main topic or subject of this content segment",
  "difficulty": "beginner" | "intermediate" | "advanced",
  "flashcards": [
    {{
      "id": "1",
      "question": "Clear question testing a key concept",
      "answer": "Concise but complete answer",
      "tags": ["relevant", "tags"]
    }}
  ]
}}

TRANSCRIPT SEGMENT (from {start} to {end}):
"""{text}"""'''

SUMMARY_SYSTEM_PROMPT = (
    "You are a summarization engine for YouTube videos. "
    "Your job is to read a full transcript and output an extremely concise, clear summary. "
    "Do not show the transcript. Do not add filler or introductions. Do not repeat ideas."
)

SUMMARY_USER_TEMPLATE = '''\
Language: {language}

You will receive the full transcript of a YouTube video.

RULES:
- Be extremely concise.
- Use simple language.
- Do not add opinions or generic introductions.
- The summary must allow understanding the full video without watching it.

OUTPUT FORMAT (STRICT JSON):
{{
  "paragraph": "Single paragraph with 3-7 lines, summarizing the whole video.",
  "topics": [
    {{
      "title": "Short, clear topic description",
      "timestamp": "MM:SS or HH:MM:SS approximate starting time"
    }}
  ]
}}

Do not include any keys other than "paragraph" and "topics".
Do not include markdown.
Do not include explanations.

TRANSCRIPT:
"""{transcript}"""'''


def flashcard_user_prompt(chunk: TranscriptChunk, language: Language) -> str:
    return FLASHCARD_USER_TEMPLATE.format(
        language=language.label,
        start=format_timestamp(chunk.start_time),
        end=format_timestamp(chunk.end_time),
        text=chunk.text,
    )


def summary_user_prompt(transcript_text: str, language: Language) -> str:
    return SUMMARY_USER_TEMPLATE.format(language=language.label, transcript=transcript_text)
