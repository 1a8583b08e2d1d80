"""LLM generation providers."""

from __future__ import annotations


def __getattr__(name: str):
    """Lazy import with clear error messages for missing dependencies."""
    if name == "OpenAIGenerator":
        try:
            from clipcards.generate.openai import OpenAIGenerator

            return OpenAIGenerator
        except ImportError:
            raise ImportError(
                "OpenAIGenerator requires 'openai'. Install with: pip install openai"
            ) from None
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "OpenAIGenerator",
]
