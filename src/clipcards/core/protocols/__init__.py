"""Provider protocols."""

from .generation import GenerationProvider
from .stt import STTProvider

__all__ = [
    "GenerationProvider",
    "STTProvider",
]
