"""Application services built on the data store."""

from gratitude.services.journal import ImportResult, JournalService
from gratitude.services.prompts import DEFAULT_PROMPTS, PromptBook
from gratitude.services.spaces import SpaceService

__all__ = [
    "DEFAULT_PROMPTS",
    "ImportResult",
    "JournalService",
    "PromptBook",
    "SpaceService",
]
