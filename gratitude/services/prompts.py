"""Journaling prompts."""

import random
from datetime import date
from typing import Optional

from gratitude.db.store import DataStore

DEFAULT_PROMPTS = [
    "What made you smile today?",
    "What are you grateful for today?",
    "What made today special?",
    "What made today awesome?",
    "What made today amazing?",
    "What made today great?",
    "What made today wonderful?",
    "What made today fantastic?",
    "What made today incredible?",
    "What made today extraordinary?",
    "What made today memorable?",
    "What made today magical?",
    "What made today marvelous?",
    "What made today splendid?",
    "What made today terrific?",
    "What made today delightful?",
    "What made today fabulous?",
    "What made today superb?",
    "What made today exceptional?",
    "What made today phenomenal?",
    "What made today unforgettable?",
    "What made today remarkable?",
    "What made today outstanding?",
    "What made today magnificent?",
    "What made today brilliant?",
    "What made today glorious?",
    "What made today peaceful?",
    "What made today calm?",
    "What made today restful?",
    "What made today relaxing?",
    "What made today refreshing?",
    "What made today energizing?",
    "What made today inspiring?",
    "What made today motivating?",
    "What made today encouraging?",
    "What made today uplifting?",
    "What made today heartwarming?",
    "What made today touching?",
    "What made today comforting?",
    "What made today reassuring?",
    "What made today supportive?",
]


class PromptBook:
    """Editable list of prompts, seeded with defaults on first use."""

    def __init__(self, store: DataStore):
        self.store = store
        self.store.seed_prompts(DEFAULT_PROMPTS)

    def prompts(self) -> list[str]:
        return self.store.get_prompts()

    def add(self, text: str) -> None:
        """Append a prompt."""
        text = text.strip()
        if not text:
            raise ValueError("Prompt must not be blank")
        self.store.add_prompts([text])

    def remove(self, index: int) -> str:
        """Remove the prompt at a zero-based position.

        Raises:
            IndexError: If there is no prompt at ``index``.
        """
        removed = self.store.delete_prompt_at(index)
        if removed is None:
            raise IndexError(f"No prompt at position {index + 1}")
        return removed

    def reset(self) -> None:
        """Replace all prompts with the defaults."""
        self.store.clear_prompts()
        self.store.add_prompts(DEFAULT_PROMPTS)

    def prompt_for_day(self, day: date) -> Optional[str]:
        """The same prompt all day, a different one the next."""
        prompts = self.prompts()
        if not prompts:
            return None
        return prompts[day.toordinal() % len(prompts)]

    def random_prompt(self, rng: Optional[random.Random] = None) -> Optional[str]:
        prompts = self.prompts()
        if not prompts:
            return None
        return (rng or random).choice(prompts)
