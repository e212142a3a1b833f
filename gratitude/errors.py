"""Exception types raised by Gratitude."""


class GratitudeError(Exception):
    """Base class for all Gratitude errors."""


class ReferenceNotFound(GratitudeError, LookupError):
    """The entry passed to a recompute is not part of the entry collection."""

    def __init__(self, entry_id):
        super().__init__(f"Entry {entry_id} is not in the collection being recomputed")
        self.entry_id = entry_id


class EntryNotFoundError(GratitudeError, LookupError):
    """No journal entry exists with the requested id."""

    def __init__(self, entry_id):
        super().__init__(f"No journal entry with id {entry_id}")
        self.entry_id = entry_id


class DuplicateEntryError(GratitudeError):
    """An entry already exists for the requested day."""

    def __init__(self, day):
        super().__init__(f"An entry for {day.isoformat()} already exists")
        self.day = day


class EmptyEntryError(GratitudeError, ValueError):
    """One or more of the three gratitude entries is blank."""


class SpaceNotFoundError(GratitudeError, LookupError):
    """No space exists with the requested id."""


class ItemNotFoundError(GratitudeError, LookupError):
    """No space item exists with the requested id."""


class TransferError(GratitudeError):
    """An import file could not be read or parsed."""


class ConfigError(GratitudeError):
    """The configuration file could not be loaded."""
