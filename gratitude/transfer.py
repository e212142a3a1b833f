"""JSON and CSV import/export of journal entries.

JSON holds every field, streak included. CSV holds the id, day and text
columns only; entries read from CSV get fresh ids.
"""

import csv
import io
from datetime import tzinfo
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from gratitude.errors import TransferError
from gratitude.models import JournalEntry

CSV_HEADER = ["ID", "Date", "Entry1", "Entry2", "Entry3", "Notes"]

_ENTRY_LIST = TypeAdapter(list[JournalEntry])


def entries_to_json(entries: list[JournalEntry]) -> str:
    """Serialize entries to a JSON array."""
    return _ENTRY_LIST.dump_json(entries, indent=2).decode("utf-8")


def entries_from_json(text: str, tz: Optional[tzinfo] = None) -> list[JournalEntry]:
    """Parse a JSON array of entries.

    Timestamp dates are placed on their calendar day in ``tz`` (None means
    the local zone).

    Raises:
        TransferError: If the document is not a valid list of entries.
    """
    try:
        return _ENTRY_LIST.validate_json(text, context={"tz": tz})
    except ValidationError as e:
        raise TransferError(f"Invalid journal JSON: {e.error_count()} error(s)\n{e}") from e


def entries_to_csv(entries: list[JournalEntry]) -> str:
    """Serialize entries to CSV with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow([
            str(entry.id),
            entry.date.isoformat(),
            entry.entry1,
            entry.entry2,
            entry.entry3,
            entry.notes,
        ])
    return buffer.getvalue()


def entries_from_csv(text: str, tz: Optional[tzinfo] = None) -> list[JournalEntry]:
    """Parse CSV produced by ``entries_to_csv``.

    The header row is skipped, as are rows with fewer than six columns.
    Timestamp dates are read in ``tz`` as for ``entries_from_json``.

    Raises:
        TransferError: If a row has an unreadable date.
    """
    reader = csv.reader(io.StringIO(text))
    next(reader, None)

    entries = []
    for line_no, row in enumerate(reader, start=2):
        if len(row) < len(CSV_HEADER):
            continue
        try:
            entries.append(JournalEntry.model_validate(
                {
                    "date": row[1].strip(),
                    "entry1": row[2],
                    "entry2": row[3],
                    "entry3": row[4],
                    "notes": row[5],
                },
                context={"tz": tz},
            ))
        except ValidationError as e:
            raise TransferError(f"Invalid CSV row {line_no}: {e}") from e
    return entries
