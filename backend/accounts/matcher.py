"""
Exact-match search over worksheet rows.
"""
from typing import Any, List, Optional, Sequence, Tuple

from accounts.models import COLUMNS, IDENTITY_WIDTH, IdentityKey, Record
from core.config import DEFAULT_TIMEZONE
from sheets.normalize import cell_text, normalize_row


def _row_key(row: Sequence[Any], tz: str) -> IdentityKey:
    return tuple(normalize_row(row[:IDENTITY_WIDTH], tz, width=IDENTITY_WIDTH))


def find_match(
    rows: Sequence[Sequence[Any]],
    key: IdentityKey,
    tz: str = DEFAULT_TIMEZONE,
) -> Optional[Tuple[int, Record]]:
    """
    Return (row_index, record) for the first data row whose normalized
    name, studentId, dob and phone all equal key, or None.

    Row 0 is the header and is never matched. row_index is the position in
    rows, so it can be handed straight back to RecordStore.write_row.
    Credential cells are returned exactly as stored.
    """
    for row_index in range(1, len(rows)):
        row = rows[row_index]
        row_key = _row_key(row, tz)
        if row_key == key:
            credentials = [cell_text(cell) for cell in row[IDENTITY_WIDTH:len(COLUMNS)]]
            credentials += [''] * (len(COLUMNS) - IDENTITY_WIDTH - len(credentials))
            return row_index, Record(*row_key, *credentials)
    return None


def find_all_matches(
    rows: Sequence[Sequence[Any]],
    key: IdentityKey,
    tz: str = DEFAULT_TIMEZONE,
) -> List[int]:
    """Indexes of every data row matching key (more than one means duplicates)."""
    return [row_index for row_index in range(1, len(rows)) if _row_key(rows[row_index], tz) == key]
