"""
Cell normalization helpers.

Both stored cells and incoming query values go through normalize_value
before they are compared, so a student ID stored as a number or a birth
date stored as a date still matches the text a student types in.
"""
import re
from datetime import date, datetime
from typing import Any, List, Optional, Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from core.config import DEFAULT_TIMEZONE

# Dates as Google Sheets displays them: 2005-01-01, 2005/1/1, 2005.01.01, 2005. 1. 1.
DATE_TEXT_PATTERN = re.compile(r"(\d{4})\s*([-./])\s*(\d{1,2})\s*\2\s*(\d{1,2})\.?")


def _format_date_text(text: str) -> Optional[str]:
    match = DATE_TEXT_PATTERN.fullmatch(text)
    if not match:
        return None
    year, _sep, month, day = match.groups()
    try:
        return date(int(year), int(month), int(day)).strftime('%Y%m%d')
    except ValueError:
        return None


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def normalize_value(value: Any, tz: str = DEFAULT_TIMEZONE, date_text: bool = True) -> str:
    """
    Canonicalize a raw cell or input value to a trimmed string.

    Args:
        value: Cell value (str, number, date, datetime, None, NaN)
        tz: Time zone name used to render aware datetimes
        date_text: Also rewrite text that reads as a date to YYYYMMDD
    """
    if _is_missing(value):
        return ''

    # pd.Timestamp is a datetime subclass
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz))
        return value.strftime('%Y%m%d')
    if isinstance(value, date):
        return value.strftime('%Y%m%d')

    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    text = str(value).strip()
    if not date_text:
        return text
    return _format_date_text(text) or text


def cell_text(value: Any) -> str:
    """Cell contents as stored, with missing cells as ''. Used for credentials."""
    if _is_missing(value):
        return ''
    return str(value)


def normalize_row(
    row: Sequence[Any],
    tz: str = DEFAULT_TIMEZONE,
    width: Optional[int] = None,
    date_text_columns: Optional[int] = None,
) -> List[str]:
    """
    Normalize every cell of a row, padding with empty cells up to width when given.

    When date_text_columns is set, only the first date_text_columns cells get
    the date-text rewrite; the rest are only trimmed.
    """
    cells = [
        normalize_value(cell, tz, date_text=date_text_columns is None or i < date_text_columns)
        for i, cell in enumerate(row)
    ]
    if width is not None and len(cells) < width:
        cells += [''] * (width - len(cells))
    return cells


def identity_key(name: Any, student_id: Any, dob: Any, phone: Any, tz: str = DEFAULT_TIMEZONE):
    """Normalized (name, studentId, dob, phone) tuple used as the record key."""
    return tuple(normalize_value(value, tz) for value in (name, student_id, dob, phone))
