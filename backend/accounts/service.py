"""
Student account operations: credential lookup, register/update, admin export.

Every public method returns a Result; errors never escape as exceptions.
"""
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from accounts.matcher import find_all_matches, find_match
from accounts.models import (
    COLUMNS,
    IDENTITY_WIDTH,
    PLATFORM_COLUMNS,
    Platform,
    IdentityKey,
    LookupRequest,
    Record,
    Result,
    UpsertRequest,
    require_identity,
)
from core.config import Settings
from core.errors import (
    AccountError,
    AuthError,
    IncompleteRecordWarning,
    NotFoundError,
    PersistenceError,
)
from core.logger import logger
from sheets.normalize import cell_text, identity_key, normalize_row
from sheets.store import RecordStore


class AccountService:
    """Looks up and stores per-platform credentials for students."""

    def __init__(self, store: RecordStore, settings: Settings):
        self.store = store
        self.settings = settings

        # Lock per identifying tuple so two upserts for the same student in
        # this process cannot both append a row. Entries hold [lock, users]
        # and are dropped when the last user leaves.
        self._upsert_locks: Dict[IdentityKey, list] = {}
        self._upsert_lock_global = threading.Lock()

    @property
    def tz(self) -> str:
        return self.settings.timezone

    @contextmanager
    def _upsert_lock(self, key: IdentityKey) -> Iterator[None]:
        with self._upsert_lock_global:
            entry = self._upsert_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._upsert_lock_global:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._upsert_locks[key]

    def _read_rows(self) -> List[List[Any]]:
        try:
            return self.store.read_all()
        except AccountError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to read records: {str(e)}")

    def lookup(self, request: LookupRequest) -> Result:
        """Return the stored id/password for the requested platform."""
        try:
            platform = Platform.parse(request.platform)
            key = identity_key(request.name, request.student_id, request.dob, request.phone, self.tz)
            require_identity(key)
            rows = self._read_rows()
            if len(rows) <= 1:
                raise NotFoundError("No data found")

            match = find_match(rows, key, self.tz)
            if match is None:
                logger.info(f"No record found for student {key[1]!r}")
                raise NotFoundError("No matching student record found")

            _row_index, record = match
            account_id, password = record.credentials_for(platform)
            if not account_id and not password:
                raise IncompleteRecordWarning(
                    f"Student found, but no {platform.value} account has been registered yet"
                )

            logger.info(f"Returned {platform.value} credentials for student {key[1]!r}")
            return Result.ok(id=account_id, password=password, platform=platform.value)
        except IncompleteRecordWarning as w:
            return Result.warn(w.message)
        except AccountError as e:
            logger.warning(f"Lookup failed ({e.kind}): {e.message}")
            return Result.fail(e)
        except Exception as e:
            logger.error(f"Error looking up credentials: {str(e)}", exc_info=True)
            return Result.fail(PersistenceError(f"Error: {str(e)}"))

    def upsert(self, request: UpsertRequest) -> Result:
        """Update the platform credentials of a matched student or register a new row."""
        try:
            platform = Platform.parse(request.platform)
            key = identity_key(request.name, request.student_id, request.dob, request.phone, self.tz)
            require_identity(key)
        except AccountError as e:
            return Result.fail(e)

        account_id = cell_text(request.account_id)
        password = cell_text(request.password)

        try:
            with self._upsert_lock(key):
                rows = self._read_rows()
                match = find_match(rows, key, self.tz)

                if match is not None:
                    row_index, _record = match
                    duplicates = find_all_matches(rows, key, self.tz)
                    if len(duplicates) > 1:
                        logger.warning(
                            f"Student {key[1]!r} has {len(duplicates)} rows {duplicates}; updating row {row_index}"
                        )
                    id_column, _password_column = PLATFORM_COLUMNS[platform]
                    self.store.write_row(row_index, [account_id, password], start_column=id_column)
                    logger.info(f"Updated {platform.value} credentials for student {key[1]!r} (row {row_index})")
                    return Result.ok(
                        f"{platform.value} account information has been updated.",
                        created=False,
                    )

                record = Record(*key)
                record.set_credentials(platform, account_id, password)
                if rows:
                    self.store.append_row(record.to_row())
                else:
                    # Header and first record go out in one write
                    self.store.append_rows([list(COLUMNS), record.to_row()])
                logger.info(f"Registered new student {key[1]!r} with {platform.value} credentials")
                return Result.ok(
                    f"{platform.value} account information has been newly registered.",
                    created=True,
                )
        except AccountError as e:
            logger.error(f"Upsert failed ({e.kind}): {e.message}")
            return Result.fail(e)
        except Exception as e:
            logger.error(f"Error saving credentials: {str(e)}", exc_info=True)
            return Result.fail(PersistenceError(f"Error: {str(e)}"))

    def _check_admin_password(self, password: Optional[str]) -> None:
        if password != self.settings.admin_password:
            logger.warning("Admin export rejected: incorrect password")
            raise AuthError("Incorrect password")

    def _export_rows(self) -> Tuple[List[str], List[List[str]]]:
        rows = self._read_rows()
        width = max([len(COLUMNS)] + [len(row) for row in rows])
        header = normalize_row(rows[0], self.tz, width, date_text_columns=0) if rows else [''] * width
        header = [
            cell or (COLUMNS[i] if i < len(COLUMNS) else f'column{i + 1}')
            for i, cell in enumerate(header)
        ]
        # Only identifying cells get the date-text rewrite; credentials are just trimmed
        data = [normalize_row(row, self.tz, width, date_text_columns=IDENTITY_WIDTH) for row in rows[1:]]
        return header, data

    def admin_export(self, password: Optional[str]) -> Result:
        """Return every data row, normalized, when password is correct."""
        try:
            self._check_admin_password(password)
            _header, data = self._export_rows()
            logger.info(f"Admin export of {len(data)} rows")
            return Result.ok(data=data)
        except AccountError as e:
            return Result.fail(e)
        except Exception as e:
            logger.error(f"Error exporting records: {str(e)}", exc_info=True)
            return Result.fail(PersistenceError(f"Error: {str(e)}"))

    def admin_export_frame(self, password: Optional[str]) -> Tuple[Result, Optional[pd.DataFrame]]:
        """Same rows as admin_export, as a DataFrame labelled with the sheet header."""
        try:
            self._check_admin_password(password)
            header, data = self._export_rows()
            return Result.ok(rows=len(data)), pd.DataFrame(data, columns=header)
        except AccountError as e:
            return Result.fail(e), None
        except Exception as e:
            logger.error(f"Error exporting records: {str(e)}", exc_info=True)
            return Result.fail(PersistenceError(f"Error: {str(e)}")), None
