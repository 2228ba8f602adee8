"""
Record, request and result types for the student account service.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from core.errors import ValidationError


class Platform(str, Enum):
    GOOGLE = 'Google'
    WHALE = 'Whale'

    @classmethod
    def parse(cls, value: Any) -> 'Platform':
        """Return the Platform named by value or raise ValidationError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for platform in cls:
                if platform.value == value:
                    return platform
        allowed = ', '.join(p.value for p in cls)
        raise ValidationError(f"platform must be one of: {allowed}")


# Worksheet column order; row 0 of the sheet holds these headers
COLUMNS = [
    'name',
    'studentId',
    'dob',
    'phone',
    'googleId',
    'googlePassword',
    'whaleId',
    'whalePassword',
]
IDENTITY_WIDTH = 4

# (id column, password column) per platform
PLATFORM_COLUMNS = {
    Platform.GOOGLE: (4, 5),
    Platform.WHALE: (6, 7),
}

IdentityKey = Tuple[str, str, str, str]


def require_identity(key: IdentityKey) -> None:
    """Raise ValidationError naming every identifying field that is empty."""
    missing = [f'{name} is required' for name, value in zip(COLUMNS, key) if not value]
    if missing:
        raise ValidationError('; '.join(missing))


@dataclass
class Record:
    name: str = ''
    student_id: str = ''
    dob: str = ''
    phone: str = ''
    google_id: str = ''
    google_password: str = ''
    whale_id: str = ''
    whale_password: str = ''

    def to_row(self) -> List[str]:
        return [
            self.name, self.student_id, self.dob, self.phone,
            self.google_id, self.google_password,
            self.whale_id, self.whale_password,
        ]

    def credentials_for(self, platform: Platform) -> Tuple[str, str]:
        row = self.to_row()
        id_col, password_col = PLATFORM_COLUMNS[platform]
        return row[id_col], row[password_col]

    def set_credentials(self, platform: Platform, account_id: str, password: str) -> None:
        if platform is Platform.GOOGLE:
            self.google_id, self.google_password = account_id, password
        else:
            self.whale_id, self.whale_password = account_id, password


@dataclass
class LookupRequest:
    name: Any
    student_id: Any
    dob: Any
    phone: Any
    platform: Platform


@dataclass
class UpsertRequest:
    name: Any
    student_id: Any
    dob: Any
    phone: Any
    platform: Platform
    account_id: Optional[Any] = None
    password: Optional[Any] = None


@dataclass
class Result:
    """
    Outcome of a single account operation.

    status is one of 'success', 'warning' or 'error'. Error results carry
    the error kind (see core.errors) so the API layer can pick a status code.
    """
    status: str
    message: str = ''
    data: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[str] = None
    status_code: int = 200

    @classmethod
    def ok(cls, message: str = '', **data) -> 'Result':
        return cls(status='success', message=message, data=data)

    @classmethod
    def warn(cls, message: str) -> 'Result':
        return cls(status='warning', message=message)

    @classmethod
    def fail(cls, error) -> 'Result':
        return cls(
            status='error',
            message=error.message,
            error_kind=error.kind,
            status_code=error.status_code,
        )

    @property
    def is_success(self) -> bool:
        return self.status == 'success'

    def to_dict(self) -> Dict[str, Any]:
        if self.status == 'error':
            return {'status': 'error', 'error': self.message, 'kind': self.error_kind}
        if self.status == 'warning':
            return {'status': 'warning', 'warning': self.message}
        payload = {'status': 'success'}
        if self.message:
            payload['message'] = self.message
        payload.update(self.data)
        return payload
