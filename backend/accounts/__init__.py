"""
Student account lookup and registration.

Exposes the service and the request/result types for convenient imports.
"""

from .models import (  # noqa: F401
    COLUMNS,
    LookupRequest,
    Platform,
    Record,
    Result,
    UpsertRequest,
)
from .service import AccountService  # noqa: F401
