"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import List

from accounts.models import COLUMNS
from accounts.service import AccountService
from core.config import Settings
from sheets.store import MemoryRecordStore

ADMIN_PASSWORD = "letmein"

KIM_ROW = ["Kim", "S001", "20050101", "010-1234-5678", "", "", "", ""]


@pytest.fixture
def settings() -> Settings:
    """Settings with a known admin password."""
    return Settings(admin_password=ADMIN_PASSWORD, timezone="Asia/Seoul")


@pytest.fixture
def header() -> List[str]:
    return list(COLUMNS)


@pytest.fixture
def kim_query() -> dict:
    """Identifying fields for the student in KIM_ROW."""
    return {
        "name": "Kim",
        "studentId": "S001",
        "dob": "20050101",
        "phone": "010-1234-5678",
    }


@pytest.fixture
def empty_store(header) -> MemoryRecordStore:
    """Store holding only the header row."""
    return MemoryRecordStore([header])


@pytest.fixture
def kim_store(header) -> MemoryRecordStore:
    """Store with one registered student and no credentials."""
    return MemoryRecordStore([header, list(KIM_ROW)])


@pytest.fixture
def populated_store(header) -> MemoryRecordStore:
    """Store with several students in mixed storage formats."""
    return MemoryRecordStore([
        header,
        ["Kim", "S001", "20050101", "010-1234-5678", "kim@gmail.com", "gpw", "", ""],
        ["Lee", 1002, "2004. 3. 15.", "010-2222-3333", "", "", "lee_whale", "wpw"],
        [" Park ", "S003", "2005-07-09", " 010-4444-5555 ", "park@gmail.com", "ppw", "park_whale", "pw2"],
    ])


@pytest.fixture
def service(kim_store, settings) -> AccountService:
    return AccountService(kim_store, settings)


@pytest.fixture
def client(monkeypatch, populated_store, settings):
    """Flask test client wired to an in-memory store."""
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173")
    from app import create_app

    app = create_app(AccountService(populated_store, settings))
    app.config["TESTING"] = True
    return app.test_client()
