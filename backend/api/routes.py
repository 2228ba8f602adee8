from typing import Optional

from flask import Blueprint

from accounts.service import AccountService
from api.routes_accounts import register_account_routes
from api.routes_admin import register_admin_routes
from core.config import Settings, load_settings
from core.logger import logger


def build_service(settings: Optional[Settings] = None) -> Optional[AccountService]:
    """Create the account service over the Google Sheets store, or None if it can't be set up."""
    settings = settings or load_settings()
    try:
        from sheets.google_sheets_store import GoogleSheetsStore

        store = GoogleSheetsStore(settings.spreadsheet_id, settings.worksheet)
    except Exception as e:  # pragma: no cover - depends on deployment credentials
        logger.warning(f"Google Sheets store not initialized: {type(e).__name__}: {e}")
        return None
    return AccountService(store, settings)


def create_api(service: Optional[AccountService]) -> Blueprint:
    """Build the /api blueprint with every route group registered."""
    api = Blueprint("api", __name__)
    register_account_routes(api, service)
    register_admin_routes(api, service)
    return api
