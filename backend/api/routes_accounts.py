"""
Student-facing (unauthenticated) credential routes.
"""
from typing import Optional

from flask import Blueprint, jsonify, request

from accounts.models import Result
from accounts.service import AccountService
from core.errors import ValidationError
from core.logger import logger
from core.validators import validate_lookup_request, validate_upsert_request


def result_response(result: Result):
    """Convert a service Result to a (json, status) Flask response."""
    return jsonify(result.to_dict()), result.status_code


def service_not_configured():
    logger.error("Google Sheets store not configured")
    return jsonify({"status": "error", "error": "Google Sheets store not configured"}), 500


def register_account_routes(
    api: Blueprint,
    service: Optional[AccountService],
) -> None:
    """Register credential lookup/upsert routes on the given blueprint."""

    @api.route("/accounts/lookup", methods=["POST"])
    def lookup_account():
        """Look up stored credentials for a student and platform."""
        if not service:
            return service_not_configured()
        try:
            lookup_request = validate_lookup_request(request.get_json(silent=True))
        except ValidationError as e:
            logger.warning(f"Validation error on lookup: {e.message}")
            return result_response(Result.fail(e))

        return result_response(service.lookup(lookup_request))

    @api.route("/accounts", methods=["POST"])
    def upsert_account():
        """Register or update credentials for a student and platform."""
        if not service:
            return service_not_configured()
        try:
            upsert_request = validate_upsert_request(request.get_json(silent=True))
        except ValidationError as e:
            logger.warning(f"Validation error on upsert: {e.message}")
            return result_response(Result.fail(e))

        return result_response(service.upsert(upsert_request))
