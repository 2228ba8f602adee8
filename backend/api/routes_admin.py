"""
Admin export routes (shared admin password).
"""
from typing import Optional

from flask import Blueprint, Response, request

from accounts.models import Result
from accounts.service import AccountService
from api.routes_accounts import result_response, service_not_configured
from core.errors import ValidationError
from core.validators import validate_admin_request


def register_admin_routes(
    api: Blueprint,
    service: Optional[AccountService],
) -> None:
    """Register admin export routes on the given blueprint."""

    @api.route("/admin/export", methods=["POST"])
    def admin_export():
        """Return all student rows when the admin password matches."""
        if not service:
            return service_not_configured()
        try:
            password = validate_admin_request(request.get_json(silent=True))
        except ValidationError as e:
            return result_response(Result.fail(e))

        return result_response(service.admin_export(password))

    @api.route("/admin/export.csv", methods=["POST"])
    def admin_export_csv():
        """Download all student rows as CSV."""
        if not service:
            return service_not_configured()
        try:
            password = validate_admin_request(request.get_json(silent=True) or request.form.to_dict())
        except ValidationError as e:
            return result_response(Result.fail(e))

        result, frame = service.admin_export_frame(password)
        if frame is None:
            return result_response(result)

        return Response(
            frame.to_csv(index=False),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=student_accounts.csv"},
        )
