"""Input validation for API endpoints"""
from typing import Any, Dict, List

from accounts.models import LookupRequest, Platform, UpsertRequest
from core.errors import ValidationError

IDENTITY_FIELDS = ['name', 'studentId', 'dob', 'phone']
SCALAR_TYPES = (str, int, float)


def validate_platform(value: Any) -> Platform:
    """Return the Platform for value or raise ValidationError."""
    return Platform.parse(value)


def _check_identity_fields(data: Dict[str, Any], errors: List[str]) -> None:
    for field_name in IDENTITY_FIELDS:
        value = data.get(field_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f'{field_name} is required')
        elif isinstance(value, bool) or not isinstance(value, SCALAR_TYPES):
            errors.append(f'{field_name} must be a string or number')


def _require_dict(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def validate_lookup_request(data: Any) -> LookupRequest:
    """Validate a credential lookup request"""
    data = _require_dict(data)
    platform = validate_platform(data.get('platform'))

    errors = []
    _check_identity_fields(data, errors)
    if errors:
        raise ValidationError('; '.join(errors))

    return LookupRequest(
        name=data.get('name'),
        student_id=data.get('studentId'),
        dob=data.get('dob'),
        phone=data.get('phone'),
        platform=platform,
    )


def validate_upsert_request(data: Any) -> UpsertRequest:
    """Validate a credential register/update request"""
    data = _require_dict(data)
    platform = validate_platform(data.get('platform'))

    errors = []
    _check_identity_fields(data, errors)
    for field_name in ('id', 'password'):
        value = data.get(field_name)
        if value is not None and (isinstance(value, bool) or not isinstance(value, SCALAR_TYPES)):
            errors.append(f'{field_name} must be a string')
    if errors:
        raise ValidationError('; '.join(errors))

    return UpsertRequest(
        name=data.get('name'),
        student_id=data.get('studentId'),
        dob=data.get('dob'),
        phone=data.get('phone'),
        platform=platform,
        account_id=data.get('id'),
        password=data.get('password'),
    )


def validate_admin_request(data: Any) -> str:
    """Validate an admin export request and return the submitted password."""
    data = _require_dict(data)
    password = data.get('password')
    if password is None:
        return ''
    if not isinstance(password, str):
        raise ValidationError('password must be a string')
    return password
