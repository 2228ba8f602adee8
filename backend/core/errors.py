"""Errors raised by the account operations and mapped to API responses."""


class AccountError(Exception):
    """Base error for account lookup/upsert/export failures."""
    kind = 'error'
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Custom validation error"""
    kind = 'validation'
    status_code = 400


class NotFoundError(AccountError):
    kind = 'not_found'
    status_code = 404


class IncompleteRecordWarning(AccountError):
    """Record matched but the requested platform has no credentials yet."""
    kind = 'incomplete'
    status_code = 200


class PersistenceError(AccountError):
    """Reading from or writing to the record store failed."""
    kind = 'persistence'
    status_code = 500


class AuthError(AccountError):
    kind = 'auth'
    status_code = 401
