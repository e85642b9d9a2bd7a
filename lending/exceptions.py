"""Errors raised by the loan balance accounting services."""


class LedgerError(Exception):
    """Base class for every loan accounting error."""


class ValidationError(LedgerError):
    """Raised when an input value or a precondition is invalid."""


class NotFound(LedgerError):
    """Raised when a loan, payment or customer is missing or owned by someone else."""


class StorageError(LedgerError):
    """Raised when the database fails; the operation leaves no partial change."""
