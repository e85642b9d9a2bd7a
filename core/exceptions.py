import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from lending.exceptions import LedgerError, NotFound, StorageError, ValidationError

logger = logging.getLogger(__name__)

LEDGER_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def ledger_exception_handler(exc, context):
    """
    Turn ledger errors into ``{"error": message}`` responses.

    Anything else goes through REST framework's default handler.
    """
    if isinstance(exc, LedgerError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        for error_class, error_status in LEDGER_ERROR_STATUS.items():
            if isinstance(exc, error_class):
                code = error_status
                break
        if code >= 500:
            logger.error(f"{context['view'].__class__.__name__} failed: {exc}")
        return Response({"error": str(exc)}, status=code)

    return exception_handler(exc, context)
