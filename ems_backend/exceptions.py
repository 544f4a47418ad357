# ===========================================================
# ems_backend/exceptions.py
# ===========================================================
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("ems_backend")


def api_exception_handler(exc, context):
    """
    Wrap DRF's default handler.

    Known API exceptions keep DRF's payload. Anything else is logged with
    the request line and answered with a generic 500 body.
    """
    response = exception_handler(exc, context)
    request = context.get("request")
    where = f"{request.method} {request.path}" if request is not None else "unknown request"

    if response is None:
        logger.exception(f"500 - Unhandled error on {where}: {exc}")
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if response.status_code >= 500:
        logger.error(f"{response.status_code} - {exc} - {where}")
    else:
        logger.info(f"{response.status_code} - {exc} - {where}")
    return response
