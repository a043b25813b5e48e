"""Standardized error responses for the API.

Every error leaving the API shares one body::

    {
        "type": "validation_error" | "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field" | null}]
    }

Framework errors (serializer validation, parse errors, 404, 405) are
shaped by ``drf-standardized-errors``; ``CatalogExceptionHandler`` only
adds logging on top.  Views translating domain exceptions build the same
body through ``error_response``.
"""

from __future__ import annotations

from typing import Optional

import structlog
from drf_standardized_errors.handler import ExceptionHandler
from rest_framework.response import Response

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"


class CatalogExceptionHandler(ExceptionHandler):
    """Log every standardized error before it is returned."""

    def run(self) -> Optional[Response]:
        response = super().run()
        if response is not None:
            logger.info(
                "api.error",
                status_code=response.status_code,
                error_type=response.data["type"],
                codes=[error["code"] for error in response.data["errors"]],
            )
        return response


def error_body(error_type: str, code: str, detail: str, attr: Optional[str] = None) -> dict:
    return {
        "type": error_type,
        "errors": [{"code": code, "detail": detail, "attr": attr}],
    }


def error_response(
    status_code: int,
    code: str,
    detail: str,
    attr: Optional[str] = None,
) -> Response:
    """Build a standardized error ``Response`` for a single error."""
    error_type = CLIENT_ERROR if status_code < 500 else SERVER_ERROR
    if status_code == 400:
        error_type = VALIDATION_ERROR
    return Response(error_body(error_type, code, detail, attr), status=status_code)
