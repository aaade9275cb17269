"""HTTP error mapping

Use cases return ``Error`` values; routes raise ``ClientError`` with the
matching status code and the handler renders ``{"error": {...}}``.
"""

from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from libs.result import Error

ERROR_STATUS = {
    "ORDER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "BILL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DISTRIBUTOR_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PRODUCT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_ORDER_STATE": status.HTTP_400_BAD_REQUEST,
    "ALREADY_SETTLED": status.HTTP_400_BAD_REQUEST,
    "CONCURRENT_MODIFICATION": status.HTTP_400_BAD_REQUEST,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INSUFFICIENT_FUNDS": status.HTTP_400_BAD_REQUEST,
    "ORDER_LOCKED": status.HTTP_403_FORBIDDEN,
    "BILL_LOCKED": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "PERSISTENCE_FAILURE": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """Raised by routes to turn an ``Error`` into an HTTP response"""

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or ERROR_STATUS.get(
            error.code, status.HTTP_400_BAD_REQUEST
        )


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    @app.exception_handler(ClientError)
    async def client_error_handler(request: Request, exc: ClientError):
        body = {"code": exc.error.code, "message": exc.error.message}
        # reason may carry storage exception text
        if debug and exc.error.reason:
            body["reason"] = exc.error.reason
        return JSONResponse(status_code=exc.status_code, content={"error": body})
