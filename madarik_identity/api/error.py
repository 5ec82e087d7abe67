from typing import Dict, Optional

from fastapi import status
from libs.result import Error


class ApiError(Exception):
    """Business error on its way out of a route, with the status to send"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ClientError(ApiError):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(base_error)
        self.status_code = status_code
        self.headers = headers


class ServerError(ApiError):
    def body(self) -> dict:
        # Internal detail stays in the logs
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
