from typing import NoReturn

from fastapi import status
from libs.result import Error

from src.app import errors


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


STATUS_BY_CODE = {
    errors.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    errors.CONFLICT: status.HTTP_409_CONFLICT,
    errors.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.EXTERNAL_AUTH_ERROR: status.HTTP_401_UNAUTHORIZED,
    errors.INVALID_CODE: status.HTTP_403_FORBIDDEN,
}


def raise_for_error(error: Error) -> NoReturn:
    """Raise ClientError for known error codes, ServerError for anything else"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
