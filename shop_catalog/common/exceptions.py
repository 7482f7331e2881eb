from __future__ import annotations

from typing import Optional

from starlette import status


class CatalogError(Exception):
    """Базовая ошибка каталога. status_code уходит в конверт ответа."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def detail(self) -> str:
        return str(self.cause) if self.cause is not None else self.message


class AuthenticationError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED


class RemoteAPIError(CatalogError):
    status_code = status.HTTP_502_BAD_GATEWAY


class PersistenceError(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ProductNotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class BadRequestError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
