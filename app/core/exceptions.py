"""Exception types shared by routers and the data-access layer."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base HTTP exception rendered into the error envelope."""

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundException(AppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class CatalogQueryError(Exception):
    """
    The store failed while running a catalog query.

    Carries the logical query name and the arguments it was called with so
    the failure can be debugged from the log line alone. The underlying
    driver error is chained as ``__cause__``.
    """

    def __init__(self, query: str, params: Any = None):
        self.query = query
        self.params = params
        super().__init__(f"Error fetching {query}")

    @property
    def message(self) -> str:
        return str(self)
