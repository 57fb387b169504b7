# storefront/domain/errors.py


class StoreError(Exception):
    """Base for errors that map onto an HTTP status and an ``{"error": ...}`` body."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(StoreError):
    http_status = 400


class Unauthenticated(StoreError):
    http_status = 401


class Forbidden(StoreError):
    http_status = 403


class NotFound(StoreError):
    http_status = 404


class StorageFailure(StoreError):
    http_status = 500
