import logging
from contextlib import contextmanager

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Некорректные или неполные входные данные"""
    status_code = 400


class NotFoundError(AppError):
    """Запись с таким id не существует"""
    status_code = 404


class StoreError(AppError):
    """Ошибка MongoDB, details содержит исходное сообщение"""
    status_code = 500


@contextmanager
def store_errors(message: str):
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s", message, e)
        raise StoreError(message, details=str(e)) from e
