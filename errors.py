"""Errors raised by the diary core.

Each maps to one HTTP status in ``main.py``.
"""


class DiaryError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DiaryError):
    status_code = 404


class InvalidInputError(DiaryError):
    status_code = 400


class InvalidReferenceError(DiaryError):
    status_code = 400


class StorageError(DiaryError):
    status_code = 503


class OperationCancelled(DiaryError):
    status_code = 504
