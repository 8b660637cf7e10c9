# errors.py


class ExamAppError(Exception):
    """Base class for failures raised by repositories and managers."""


class NotFound(ExamAppError):
    def __init__(self, key: str):
        super().__init__(f"Document not found: {key}")
        self.key = key


class StoreError(ExamAppError):
    """The document store could not complete a read or write."""
