"""Exceptions raised at the document-store boundary"""


class MdsyncError(Exception):
    """Base class for mdsync errors."""


class DocumentNotFoundError(MdsyncError):
    """A template or target path does not resolve to a document."""

    def __init__(self, path: str):
        super().__init__(f"Document not found: {path}")
        self.path = path


class DocumentWriteError(MdsyncError):
    """The store failed to write a document."""

    def __init__(self, path: str, cause: Exception = None):
        message = f"Failed to write {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path


class DocumentReadError(MdsyncError):
    """A document exists but its text could not be decoded."""

    def __init__(self, path: str, cause: Exception = None):
        message = f"Failed to read {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path
