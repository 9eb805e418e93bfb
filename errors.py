"""Errors raised by the namespace storage."""


class StorageError(Exception):
    """Base error for storage operations."""
    pass


class InvalidNameError(StorageError):
    """Name is empty, too long, or contains disallowed characters."""
    pass


class AlreadyExistsError(StorageError):
    """An entry with the same case-folded name exists in the same scope."""
    pass


class NotFoundError(StorageError):
    """User, folder or file does not exist."""
    pass
