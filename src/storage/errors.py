# src/storage/errors.py

"""Exceptions raised by the storage collaborators."""


class StorageError(Exception):
    """Base class for snapshot, history and feed I/O failures."""


class SnapshotLoadError(StorageError):
    """A snapshot batch file could not be parsed."""


class HistoryStoreError(StorageError):
    """A persisted history file is unreadable or malformed."""


class FeedWriteError(StorageError):
    """A region feed could not be written."""
