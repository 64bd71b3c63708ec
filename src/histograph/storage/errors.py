"""
Storage exceptions.

Every failure surfaced by the storage layer derives from StorageError, so
callers can catch the whole family or a single kind.
"""

from pathlib import Path
from typing import Optional


class StorageError(Exception):
    """Base exception for storage errors"""
    pass


class IoFailure(StorageError):
    """An underlying read, write or directory creation failed"""

    def __init__(self, operation: str, path: Path, reason: str = ""):
        self.operation = operation
        self.path = Path(path)
        self.reason = reason
        message = f"{operation} failed for {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MalformedObject(StorageError):
    """Stored bytes do not decode to the expected shape"""

    def __init__(self, kind: str, reason: str, path: Optional[Path] = None):
        self.kind = kind
        self.reason = reason
        self.path = Path(path) if path is not None else None
        message = f"Malformed {kind} object: {reason}"
        if self.path is not None:
            message += f" ({self.path})"
        super().__init__(message)


class ObjectNotFound(StorageError):
    """No object is stored under the requested hash"""

    def __init__(self, partition: str, content_hash: str):
        self.partition = partition
        self.content_hash = content_hash
        super().__init__(f"Object {content_hash} not found in partition '{partition}'")


class SnapshotNotFound(StorageError):
    """No snapshot is registered under the requested name"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Snapshot '{name}' not found")
