"""Storage error hierarchy shared by backends and the accessor layer."""


class StorageError(Exception):
    pass


class StorageUnavailableError(StorageError):
    """Raised when a backend cannot be constructed on this machine."""


class DownloadError(StorageError):
    """Raised when a cloud-resident file could not be materialized locally."""


class JsonShapeError(StorageError, ValueError):
    """Raised when parsed JSON is valid but not an object."""

    def __init__(self, actual_type: str):
        self.actual_type = actual_type
        super().__init__(f"Parsed data is not a JSON object ({actual_type})")
