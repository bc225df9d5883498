"""Status-tagged, cloud-aware safe file access."""

from safefs.core.errors import DownloadError, JsonShapeError, StorageError, StorageUnavailableError
from safefs.core.sandbox import SandboxError
from safefs.models.content import ContentKind, UnrecognizedExtensionError
from safefs.models.result import EmptyResultError, StatusCode, StatusResult
from safefs.services.accessor import ScopedFileAccessor
from safefs.services.storage import StorageBackend, get_storage_backend
from safefs.services.typed_files import TypedFileManager

__all__ = [
    "ContentKind",
    "DownloadError",
    "EmptyResultError",
    "JsonShapeError",
    "SandboxError",
    "ScopedFileAccessor",
    "StatusCode",
    "StatusResult",
    "StorageBackend",
    "StorageError",
    "StorageUnavailableError",
    "TypedFileManager",
    "UnrecognizedExtensionError",
    "get_storage_backend",
]
