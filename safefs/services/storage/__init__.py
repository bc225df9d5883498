"""Storage backend factory."""

import logging

from safefs.core.config import settings
from safefs.core.errors import StorageUnavailableError
from safefs.services.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def _icloud_backend() -> StorageBackend:
    from safefs.services.storage.icloud import ICloudStorage
    return ICloudStorage(
        settings.icloud_dir,
        brctl_path=settings.brctl_path,
        poll_interval=settings.download_poll_interval,
        timeout=settings.download_timeout,
    )


def _local_backend() -> StorageBackend:
    from safefs.services.storage.local import LocalStorage
    return LocalStorage(settings.documents_dir)


def get_storage_backend(preference: str | None = None) -> StorageBackend:
    """Factory function that returns the configured storage backend.

    ``auto`` prefers iCloud Drive and falls back to local storage when iCloud
    is unavailable on this machine. ``icloud`` and ``local`` force one backend.
    """
    preference = preference or settings.storage_backend

    if preference == "local":
        return _local_backend()
    if preference == "icloud":
        return _icloud_backend()
    if preference != "auto":
        raise ValueError(f"Unknown storage backend: {preference}")

    try:
        return _icloud_backend()
    except StorageUnavailableError as e:
        logger.warning(f"{e}; falling back to local storage")

    return _local_backend()


__all__ = ["StorageBackend", "get_storage_backend"]
