"""Shared test fixtures for safefs tests."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from safefs.services.accessor import ScopedFileAccessor
from safefs.services.storage.base import StorageBackend
from safefs.services.storage.local import LocalStorage


@pytest.fixture
def documents_dir(tmp_path) -> Path:
    return tmp_path / "documents"


@pytest.fixture
def local_backend(documents_dir) -> LocalStorage:
    return LocalStorage(documents_dir)


@pytest.fixture
def accessor(local_backend) -> ScopedFileAccessor:
    """Accessor scoped to <documents>/config on real disk."""
    return ScopedFileAccessor("config", backend=local_backend)


@pytest.fixture
def cloud_backend(tmp_path):
    """Mock backend where every file exists but is still in the cloud."""
    backend = MagicMock(spec=StorageBackend)
    backend.documents_directory.return_value = tmp_path / "cloud"
    backend.join_path.side_effect = lambda lhs, rhs: Path(lhs) / rhs
    backend.is_directory.return_value = True
    backend.exists.return_value = True
    backend.is_cloud_resident.return_value = True
    backend.is_downloaded.return_value = False
    backend.download = AsyncMock(return_value=None)
    return backend
