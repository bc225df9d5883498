"""Abstract storage backend interface. All backends must implement this.

Every path argument is absolute. Backends raise ``OSError`` subclasses
(``FileNotFoundError``, ``FileExistsError``, ...) or ``StorageError`` on failure;
they never return status values.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from PIL import Image


class StorageBackend(ABC):
    @abstractmethod
    def documents_directory(self) -> Path:
        """Root directory this backend manages."""
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        ...

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        ...

    @abstractmethod
    def create_directory(self, path: Path, recursive: bool = False) -> None:
        ...

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read file content as UTF-8 text. Raises FileNotFoundError if absent."""
        ...

    @abstractmethod
    def read_image(self, path: Path) -> Image.Image:
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        ...

    @abstractmethod
    def write_bytes(self, path: Path, content: bytes) -> None:
        ...

    @abstractmethod
    def write_image(self, path: Path, image: Image.Image) -> None:
        ...

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> None:
        """Copy a file. Fails if ``destination`` already exists."""
        ...

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """Move a file, replacing anything at ``destination``."""
        ...

    @abstractmethod
    def remove(self, path: Path) -> None:
        ...

    @abstractmethod
    def list_contents(self, path: Path) -> list[str]:
        """Names of the entries in a directory."""
        ...

    def join_path(self, lhs: Path | str, rhs: Path | str) -> Path:
        return Path(lhs) / rhs

    @abstractmethod
    def is_cloud_resident(self, path: Path) -> bool:
        """True if the file's bytes are kept in the cloud and may be missing locally."""
        ...

    @abstractmethod
    def is_downloaded(self, path: Path) -> bool:
        ...

    @abstractmethod
    async def download(self, path: Path) -> None:
        """Materialize a cloud-resident file locally. Safe to call for local files."""
        ...

    @abstractmethod
    def modification_date(self, path: Path) -> datetime:
        ...

    @abstractmethod
    def creation_date(self, path: Path) -> datetime:
        ...

    @abstractmethod
    def file_size(self, path: Path) -> int:
        ...
