"""Path-scoped, cloud-aware file access.

ScopedFileAccessor resolves caller-supplied relative paths against a root
directory inside the backend's documents directory. It offers two surfaces:

* raw accessors (``read_text``, ``read_json``, ``write_text``, ...) that delegate
  straight to the storage backend and let its exceptions propagate;
* safe reads (``read_text_safe``, ``read_json_safe``, ...) that check existence,
  download cloud-resident files when needed and return a StatusResult instead
  of raising.

Writes have no safe variant: a write that fails is a real problem (disk full,
permission denied) and is raised to the caller.
"""

import asyncio
import dataclasses
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, TypeVar

from PIL import Image
from pydantic import BaseModel

from safefs.core.config import settings
from safefs.core.errors import JsonShapeError
from safefs.core.sandbox import SandboxError, resolve_sandboxed_path
from safefs.models.content import ContentKind, extension_for_kind, with_extension
from safefs.models.result import StatusResult
from safefs.services.storage import StorageBackend, get_storage_backend

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_EXTENSION = ".json"


def json_type_name(value: Any) -> str:
    """JSON name of a parsed value's shape (object, array, string, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def serialize_payload(payload: Any, kind: ContentKind = ContentKind.TEXT) -> str:
    """Serialize a payload for writing.

    Strings are written verbatim unless the kind is JSON-based. Anything else is
    encoded as JSON whatever the declared kind; the kind only picks the extension.
    """
    if isinstance(payload, str) and kind not in (ContentKind.JSON, ContentKind.JSON_OBJECT):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    elif dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        payload = dataclasses.asdict(payload)
    return json.dumps(payload, ensure_ascii=False)


class ScopedFileAccessor:
    """Read and write files relative to ``<documents>/<base_dir>``."""

    def __init__(
        self,
        base_dir: str | None = None,
        backend: StorageBackend | None = None,
        download_timeout: float | None = None,
    ):
        self._backend = backend if backend is not None else get_storage_backend()
        self._download_timeout = (
            settings.download_timeout if download_timeout is None else download_timeout
        )
        self._documents_dir = Path(self._backend.documents_directory())

        if base_dir:
            resolve_sandboxed_path(self._documents_dir, base_dir)
            self._root = self._backend.join_path(self._documents_dir, base_dir)
            if not self._backend.is_directory(self._root):
                self._backend.create_directory(self._root, recursive=True)
        else:
            self._root = self._documents_dir

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def resolve_path(self, file_path: str | Path, in_scoped_root: bool = True) -> Path:
        """Absolute path for a relative one. Raises SandboxError if it escapes its root."""
        base = self._root if in_scoped_root else self._documents_dir
        return resolve_sandboxed_path(base, file_path)

    # -- predicates ---------------------------------------------------------

    def exists(self, file_path: str | Path, in_scoped_root: bool = True) -> bool:
        return self._backend.exists(self.resolve_path(file_path, in_scoped_root))

    def is_directory(self, file_path: str | Path, in_scoped_root: bool = True) -> bool:
        return self._backend.is_directory(self.resolve_path(file_path, in_scoped_root))

    def is_cloud_resident(self, file_path: str | Path, in_scoped_root: bool = True) -> bool:
        return self._backend.is_cloud_resident(self.resolve_path(file_path, in_scoped_root))

    def is_downloaded(self, file_path: str | Path, in_scoped_root: bool = True) -> bool:
        return self._backend.is_downloaded(self.resolve_path(file_path, in_scoped_root))

    async def download(self, file_path: str | Path, in_scoped_root: bool = True) -> None:
        await self._backend.download(self.resolve_path(file_path, in_scoped_root))

    # -- raw reads ----------------------------------------------------------

    def read_bytes(self, file_path: str | Path, in_scoped_root: bool = True) -> bytes:
        return self._backend.read_bytes(self.resolve_path(file_path, in_scoped_root))

    def read_text(self, file_path: str | Path, in_scoped_root: bool = True) -> str:
        return self._backend.read_text(self.resolve_path(file_path, in_scoped_root))

    def read_image(self, file_path: str | Path, in_scoped_root: bool = True) -> Image.Image:
        return self._backend.read_image(self.resolve_path(file_path, in_scoped_root))

    def read_json(
        self, file_path: str | Path, auto_extension: bool = True, in_scoped_root: bool = True
    ) -> Any:
        """Parse a file as JSON of any shape. Adds ".json" unless ``auto_extension`` is off."""
        path = self._json_path(file_path, auto_extension)
        return json.loads(self.read_text(path, in_scoped_root))

    def read_json_object(
        self, file_path: str | Path, auto_extension: bool = True, in_scoped_root: bool = True
    ) -> dict[str, Any]:
        """Parse a file as a JSON object. Raises JsonShapeError for arrays, scalars and null."""
        data = self.read_json(file_path, auto_extension, in_scoped_root)
        if not isinstance(data, dict):
            raise JsonShapeError(json_type_name(data))
        return data

    # -- safe reads ---------------------------------------------------------

    async def read_bytes_safe(
        self, file_path: str | Path, in_scoped_root: bool = True
    ) -> StatusResult[bytes]:
        return await self._read_safe(
            file_path, lambda p: self.read_bytes(p, in_scoped_root), in_scoped_root
        )

    async def read_text_safe(
        self, file_path: str | Path, in_scoped_root: bool = True
    ) -> StatusResult[str]:
        return await self._read_safe(
            file_path, lambda p: self.read_text(p, in_scoped_root), in_scoped_root
        )

    async def read_image_safe(
        self, file_path: str | Path, in_scoped_root: bool = True
    ) -> StatusResult[Image.Image]:
        return await self._read_safe(
            file_path, lambda p: self.read_image(p, in_scoped_root), in_scoped_root
        )

    async def read_json_safe(
        self, file_path: str | Path, auto_extension: bool = True, in_scoped_root: bool = True
    ) -> StatusResult[Any]:
        path = self._json_path(file_path, auto_extension)
        return await self._read_safe(
            path, lambda p: self.read_json(p, False, in_scoped_root), in_scoped_root
        )

    async def read_json_object_safe(
        self, file_path: str | Path, auto_extension: bool = True, in_scoped_root: bool = True
    ) -> StatusResult[dict[str, Any]]:
        path = self._json_path(file_path, auto_extension)
        return await self._read_safe(
            path, lambda p: self.read_json_object(p, False, in_scoped_root), in_scoped_root
        )

    async def _read_safe(
        self, file_path: str | Path, reader: Callable[[str | Path], T], in_scoped_root: bool
    ) -> StatusResult[T]:
        """Existence check, then download if cloud-resident, then the raw read."""
        try:
            path = self.resolve_path(file_path, in_scoped_root)
        except SandboxError as e:
            logger.warning(str(e))
            return StatusResult.error()
        except (ValueError, OSError):
            logger.exception(f"Cannot resolve '{file_path}'")
            return StatusResult.error()

        try:
            if not self._backend.exists(path):
                logger.warning(f"File '{path}' does not exist.")
                return StatusResult.not_found()
            needs_download = self._backend.is_cloud_resident(path)
            needs_download = needs_download and not self._backend.is_downloaded(path)
        except Exception:
            logger.exception(f"Failed to inspect '{path}'")
            return StatusResult.error()

        if needs_download:
            await self._materialize(path)

        try:
            return StatusResult.ok(reader(file_path))
        except JsonShapeError as e:
            logger.warning(f"{path}: {e}")
            return StatusResult.error()
        except Exception:
            logger.exception(f"Failed to read '{path}'")
            return StatusResult.error()

    async def _materialize(self, path: Path) -> None:
        # A failed download is not reported here; the following read fails instead
        try:
            await asyncio.wait_for(self._backend.download(path), timeout=self._download_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out after {self._download_timeout}s downloading '{path}'")
        except Exception as e:
            logger.warning(f"Failed to download '{path}': {e}")

    # -- writes -------------------------------------------------------------

    def write(
        self,
        payload: Any,
        file_path: str | Path,
        kind: ContentKind = ContentKind.TEXT,
        in_scoped_root: bool = True,
    ) -> None:
        """Write ``payload`` to ``file_path`` plus the kind's extension.

        Bytes are written verbatim; everything else goes through serialize_payload.
        """
        kind = ContentKind(kind)
        name = with_extension(str(file_path), extension_for_kind(kind))
        path = self.resolve_path(name, in_scoped_root)

        if isinstance(payload, (bytes, bytearray)):
            self._backend.write_bytes(path, bytes(payload))
        else:
            self._backend.write_text(path, serialize_payload(payload, kind))

    def write_text(self, file_path: str | Path, content: str, in_scoped_root: bool = True) -> None:
        self._backend.write_text(self.resolve_path(file_path, in_scoped_root), content)

    def write_bytes(self, file_path: str | Path, content: bytes, in_scoped_root: bool = True) -> None:
        self._backend.write_bytes(self.resolve_path(file_path, in_scoped_root), content)

    def write_json(self, file_path: str | Path, content: Any, in_scoped_root: bool = True) -> None:
        path = with_extension(str(file_path), JSON_EXTENSION)
        self.write_text(path, serialize_payload(content, ContentKind.JSON), in_scoped_root)

    def write_image(
        self, file_path: str | Path, image: Image.Image, in_scoped_root: bool = True
    ) -> None:
        self._backend.write_image(self.resolve_path(file_path, in_scoped_root), image)

    # -- file management ----------------------------------------------------

    def copy(self, source: str | Path, destination: str | Path, in_scoped_root: bool = True) -> None:
        self._backend.copy(
            self.resolve_path(source, in_scoped_root),
            self.resolve_path(destination, in_scoped_root),
        )

    def move(self, source: str | Path, destination: str | Path, in_scoped_root: bool = True) -> None:
        self._backend.move(
            self.resolve_path(source, in_scoped_root),
            self.resolve_path(destination, in_scoped_root),
        )

    def remove(self, file_path: str | Path, in_scoped_root: bool = True) -> None:
        self._backend.remove(self.resolve_path(file_path, in_scoped_root))

    def create_directory(
        self, file_path: str | Path, recursive: bool = False, in_scoped_root: bool = True
    ) -> None:
        self._backend.create_directory(self.resolve_path(file_path, in_scoped_root), recursive)

    def list_contents(self, file_path: str | Path = "", in_scoped_root: bool = True) -> list[str]:
        return self._backend.list_contents(self.resolve_path(file_path, in_scoped_root))

    # -- metadata -----------------------------------------------------------

    def modification_date(self, file_path: str | Path, in_scoped_root: bool = True) -> datetime:
        return self._backend.modification_date(self.resolve_path(file_path, in_scoped_root))

    def creation_date(self, file_path: str | Path, in_scoped_root: bool = True) -> datetime:
        return self._backend.creation_date(self.resolve_path(file_path, in_scoped_root))

    def file_size(self, file_path: str | Path, in_scoped_root: bool = True) -> int:
        return self._backend.file_size(self.resolve_path(file_path, in_scoped_root))

    @staticmethod
    def file_name(file_path: str | Path, include_extension: bool = False) -> str:
        path = Path(file_path)
        return path.name if include_extension else path.stem

    @staticmethod
    def file_extension(file_path: str | Path) -> str:
        return Path(file_path).suffix.lstrip(".")

    @staticmethod
    def _json_path(file_path: str | Path, auto_extension: bool) -> str:
        path = str(file_path)
        return with_extension(path, JSON_EXTENSION) if auto_extension else path
