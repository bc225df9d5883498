"""Content-kind keyed file access on top of ScopedFileAccessor."""

import logging
from datetime import datetime
from typing import Any

from safefs.models.content import (
    ContentKind,
    extension_for_kind,
    kind_for_extension,
    with_extension,
)
from safefs.models.result import StatusResult
from safefs.services.accessor import ScopedFileAccessor
from safefs.services.storage import StorageBackend

logger = logging.getLogger(__name__)


class TypedFileManager:
    """Reads and writes ``<file>.<ext>`` where the extension follows the content kind.

    ``in_config_root`` selects between the manager's own directory (default) and
    the backend's documents directory.
    """

    extension_for_kind = staticmethod(extension_for_kind)
    kind_for_extension = staticmethod(kind_for_extension)

    def __init__(
        self,
        base_dir: str,
        file_stub: str | None = None,
        backend: StorageBackend | None = None,
        accessor: ScopedFileAccessor | None = None,
    ):
        self.base_dir = base_dir
        self.file_stub = file_stub
        self._files = accessor if accessor is not None else ScopedFileAccessor(base_dir, backend)

    @property
    def files(self) -> ScopedFileAccessor:
        return self._files

    @staticmethod
    def path_for(file: str, kind: ContentKind = ContentKind.TEXT) -> str:
        return with_extension(file, extension_for_kind(kind))

    async def read(
        self, file: str, kind: ContentKind = ContentKind.TEXT, in_config_root: bool = True
    ) -> StatusResult[Any]:
        kind = ContentKind(kind)
        path = self.path_for(file, kind)

        if kind == ContentKind.JSON:
            return await self._files.read_json_safe(path, auto_extension=False, in_scoped_root=in_config_root)
        if kind == ContentKind.JSON_OBJECT:
            return await self._files.read_json_object_safe(
                path, auto_extension=False, in_scoped_root=in_config_root
            )
        return await self._files.read_text_safe(path, in_scoped_root=in_config_root)

    def write(
        self,
        payload: Any,
        file: str | None = None,
        kind: ContentKind = ContentKind.TEXT,
        in_config_root: bool = True,
    ) -> None:
        file = file or self.file_stub
        if not file:
            raise ValueError("No file name given and no default file stub configured")
        self._files.write(payload, file, kind, in_scoped_root=in_config_root)
        logger.debug(f"Wrote {self.path_for(file, kind)} ({ContentKind(kind).name})")

    def exists(self, file: str, in_config_root: bool = True) -> bool:
        return self._files.exists(file, in_config_root)

    def copy(self, source: str, destination: str, in_config_root: bool = True) -> None:
        self._files.copy(source, destination, in_config_root)

    def remove(self, file: str, in_config_root: bool = True) -> None:
        self._files.remove(file, in_config_root)

    def modification_date(self, file: str, in_config_root: bool = True) -> datetime:
        return self._files.modification_date(file, in_config_root)

    def list_contents(self, directory: str = "", in_config_root: bool = True) -> list[str]:
        return self._files.list_contents(directory, in_config_root)
