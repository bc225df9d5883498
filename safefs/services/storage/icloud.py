"""iCloud Drive storage backend.

macOS keeps every file under the iCloud Drive folder in the cloud. When a file
is evicted to free space, its bytes are replaced by a hidden placeholder named
``.<name>.icloud`` next to where the file used to be. ``brctl download`` asks
the sync daemon to bring the file back; the placeholder disappears once the
real file has been written.
"""

import asyncio
import logging
from pathlib import Path

from safefs.core.errors import DownloadError, StorageUnavailableError
from safefs.services.storage.local import LocalStorage

logger = logging.getLogger(__name__)

PLACEHOLDER_SUFFIX = ".icloud"


def placeholder_path(path: Path) -> Path:
    """Path of the placeholder iCloud leaves behind for an evicted file."""
    path = Path(path)
    return path.with_name(f".{path.name}{PLACEHOLDER_SUFFIX}")


def _real_name(entry: str) -> str:
    if entry.startswith(".") and entry.endswith(PLACEHOLDER_SUFFIX):
        return entry[1 : -len(PLACEHOLDER_SUFFIX)]
    return entry


class ICloudStorage(LocalStorage):
    """Storage backend rooted in the local iCloud Drive folder."""

    def __init__(
        self,
        icloud_dir: Path,
        brctl_path: str = "brctl",
        poll_interval: float = 0.25,
        timeout: float = 30.0,
    ):
        root = Path(icloud_dir).expanduser()
        if not root.is_dir():
            raise StorageUnavailableError(f"iCloud Drive folder not found: {root}")

        super().__init__(root)
        self._brctl_path = brctl_path
        self._poll_interval = poll_interval
        self._timeout = timeout

    def exists(self, path: Path) -> bool:
        path = Path(path)
        return path.exists() or placeholder_path(path).exists()

    def remove(self, path: Path) -> None:
        placeholder = placeholder_path(path)
        if not placeholder.exists() and not Path(path).exists():
            raise FileNotFoundError(f"File not found: {path}")
        if placeholder.exists():
            placeholder.unlink()
        if Path(path).exists():
            super().remove(path)

    def list_contents(self, path: Path) -> list[str]:
        return sorted({_real_name(name) for name in super().list_contents(path)})

    def is_cloud_resident(self, path: Path) -> bool:
        return Path(path).resolve().is_relative_to(self._documents_dir.resolve())

    def is_downloaded(self, path: Path) -> bool:
        path = Path(path)
        return path.exists() and not placeholder_path(path).exists()

    async def download(self, path: Path) -> None:
        path = Path(path)
        if self.is_downloaded(path):
            return
        if not self.exists(path):
            raise FileNotFoundError(f"File not found: {path}")

        logger.info(f"Downloading {path} from iCloud")
        try:
            proc = await asyncio.create_subprocess_exec(
                self._brctl_path,
                "download",
                str(path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise DownloadError(f"Cannot run {self._brctl_path}: {e}") from e

        try:
            _, stderr = await proc.communicate()
        except asyncio.CancelledError:
            # Reap brctl when the caller times out or cancels the download
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()
            raise

        if proc.returncode != 0:
            raise DownloadError(
                f"brctl download failed for {path} (exit {proc.returncode}): "
                f"{stderr.decode(errors='replace').strip()}"
            )

        try:
            await asyncio.wait_for(self._wait_until_downloaded(path), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise DownloadError(f"Timed out after {self._timeout}s waiting for {path}") from None

        logger.debug(f"ICloudStorage.download: {path} is local")

    async def _wait_until_downloaded(self, path: Path) -> None:
        while not self.is_downloaded(path):
            await asyncio.sleep(self._poll_interval)
