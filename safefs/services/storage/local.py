import io
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

from PIL import Image

from safefs.services.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class LocalStorage(StorageBackend):
    """Local filesystem storage backend. Nothing is ever cloud-resident."""

    def __init__(self, documents_dir: Path):
        self._documents_dir = Path(documents_dir).expanduser()
        self._documents_dir.mkdir(parents=True, exist_ok=True)

    def documents_directory(self) -> Path:
        return self._documents_dir

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def create_directory(self, path: Path, recursive: bool = False) -> None:
        Path(path).mkdir(parents=recursive)
        logger.debug(f"LocalStorage.create_directory: {path}")

    def read_bytes(self, path: Path) -> bytes:
        file_path = Path(path)
        if not file_path.is_file():
            if not file_path.exists():
                raise FileNotFoundError(f"File not found: {path}")
            raise IsADirectoryError(f"Not a file: {path}")

        content = file_path.read_bytes()
        logger.debug(f"LocalStorage.read_bytes: {path} ({len(content)} bytes)")
        return content

    def read_text(self, path: Path) -> str:
        content = self.read_bytes(path).decode("utf-8")
        logger.debug(f"LocalStorage.read_text: {path} ({len(content)} chars)")
        return content

    def read_image(self, path: Path) -> Image.Image:
        img = Image.open(io.BytesIO(self.read_bytes(path)))
        img.load()
        return img

    def write_text(self, path: Path, content: str) -> None:
        self.write_bytes(path, content.encode("utf-8"))

    def write_bytes(self, path: Path, content: bytes) -> None:
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        logger.debug(f"LocalStorage.write: {path} ({len(content)} bytes)")

    def write_image(self, path: Path, image: Image.Image) -> None:
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        # Pillow infers the format from the suffix; default to PNG without one
        image.save(file_path, format=None if file_path.suffix else "PNG")
        logger.debug(f"LocalStorage.write_image: {path} ({image.width}x{image.height})")

    def copy(self, source: Path, destination: Path) -> None:
        source, destination = Path(source), Path(destination)
        if destination.exists():
            raise FileExistsError(f"Destination already exists: {destination}")
        if source.is_dir():
            shutil.copytree(source, destination)
        else:
            shutil.copy2(source, destination)

    def move(self, source: Path, destination: Path) -> None:
        source, destination = Path(source), Path(destination)
        if not source.exists():
            raise FileNotFoundError(f"File not found: {source}")
        if destination.exists():
            _remove_path(destination)
        shutil.move(source, destination)

    def remove(self, path: Path) -> None:
        _remove_path(Path(path))
        logger.debug(f"LocalStorage.remove: {path}")

    def list_contents(self, path: Path) -> list[str]:
        return sorted(item.name for item in Path(path).iterdir())

    def is_cloud_resident(self, path: Path) -> bool:
        return False

    def is_downloaded(self, path: Path) -> bool:
        return Path(path).exists()

    async def download(self, path: Path) -> None:
        return None

    def modification_date(self, path: Path) -> datetime:
        return datetime.fromtimestamp(Path(path).stat().st_mtime, tz=timezone.utc)

    def creation_date(self, path: Path) -> datetime:
        stat = Path(path).stat()
        # st_birthtime only exists on macOS/BSD
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return datetime.fromtimestamp(created, tz=timezone.utc)

    def file_size(self, path: Path) -> int:
        return Path(path).stat().st_size
