from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "safefs"
    debug: bool = False

    # Paths
    documents_dir: Path = Path.home() / "Documents" / "safefs"
    icloud_dir: Path = Path.home() / "Library" / "Mobile Documents" / "com~apple~CloudDocs"

    # Storage
    storage_backend: str = "auto"  # auto | icloud | local

    # Cloud downloads
    download_timeout: float = 30.0
    download_poll_interval: float = 0.25
    brctl_path: str = "brctl"

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent.parent / ".env"),
        "env_prefix": "SAFEFS_",
    }


settings = Settings()
